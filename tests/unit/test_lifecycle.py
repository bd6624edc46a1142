"""Unit tests for logging resource helpers."""

import logging

from errctx.lifecycle import close_with_log, log_since


class _Resource:
    def __init__(self, fail=False):
        self.fail = fail
        self.closed = False

    def close(self):
        if self.fail:
            raise OSError("socket already closed")
        self.closed = True


class TestCloseWithLog:
    """Test close_with_log."""

    def test_close_success(self, caplog):
        resource = _Resource()
        with caplog.at_level(logging.ERROR, logger="errctx.lifecycle"):
            assert close_with_log(resource, "cache") is True
        assert resource.closed is True
        assert caplog.records == []

    def test_close_failure_is_logged(self, caplog):
        with caplog.at_level(logging.ERROR, logger="errctx.lifecycle"):
            assert close_with_log(_Resource(fail=True), "cache") is False

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.ERROR
        assert "cache" in record.getMessage()
        assert record.service_name == "cache"
        assert record.error_type == "OSError"


class TestLogSince:
    """Test log_since."""

    def test_logs_elapsed_time(self, caplog):
        with caplog.at_level(logging.INFO, logger="errctx.lifecycle"):
            with log_since("loaded index in"):
                pass

        assert len(caplog.records) == 1
        assert caplog.records[0].getMessage().startswith("loaded index in ")
        assert caplog.records[0].elapsed_seconds >= 0
