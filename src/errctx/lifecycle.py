"""Resource helpers that log instead of raising."""

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Protocol

logger = logging.getLogger(__name__)


class Closeable(Protocol):
    def close(self) -> None: ...


def close_with_log(closeable: Closeable, service_name: str) -> bool:
    """Close ``closeable``, logging any failure instead of raising it.

    Args:
        closeable: Object with a close() method
        service_name: Name used in the log entry

    Returns:
        True if close() succeeded
    """
    try:
        closeable.close()
    except Exception as e:
        logger.error(f"Error closing resource {service_name}: {e}",
                     extra={"service_name": service_name, "error_type": type(e).__name__})
        return False
    return True


@contextmanager
def log_since(msg: str) -> Iterator[None]:
    """Log the time spent inside the block at INFO level.

    Example:
        with log_since("loaded index in"):
            load_index()
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.info(f"{msg} {elapsed:.3f}s", extra={"elapsed_seconds": elapsed})
