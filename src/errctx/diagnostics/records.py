"""Single-line record codec for error context transport in logs.

A record is one row of pipe-delimited CSV with exactly five fields:
message, file, line, func, package. Delimiters, quotes and newlines inside
a field are quoted the usual CSV way so field boundaries survive.
"""

import csv
import io
import logging
import re
from typing import NamedTuple

logger = logging.getLogger(__name__)

RECORD_DELIMITER = "|"
RECORD_FIELD_COUNT = 5

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


class NotErrorContext(ValueError):
    """Raised when a string cannot be decoded as an error context record."""

    def __init__(self, message: str = "value is not an error context record"):
        super().__init__(message)


class RecordDialect(csv.Dialect):
    """Pipe-delimited CSV with minimal quoting and doubled embedded quotes."""
    delimiter = RECORD_DELIMITER
    quotechar = '"'
    doublequote = True
    skipinitialspace = False
    lineterminator = "\r\n"
    quoting = csv.QUOTE_MINIMAL
    strict = True


class RecordFields(NamedTuple):
    """Decoded fields of one record."""
    message: str
    file: str
    line: int
    func: str
    package: str


def encode_record(message: str, file: str, line: int, func: str, package: str) -> str:
    """Encode the five context fields as one record line, trailing whitespace trimmed."""
    buf = io.StringIO()
    csv.writer(buf, dialect=RecordDialect).writerow([message, file, str(line), func, package])
    return buf.getvalue().rstrip()


def decode_record(record: str) -> RecordFields:
    """Decode one record line.

    Only the first CSV row is read; anything after it is ignored.

    Args:
        record: Encoded record

    Returns:
        RecordFields

    Raises:
        NotErrorContext: On a malformed row, a field count other than five,
            or a line field that is not a decimal integer
    """
    try:
        row = next(csv.reader(io.StringIO(record), dialect=RecordDialect), None)
    except csv.Error as e:
        logger.debug(f"Rejected record with malformed quoting: {e}")
        raise NotErrorContext() from e

    if row is None or len(row) != RECORD_FIELD_COUNT:
        logger.debug(f"Rejected record with {0 if row is None else len(row)} fields")
        raise NotErrorContext()

    message, file, line, func, package = row
    if not _DECIMAL_RE.fullmatch(line):
        logger.debug(f"Rejected record with non-numeric line {line!r}")
        raise NotErrorContext()

    return RecordFields(message=message, file=file, line=int(line), func=func, package=package)

