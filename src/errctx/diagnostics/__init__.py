"""Error context capture and record transport for errctx.

Wraps errors with the location they were wrapped at, renders them for
humans, and encodes them as single-line records for log pipelines.
"""

from .error_collection import ErrorCollection, append_error
from .error_context import (
    ErrorContext,
    as_error,
    configure,
    default_capture,
    errorf,
    from_log_fields,
    from_record,
    is_error,
    log_fields,
    root_cause,
    unwrap,
    walk_chain,
    wrap,
)
from .frames import MAX_STACK_DEPTH, INITIAL_STACK_SIZE
from .records import NotErrorContext, RecordFields, decode_record, encode_record

__all__ = [
    "ErrorCollection",
    "ErrorContext",
    "NotErrorContext",
    "RecordFields",
    "append_error",
    "as_error",
    "configure",
    "default_capture",
    "decode_record",
    "encode_record",
    "errorf",
    "from_log_fields",
    "from_record",
    "is_error",
    "log_fields",
    "root_cause",
    "unwrap",
    "walk_chain",
    "wrap",
    "INITIAL_STACK_SIZE",
    "MAX_STACK_DEPTH",
]
