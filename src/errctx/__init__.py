"""errctx - Error context capture and qualified symbol diagnostics.

errctx wraps errors with the call site they were raised through, renders
them in several formats, and moves them through logs as one-line records
that can be decoded again later.
"""

__version__ = "0.1.0"
__author__ = "errctx contributors"
__description__ = "Error context capture and qualified symbol diagnostics"

from errctx.config import ErrctxConfig
from errctx.diagnostics import (
    ErrorCollection,
    ErrorContext,
    NotErrorContext,
    configure,
    errorf,
    from_record,
    root_cause,
    wrap,
)

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "ErrctxConfig",
    "ErrorCollection",
    "ErrorContext",
    "NotErrorContext",
    "configure",
    "errorf",
    "from_record",
    "root_cause",
    "wrap",
]
