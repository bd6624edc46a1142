"""Error wrapping with call-site context and an optional captured stack.

An ErrorContext records where an error was wrapped (file, line, function,
package) and can render itself in several formats or as a one-line record
for log transport. ``from_record`` rebuilds the call-site fields from such a
record; the original exception type and the stack do not survive.
"""

import json
import logging
import threading
from typing import Any, Iterator, Mapping, Optional, Tuple, Type, TypeVar

from errctx.config import CaptureConfig, ErrctxConfig, load_config
from errctx.diagnostics import frames
from errctx.diagnostics.error_collection import ErrorCollection
from errctx.diagnostics.records import NotErrorContext, decode_record, encode_record

logger = logging.getLogger(__name__)

NIL_MESSAGE = "<nil>"
LOG_FIELD_KEYS = ("err", "error", "error_meta")

_configured_capture: Optional[CaptureConfig] = None
_configure_lock = threading.Lock()

E = TypeVar("E", bound=BaseException)


class ErrorContext(Exception):
    """An error wrapped with the context of the place it was wrapped.

    Attributes:
        wrapped: Underlying exception (may be None), also set as __cause__
        source_file: Base name of the wrapping call's source file
        source_line: Line of the wrapping call
        func_name: Function containing the wrapping call
        package_name: Module (and enclosing qualname) of that function
        captured_stack: Frame tokens, innermost first; empty if not captured
        compact: Format as a record regardless of the format spec
    """

    def __init__(
        self,
        wrapped: Optional[BaseException],
        source_file: str = frames.UNKNOWN,
        source_line: int = 0,
        func_name: str = frames.UNKNOWN,
        package_name: str = frames.UNKNOWN,
        captured_stack: Tuple[frames.FrameToken, ...] = (),
        compact: bool = False,
    ):
        super().__init__(wrapped)
        self.wrapped = wrapped
        self.__cause__ = wrapped
        self.source_file = source_file
        self.source_line = source_line
        self.func_name = func_name
        self.package_name = package_name
        self.captured_stack = captured_stack
        self.compact = compact
        self._stack_trace: Optional[str] = None
        self._stack_lock = threading.Lock()

    def message(self) -> str:
        """Message of the wrapped error, "<nil>" when there is none."""
        if self.wrapped is None:
            return NIL_MESSAGE
        return str(self.wrapped)

    def __str__(self) -> str:
        return self.message()

    def __repr__(self) -> str:
        return (
            f"ErrorContext({self.wrapped!r}, "
            f"at={self.source_file}:{self.source_line}, func={self.func_name!r})"
        )

    def __reduce__(self):
        # Frame tokens hold code objects and the memo holds a lock; ship the
        # rendered trace instead.
        args = (
            self.wrapped,
            self.source_file,
            self.source_line,
            self.func_name,
            self.package_name,
            (),
            self.compact,
        )
        return (self.__class__, args, {"_stack_trace": self.stack_trace() or None})

    def stack_trace(self) -> str:
        """Captured stack as "\\n<function>\\n\\t<file>:<line>" per frame.

        Rendered on first use and cached.
        """
        if self._stack_trace is not None:
            return self._stack_trace
        if not self.captured_stack:
            return ""
        with self._stack_lock:
            if self._stack_trace is None:
                self._stack_trace = "".join(
                    f"\n{frame.function}\n\t{frame.file}:{frame.line}"
                    for frame in frames.resolve(self.captured_stack)
                )
            return self._stack_trace

    def render(self, verb: str = "s", verbose: bool = False) -> str:
        """Render the error.

        Verbs:
            ""       message only
            "s", "v" message followed by "at file:line (func) [package: pkg]"
            "q"      the same with the message quoted and escaped
        ``verbose`` with "v" appends the stack trace. In compact mode the
        record is returned whatever the verb. Unknown verbs render the
        message only.
        """
        if self.compact:
            return self.to_record()

        message = self.message()
        if verb not in ("s", "v", "q"):
            return message

        if verb == "q":
            message = json.dumps(message, ensure_ascii=False)

        located = (
            f"{message}\n\tat {self.source_file}:{self.source_line} "
            f"({self.func_name}) [package: {self.package_name}]"
        )
        if verb == "v" and verbose:
            return located + self.stack_trace()
        return located

    def __format__(self, format_spec: str) -> str:
        verbose = format_spec.startswith("+")
        return self.render(format_spec.lstrip("+"), verbose=verbose)

    def to_record(self) -> str:
        """Encode message, file, line, func and package as one record line."""
        return encode_record(
            self.message(), self.source_file, self.source_line, self.func_name, self.package_name
        )

    @classmethod
    def from_record(cls, record: str) -> "ErrorContext":
        """Rebuild an ErrorContext from a record.

        The result wraps a plain Exception carrying the message; the original
        exception type and stack trace are not recoverable.

        Raises:
            NotErrorContext: If ``record`` is not a valid record
        """
        fields = decode_record(record)
        return cls(
            Exception(fields.message),
            source_file=fields.file,
            source_line=fields.line,
            func_name=fields.func,
            package_name=fields.package,
        )

    def unwrap(self) -> Optional[BaseException]:
        return self.wrapped


def configure(config: Optional[ErrctxConfig] = None) -> CaptureConfig:
    """Set the capture defaults ``wrap`` uses when called without a config.

    Args:
        config: Configuration to apply; loaded with ``load_config`` when None

    Returns:
        The capture settings now in effect, with the mode applied

    Raises:
        ValueError: If the configuration file is invalid
    """
    global _configured_capture
    if config is None:
        config = load_config()
    capture = config.effective_capture()
    with _configure_lock:
        _configured_capture = capture
    logger.debug(
        f"Capture defaults set for {config.mode.value} mode: "
        f"stack={capture.capture_stack} compact={capture.compact_records} skip={capture.skip}"
    )
    return capture


def default_capture() -> CaptureConfig:
    """Capture defaults in effect, loading .errctx.json on first use.

    An invalid configuration file is logged and the built-in defaults are
    used, so wrapping an error never fails because of it.
    """
    global _configured_capture
    with _configure_lock:
        if _configured_capture is not None:
            return _configured_capture
    try:
        return configure()
    except ValueError as e:
        logger.warning(f"Ignoring errctx configuration: {e}")
        with _configure_lock:
            _configured_capture = CaptureConfig()
            return _configured_capture


def wrap(
    error: Optional[BaseException],
    skip: Optional[int] = None,
    capture_stack: Optional[bool] = None,
    compact: Optional[bool] = None,
    config: Optional[CaptureConfig] = None,
) -> ErrorContext:
    """Wrap ``error`` with the context of the calling function.

    An ErrorContext is returned unchanged, so the deepest call site is kept.

    Args:
        error: Exception to wrap, may be None
        skip: Frames to skip above the caller of ``wrap``
        capture_stack: Capture the call stack as well
        compact: Format as a record
        config: Defaults for the options left as None, else the
            configured defaults (see ``configure``)

    Returns:
        ErrorContext
    """
    if isinstance(error, ErrorContext):
        return error

    config = config or default_capture()
    skip = config.skip if skip is None else skip
    capture_stack = config.capture_stack if capture_stack is None else capture_stack
    compact = config.compact_records if compact is None else compact

    info = frames.caller(skip + 1)
    package_name, func_name = frames.UNKNOWN, frames.UNKNOWN
    if info.token is not None:
        package_name, func_name = frames.split_symbol(info.token.function)

    stack: Tuple[frames.FrameToken, ...] = ()
    if capture_stack:
        stack = frames.capture_stack(skip + 1)

    return ErrorContext(
        error,
        source_file=frames.base_name(info.file),
        source_line=info.line,
        func_name=func_name,
        package_name=package_name,
        captured_stack=stack,
        compact=compact,
    )


def errorf(fmt: str, *args: Any) -> ErrorContext:
    """Build an Exception from a %-style message and wrap it at the caller.

    Arguments that do not fit ``fmt`` are appended as their repr.
    """
    message = fmt
    if args:
        try:
            message = fmt % args
        except (TypeError, ValueError):
            message = f"{fmt} {args!r}"
    return wrap(Exception(message), skip=1)


def from_record(record: str) -> ErrorContext:
    """Module-level alias of ErrorContext.from_record."""
    return ErrorContext.from_record(record)


def log_fields(error: Optional[BaseException], skip: int = 0) -> dict:
    """Structured fields for ``logger.error(..., extra=log_fields(err))``.

    ``error`` is wrapped at the caller unless it already carries context.
    """
    ctx = wrap(error, skip=skip + 1)
    return {
        "error_meta": ctx.to_record(),
        "file_meta": ctx.source_file,
        "line_meta": ctx.source_line,
        "func_meta": ctx.func_name,
    }


def from_log_fields(fields: Mapping[str, Any]) -> ErrorContext:
    """Rebuild an ErrorContext from a parsed structured log entry.

    Looks for the record under "err", "error" and "error_meta", in that order.

    Raises:
        NotErrorContext: If no key is present, the value is not a string, or
            it is not a valid record
    """
    for key in LOG_FIELD_KEYS:
        if key in fields:
            value = fields[key]
            break
    else:
        raise NotErrorContext("log entry has no error field")

    if not isinstance(value, str):
        raise NotErrorContext(f"log field {key!r} is not a string")

    return ErrorContext.from_record(value)


def unwrap(error: Optional[BaseException]) -> Optional[BaseException]:
    """One layer down: the wrapped error of an ErrorContext, else __cause__."""
    if error is None:
        return None
    if isinstance(error, ErrorContext):
        return error.wrapped
    return error.__cause__


def root_cause(error: Optional[BaseException]) -> Optional[BaseException]:
    """Unwrap until no further layer exists.

    Returns:
        The innermost error, or None for None
    """
    seen = set()
    while error is not None:
        seen.add(id(error))
        inner = unwrap(error)
        if inner is None or id(inner) in seen:
            return error
        error = inner
    return None


def walk_chain(error: Optional[BaseException]) -> Iterator[BaseException]:
    """Yield ``error`` and everything reachable by unwrapping, depth first.

    ErrorCollection members are each followed in insertion order.
    """
    stack = [error]
    seen = set()
    while stack:
        current = stack.pop()
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        if isinstance(current, ErrorCollection):
            stack.extend(reversed(current.unwrap()))
        else:
            stack.append(unwrap(current))


def is_error(error: Optional[BaseException], target: BaseException) -> bool:
    """True if ``target`` is ``error`` or anywhere in its chain."""
    return any(item is target for item in walk_chain(error))


def as_error(error: Optional[BaseException], error_type: Type[E]) -> Optional[E]:
    """First error in the chain that is an instance of ``error_type``."""
    for item in walk_chain(error):
        if isinstance(item, error_type):
            return item
    return None
