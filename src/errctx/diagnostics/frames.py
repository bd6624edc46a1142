"""Call-stack introspection for error context capture.

Frames are reduced to lightweight tokens (code object, line, module name)
at capture time so a captured stack never keeps frame locals alive.
"""

import inspect
import logging
import os
from itertools import islice
from types import CodeType, FrameType
from typing import Iterator, List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

INITIAL_STACK_SIZE = 64
MAX_STACK_DEPTH = 1024  # Hard cap for pathological recursion

UNKNOWN = "unknown"


class FrameToken(NamedTuple):
    """Identifies one captured frame."""
    code: CodeType
    lineno: int
    module: str

    @property
    def function(self) -> str:
        """Fully-qualified function symbol, "<module>.<qualname>"."""
        qualname = getattr(self.code, "co_qualname", self.code.co_name)
        return f"{self.module}.{qualname}"


class CallerInfo(NamedTuple):
    """Result of a single caller lookup."""
    token: Optional[FrameToken]
    file: str
    line: int
    found: bool


class ResolvedFrame(NamedTuple):
    """A frame token resolved to printable location data."""
    function: str
    file: str
    line: int


def _token(frame: FrameType) -> FrameToken:
    return FrameToken(
        code=frame.f_code,
        lineno=frame.f_lineno,
        module=frame.f_globals.get("__name__", UNKNOWN),
    )


def _frame_at(skip: int) -> Optional[FrameType]:
    """Frame ``skip`` levels above the caller of the public lookup function."""
    frame = inspect.currentframe()
    # Step over this helper and the public function that called it
    for _ in range(skip + 2):
        if frame is None:
            return None
        frame = frame.f_back
    return frame


def _walk(frame: Optional[FrameType]) -> Iterator[FrameType]:
    while frame is not None:
        yield frame
        frame = frame.f_back


def caller(skip: int = 0) -> CallerInfo:
    """Look up one frame of the current call stack.

    Args:
        skip: Frames to skip; 0 is the function calling ``caller``

    Returns:
        CallerInfo with ``found=False`` and "unknown"/0 when the stack is
        shallower than ``skip`` or frames are unavailable
    """
    frame = _frame_at(skip)
    if frame is None:
        logger.debug(f"No caller frame at skip depth {skip}")
        return CallerInfo(token=None, file=UNKNOWN, line=0, found=False)
    return CallerInfo(
        token=_token(frame),
        file=frame.f_code.co_filename,
        line=frame.f_lineno,
        found=True,
    )


def capture(skip: int, limit: int) -> Tuple[FrameToken, ...]:
    """Capture at most ``limit`` frame tokens, innermost first.

    Args:
        skip: Frames to skip; 0 starts at the function calling ``capture``
        limit: Maximum number of frames to take
    """
    frame = _frame_at(skip)
    return tuple(_token(f) for f in islice(_walk(frame), limit))


def capture_stack(skip: int = 0) -> Tuple[FrameToken, ...]:
    """Capture the call stack with a buffer that doubles until it stops filling.

    Starts at INITIAL_STACK_SIZE frames and never exceeds MAX_STACK_DEPTH.
    """
    size = INITIAL_STACK_SIZE
    tokens = capture(skip + 1, size)
    while len(tokens) == size and size < MAX_STACK_DEPTH:
        size *= 2
        tokens = capture(skip + 1, size)
    return tokens[:MAX_STACK_DEPTH]


def resolve(tokens: Tuple[FrameToken, ...]) -> List[ResolvedFrame]:
    """Resolve frame tokens to (function, file, line) triples."""
    return [
        ResolvedFrame(function=token.function, file=token.code.co_filename, line=token.lineno)
        for token in tokens
    ]


def split_symbol(symbol: str) -> Tuple[str, str]:
    """Split "<package>.<func>" at its last dot.

    Returns:
        (package_name, func_name); package is "unknown" when there is no dot
    """
    package_name, dot, func_name = symbol.rpartition(".")
    if not dot:
        return UNKNOWN, symbol
    return package_name, func_name


def base_name(path: str) -> str:
    return os.path.basename(path) if path != UNKNOWN else path
