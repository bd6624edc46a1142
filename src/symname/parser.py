"""Core parser for fully-qualified runtime function identifiers.

Names are read right to left in the order they are assembled by the
runtime symbolizer:

    a/b/c.A
    a/b/c.A.func1
    a/b/c.A.B.func2
    a/b/c.(*C).X
    a/b/c.C.Y
    a/b/c.Z[T].X
    a/b/c.X[T]

function generics, function name, receiver, receiver generics and finally
the package path. The grammar is heuristic; malformed input yields a
partially filled result instead of an exception.
"""

from typing import Any, Dict, Optional

from .constants import (
    ANONYMOUS_SUFFIX_RE,
    DEFAULT_CONFIG,
    NOTICE_ANONYMOUS,
    NOTICE_EMBEDDED_CALLER,
    WARNING_BAD_RECEIVER,
    WARNING_TOO_LONG,
    WARNING_UNMATCHED_BRACKET,
)
from .models import NoticeKind, ParsedSymbol
from .utils import find_matching_open, is_anonymous_func_name, is_import_host_pattern


class SymbolParser:
    """Decomposes qualified symbol names into a ParsedSymbol."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize parser with configuration.

        Args:
            config: Parser configuration dict, uses DEFAULT_CONFIG if None
        """
        self.config = {**DEFAULT_CONFIG, **(config or {})}

    def parse(self, full_name: str) -> ParsedSymbol:
        """Parse a fully-qualified function identifier.

        Args:
            full_name: Name such as "github.com/x/y.(*File[int]).Read[string]"

        Returns:
            ParsedSymbol; fields that could not be determined stay empty
        """
        result = ParsedSymbol()

        limit = self.config['max_length']
        if len(full_name) > limit:
            self._abort(result, WARNING_TOO_LONG.format(limit=limit))
            return result

        sep_idx = full_name.rfind("/")
        rest = full_name

        # Function generics
        if rest.endswith("]"):
            left = find_matching_open(rest, "[", "]")
            if left < 0:
                self._abort(result, WARNING_UNMATCHED_BRACKET.format(part="function"))
                return result
            result.func_generic_args = rest[left + 1:-1]
            rest = rest[:left]

        # Function name
        func_dot = rest.rfind(".")
        if func_dot < 0:
            result.func_name = rest
            return result

        func_name = rest[func_dot + 1:]
        if is_anonymous_func_name(func_name):
            func_dot = rest.rfind(".", 0, func_dot)
            if func_dot < 0:
                result.func_name = rest
                return result
            func_name = ANONYMOUS_SUFFIX_RE.sub("", rest[func_dot + 1:])
            result.add_notice(NoticeKind.ANONYMOUS_CLOSURE, NOTICE_ANONYMOUS)
        result.func_name = func_name

        # Receiver, possibly wrapped as "(*T)"
        head = rest[:func_dot]
        receiver = head
        has_paren = False
        if head.endswith(")"):
            left = find_matching_open(head, "(", ")")
            if left < 1 or head[left - 1] != ".":
                self._abort(result, WARNING_BAD_RECEIVER)
                return result
            receiver = head[left + 1:-1]
            result.package_path = self._strip_paren_caller(head[:left - 1], result)
            has_paren = True

        # Receiver generics
        if receiver.endswith("]"):
            left = find_matching_open(receiver, "[", "]")
            if left < 0:
                self._abort(result, WARNING_UNMATCHED_BRACKET.format(part="type"))
                return result
            result.type_generic_args = receiver[left + 1:-1]
            receiver = receiver[:left]

        if not has_paren:
            receiver = self._split_package(receiver, sep_idx, result)
            if receiver is None:
                return result

        if receiver.startswith("*"):
            result.receiver_is_pointer = True
            receiver = receiver[1:]
        result.qualifier = receiver

        return result

    def _split_package(self, text: str, sep_idx: int, result: ParsedSymbol) -> Optional[str]:
        """Split "pkg/path.Recv" into package path and receiver text.

        Returns:
            The receiver text, or None when ``text`` is all package path
        """
        dot_idx = text.rfind(".")
        if dot_idx < 0:
            result.package_path = text
            return None

        if dot_idx < sep_idx:
            # Generic arguments may carry their own qualified names, so the
            # last '/' of the full name can sit inside them.
            if "/" in result.type_generic_args:
                sep_idx = text.rfind("/")
            if dot_idx < sep_idx:
                result.package_path = text
                return None

        package_path = text[:dot_idx]
        receiver = text[dot_idx + 1:]

        if "." in package_path:
            parts = package_path.split(".")
            if len(parts) == 2 and not is_import_host_pattern(package_path):
                calling_func = parts[1]
                package_path = parts[0]
                receiver = calling_func
                result.add_notice(
                    NoticeKind.EMBEDDED_CALLING_FUNCTION,
                    NOTICE_EMBEDDED_CALLER.format(name=calling_func),
                )

        result.package_path = package_path
        return receiver

    def _strip_paren_caller(self, package_path: str, result: ParsedSymbol) -> str:
        """Drop a calling-function name the symbolizer glued onto the package path.

        "mod/app.Run" before "(*T)" means T is local to Run. "a/b.1" is left
        alone: a segment that is not an identifier cannot name a function.
        """
        if "/" not in package_path:
            return package_path

        last_segment = package_path[package_path.rfind("/") + 1:]
        if "." not in last_segment:
            return package_path

        parts = package_path.split(".")
        if len(parts) == 2 and parts[1].isidentifier():
            calling_func = parts[1]
            result.add_notice(
                NoticeKind.EMBEDDED_CALLING_FUNCTION,
                NOTICE_EMBEDDED_CALLER.format(name=calling_func),
            )
            return parts[0]

        return package_path

    def _abort(self, result: ParsedSymbol, reason: str) -> None:
        if self.config.get('strict_mode', False):
            result.warnings.append(reason)


def parse_symbol(full_name: str, config: Optional[Dict[str, Any]] = None) -> ParsedSymbol:
    """Convenience function to parse a symbol name with a one-off parser."""
    return SymbolParser(config).parse(full_name)
