"""Data models for parsed symbol names using only Python stdlib."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List

from .constants import NOTICE_SEPARATOR


class NoticeKind(str, Enum):
    """Structured tags for the advisory notices attached to a parse."""
    ANONYMOUS_CLOSURE = "anonymous_closure"
    EMBEDDED_CALLING_FUNCTION = "embedded_calling_function"


@dataclass
class ParsedSymbol:
    """Components of a fully-qualified runtime function identifier.

    ``qualifier`` is either the receiver type or, when the symbolizer folded
    the enclosing function into the name, that calling function. Which one it
    is can only be told from the notices.
    """
    package_path: str = ""
    qualifier: str = ""
    receiver_is_pointer: bool = False
    type_generic_args: str = ""         # Raw text, may hold qualified names
    func_generic_args: str = ""         # Raw text
    func_name: str = ""
    notice: str = ""
    notice_kinds: List[NoticeKind] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_anonymous(self) -> bool:
        return NoticeKind.ANONYMOUS_CLOSURE in self.notice_kinds

    @property
    def has_embedded_caller(self) -> bool:
        return NoticeKind.EMBEDDED_CALLING_FUNCTION in self.notice_kinds

    def add_notice(self, kind: NoticeKind, text: str) -> None:
        """Append a notice, keeping the text and the structured tags in step."""
        self.notice_kinds.append(kind)
        self.notice = NOTICE_SEPARATOR.join(filter(None, (self.notice, text)))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["notice_kinds"] = [kind.value for kind in self.notice_kinds]
        return data
