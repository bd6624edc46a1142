"""Constants and configuration for symbol name parsing.

Notice texts, closure-label patterns and default parser settings are
centralized here so the parser and its tests agree on them.
"""

import re
from typing import Any, Dict

# Synthetic closure labels produced by the runtime symbolizer: "func1", "func12"
ANONYMOUS_LABEL_RE = re.compile(r"func[0-9]+")

# A closure label embedded inside a longer name: "Outer.func1"
ANONYMOUS_INFIX_RE = re.compile(r"\.func[0-9]+")

# Trailing closure label left over after re-splitting: "Inner.func1" -> "Inner"
ANONYMOUS_SUFFIX_RE = re.compile(r"\.func[0-9]+$")

# Characters allowed in a domain label of an import host
DOMAIN_LABEL_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789-"
)

# Shortest string that can be "a.b/"
MIN_IMPORT_HOST_LENGTH = 4

NOTICE_SEPARATOR = "; "
NOTICE_ANONYMOUS = "anonymous function"
NOTICE_EMBEDDED_CALLER = "qualifier is an embedded calling function: {name}"

WARNING_UNMATCHED_BRACKET = "unmatched ']' in {part} generic arguments"
WARNING_BAD_RECEIVER = "malformed parenthesized receiver"
WARNING_TOO_LONG = "symbol name longer than {limit} characters was not parsed"

DEFAULT_CONFIG: Dict[str, Any] = {
    'strict_mode': False,       # Record abort reasons as warnings
    'max_length': 4096,         # Longer names are left unparsed
}
