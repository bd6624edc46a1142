"""Utility functions for symbol name parsing.

Bracket matching and the small classifiers the parser uses to tell
closure labels and import hosts apart from ordinary name segments.
"""

from .constants import (
    ANONYMOUS_INFIX_RE,
    ANONYMOUS_LABEL_RE,
    DOMAIN_LABEL_CHARS,
    MIN_IMPORT_HOST_LENGTH,
)


def find_matching_open(text: str, open_char: str, close_char: str) -> int:
    """Find the opener matching the closer that ends ``text``.

    Args:
        text: String whose last character is ``close_char``
        open_char: Opening bracket, e.g. '['
        close_char: Closing bracket, e.g. ']'

    Returns:
        Index of the matching opener, or -1 if it is unbalanced
    """
    depth = 0
    for idx in range(len(text) - 1, -1, -1):
        char = text[idx]
        if char == close_char:
            depth += 1
        elif char == open_char:
            depth -= 1
            if depth == 0:
                return idx
    return -1


def is_anonymous_func_name(name: str) -> bool:
    """Check whether a name segment is a synthetic closure label.

    Matches "func" followed by digits, or any name carrying a ".funcN" infix.
    """
    if ANONYMOUS_INFIX_RE.search(name):
        return True
    return ANONYMOUS_LABEL_RE.fullmatch(name) is not None


def is_valid_domain(domain: str) -> bool:
    """Check whether ``domain`` looks like a DNS name with at least two labels."""
    labels = domain.split(".")
    if len(labels) < 2:
        return False

    for label in labels:
        if not label:
            return False
        if any(char not in DOMAIN_LABEL_CHARS for char in label):
            return False
        if label[0] == "-" or label[-1] == "-":
            return False

    return True


def is_import_host_pattern(path: str) -> bool:
    """Check whether ``path`` starts with a DNS-style import host.

    "github.com/x/y" is an import path whose dots belong to the host, not
    an embedded function name.

    Args:
        path: Candidate package path

    Returns:
        True if the prefix before the first '/' is a valid domain
    """
    if len(path) < MIN_IMPORT_HOST_LENGTH:
        return False

    slash = path.find("/")
    if slash == -1:
        return False

    return is_valid_domain(path[:slash])
