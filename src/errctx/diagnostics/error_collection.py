"""Aggregation of several errors into one raisable exception."""

import logging
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)

SEPARATOR = "; "


class ErrorCollection(Exception):
    """Collects errors in insertion order and renders them as one message."""

    def __init__(self, *errors: Optional[BaseException]):
        super().__init__()
        self.errors: List[BaseException] = []
        for error in errors:
            self.append(error)

    def append(self, error: Optional[BaseException]) -> None:
        """Append an error; None is skipped."""
        if error is None:
            logger.debug("Skipped None appended to ErrorCollection")
            return
        self.errors.append(error)

    def error(self) -> str:
        """Messages of all collected errors joined with "; "."""
        return SEPARATOR.join(str(error) for error in self.errors)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def or_nil(self) -> Optional["ErrorCollection"]:
        """This collection if it holds any error, otherwise None."""
        return self if self.errors else None

    def unwrap(self) -> List[BaseException]:
        """Collected errors, for chain-walking consumers."""
        return list(self.errors)

    def __str__(self) -> str:
        return self.error()

    def __repr__(self) -> str:
        return f"ErrorCollection({self.errors!r})"

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)


def append_error(
    error: Optional[BaseException], *errors: Optional[BaseException]
) -> Optional[ErrorCollection]:
    """Append ``errors`` to ``error``, promoting it to an ErrorCollection.

    Args:
        error: Existing error or collection, may be None
        errors: Errors to add

    Returns:
        None when nothing was given, otherwise a collection (``error``
        itself when it already is one)
    """
    if error is None and not errors:
        return None

    if isinstance(error, ErrorCollection):
        collection = error
    else:
        collection = ErrorCollection(error)

    for item in errors:
        collection.append(item)

    return collection
