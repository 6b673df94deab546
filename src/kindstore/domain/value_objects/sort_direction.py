"""Sort direction for repository queries."""

from enum import StrEnum


class SortDirection(StrEnum):
    """Ordering applied to a sorted property."""

    ASCENDING = "ASCENDING"
    DESCENDING = "DESCENDING"
