"""Query criteria - filters and sort specs."""

from dataclasses import dataclass
from typing import Any

from kindstore.domain.value_objects.filter_operator import FilterOperator
from kindstore.domain.value_objects.sort_direction import SortDirection


@dataclass(frozen=True)
class Filter:
    """Single (key, operator, value) condition.

    The operator is not checked here; compilation rejects anything that is
    not a FilterOperator.
    """

    key: str
    operator: FilterOperator | str
    value: Any


@dataclass(frozen=True)
class SortSpec:
    """Ordering on one property."""

    key: str
    direction: SortDirection | str = SortDirection.ASCENDING
