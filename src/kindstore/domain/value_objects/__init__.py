"""Domain value objects."""

from kindstore.domain.value_objects.criteria import Filter, SortSpec
from kindstore.domain.value_objects.filter_operator import FilterOperator
from kindstore.domain.value_objects.large_text import LargeText
from kindstore.domain.value_objects.sort_direction import SortDirection

__all__ = [
    "Filter",
    "FilterOperator",
    "LargeText",
    "SortDirection",
    "SortSpec",
]
