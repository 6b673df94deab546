"""Query compiler - filters and sort specs to a store-native query plan."""

from collections.abc import Iterable, Mapping

from kindstore.application.query.compiled import (
    EQ,
    GE,
    GT,
    LE,
    LT,
    NE,
    CompiledQuery,
    FilterClause,
    SortClause,
)
from kindstore.domain.entities import Key
from kindstore.domain.exceptions import UnsupportedOperator, UnsupportedSortDirection
from kindstore.domain.value_objects import Filter, FilterOperator, SortDirection, SortSpec

_OPERATORS: dict[FilterOperator, str] = {
    FilterOperator.EQUAL: EQ,
    FilterOperator.NOT_EQUAL: NE,
    FilterOperator.GREATER_THAN: GT,
    FilterOperator.GREATER_THAN_OR_EQUAL: GE,
    FilterOperator.LESS_THAN: LT,
    FilterOperator.LESS_THAN_OR_EQUAL: LE,
}

Sorts = Iterable[SortSpec] | Mapping[str, SortDirection | str]


def resolve_operator(operator: object) -> str:
    """Store token for a FilterOperator (or its string value)."""
    try:
        return _OPERATORS[FilterOperator(operator)]
    except (ValueError, KeyError):
        raise UnsupportedOperator(operator) from None


def resolve_direction(direction: object) -> bool:
    """True for descending, False for ascending."""
    try:
        return SortDirection(direction) is SortDirection.DESCENDING
    except ValueError:
        raise UnsupportedSortDirection(direction) from None


def sort_specs(sorts: Sorts | None) -> list[SortSpec]:
    if not sorts:
        return []
    if isinstance(sorts, Mapping):
        return [SortSpec(key, direction) for key, direction in sorts.items()]
    return list(sorts)


class QueryCompiler:
    """Stateless compiler; safe to share between threads."""

    def compile(
        self,
        kind: str,
        filters: Iterable[Filter] | None = None,
        sorts: Sorts | None = None,
        parent: Key | None = None,
    ) -> CompiledQuery:
        """Compile filters (in order) followed by sorts (in order).

        Keys and value types are not checked against stored data; a mismatch
        surfaces when the store runs the query.
        """
        filter_clauses = tuple(
            FilterClause(f.key, resolve_operator(f.operator), f.value) for f in filters or ()
        )
        sort_clauses = tuple(
            SortClause(s.key, resolve_direction(s.direction)) for s in sort_specs(sorts)
        )
        return CompiledQuery(
            kind=kind,
            parent=parent,
            filters=filter_clauses,
            sorts=sort_clauses,
        )
