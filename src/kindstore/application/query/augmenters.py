"""Query augmenters shipped with kindstore."""

from kindstore.application.query.compiled import CompiledQuery, SortClause
from kindstore.application.query.compiler import Sorts, resolve_direction, sort_specs


class DefaultSort:
    """Applies a default ordering to paged queries the caller left unsorted."""

    def __init__(self, sorts: Sorts) -> None:
        self._clauses = tuple(
            SortClause(s.key, resolve_direction(s.direction)) for s in sort_specs(sorts)
        )

    def augment(self, query: CompiledQuery) -> CompiledQuery:
        if query.sorts:
            return query
        return query.with_sorts(*self._clauses)
