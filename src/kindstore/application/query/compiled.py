"""Compiled query plan handed to entity stores."""

from dataclasses import dataclass, field, replace
from typing import Any

from kindstore.domain.entities import Key

EQ = "="
NE = "!="
GT = ">"
GE = ">="
LT = "<"
LE = "<="

STORE_OPERATORS = (EQ, NE, GT, GE, LT, LE)


@dataclass(frozen=True)
class FilterClause:
    """Store-native filter: key, operator token, value."""

    key: str
    op: str
    value: Any


@dataclass(frozen=True)
class SortClause:
    """Store-native ordering on one key."""

    key: str
    descending: bool = False


@dataclass(frozen=True)
class CompiledQuery:
    """Kind-scoped query: filter clauses (ANDed) then sort clauses, in order."""

    kind: str
    parent: Key | None = None
    filters: tuple[FilterClause, ...] = field(default_factory=tuple)
    sorts: tuple[SortClause, ...] = field(default_factory=tuple)

    def with_sorts(self, *clauses: SortClause) -> "CompiledQuery":
        return replace(self, sorts=self.sorts + clauses)
