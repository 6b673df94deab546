"""Entity key - kind, name and optional parent."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Key:
    """Backend key of an entity, scoped under an optional parent key."""

    kind: str
    name: str
    parent: Key | None = None

    def path(self) -> tuple[str, ...]:
        """Flat ancestry path (parent kind/name pairs first)."""
        prefix = self.parent.path() if self.parent else ()
        return prefix + (self.kind, self.name)
