"""Identifier generator port."""

from typing import Protocol


class IdGenerator(Protocol):
    """Produces unique, time-ordered string identifiers."""

    def __call__(self) -> str: ...
