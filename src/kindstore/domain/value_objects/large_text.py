"""Large text value for strings over the plain property length limit."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LargeText:
    """Unindexed text property value.

    Stores never filter or sort on large text, so a string promoted to this
    type drops out of queries on its key.
    """

    value: str

    def __len__(self) -> int:
        return len(self.value)

    def __str__(self) -> str:
        return self.value
