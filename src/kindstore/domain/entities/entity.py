"""Entity - backend-native record of a document."""

from dataclasses import dataclass, field

from kindstore.domain.entities.key import Key


@dataclass
class Entity:
    """Flat typed property bag stored under a key."""

    key: Key
    properties: dict[str, object] = field(default_factory=dict)

    @property
    def kind(self) -> str:
        return self.key.kind

    @property
    def name(self) -> str:
        return self.key.name
