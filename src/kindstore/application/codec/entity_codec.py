"""Entity codec - document to entity mapping and back."""

from kindstore.domain.entities import OBJECT_ID, SUPPORTED_TYPES, Document, Entity, Key
from kindstore.domain.exceptions import InvalidIdentifier, UnsupportedType
from kindstore.domain.value_objects import LargeText

DEFAULT_MAX_STRING_LENGTH = 500


class EntityCodec:
    """Maps flat documents onto typed entity properties.

    Values must be exactly one of the supported types (subclasses such as
    enum members are rejected). LargeText is a storage type and is rejected
    in documents too. A string longer than max_string_length is stored as
    LargeText and unwrapped again on the way back, so
    to_document(to_entity(d)) == d for every supported document.

    The identifier is never promoted: it stays an indexed string so lookups
    by identifier match however long it is.
    """

    def __init__(self, max_string_length: int = DEFAULT_MAX_STRING_LENGTH) -> None:
        if max_string_length < 1:
            raise ValueError("max_string_length must be positive")
        self._max_string_length = max_string_length

    @property
    def max_string_length(self) -> int:
        return self._max_string_length

    def to_entity(self, document: Document, kind: str, parent: Key | None = None) -> Entity:
        """Build the entity for a document carrying its identifier."""
        oid = document.get(OBJECT_ID)
        if type(oid) is not str or not oid:
            raise InvalidIdentifier(
                f"Document identifier [{OBJECT_ID}] must be a non-empty string, got {oid!r}"
            )

        properties: dict[str, object] = {}
        for key, value in document.items():
            if type(value) not in SUPPORTED_TYPES:
                raise UnsupportedType(key, value)
            if key != OBJECT_ID and type(value) is str and len(value) > self._max_string_length:
                properties[key] = LargeText(value)
            else:
                properties[key] = value

        return Entity(key=Key(kind=kind, name=oid, parent=parent), properties=properties)

    def to_document(self, entity: Entity) -> Document:
        """Decode entity properties; the parent scope is never exposed."""
        document: Document = {}
        for key, value in entity.properties.items():
            if isinstance(value, LargeText):
                document[key] = value.value
            else:
                document[key] = value
        document.setdefault(OBJECT_ID, entity.key.name)
        return document
