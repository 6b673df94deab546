"""Unit tests for EntityCodec."""

from datetime import UTC, datetime
from enum import Enum

import pytest

from kindstore.application.codec import EntityCodec
from kindstore.domain.entities import OBJECT_ID, Key
from kindstore.domain.exceptions import InvalidIdentifier, UnsupportedType
from kindstore.domain.value_objects import LargeText

PARENT = Key(kind="parentKind", name="parentKeyName")


class Color(Enum):
    RED = "red"


class TestToEntity:
    """Tests for document -> entity mapping."""

    def test_keys_entity_by_identifier_under_parent(self, codec: EntityCodec) -> None:
        entity = codec.to_entity({OBJECT_ID: "42", "title": "x"}, "articles", PARENT)
        assert entity.key == Key(kind="articles", name="42", parent=PARENT)
        assert entity.properties == {OBJECT_ID: "42", "title": "x"}

    @pytest.mark.parametrize("oid", [None, "", 42])
    def test_invalid_identifier(self, codec: EntityCodec, oid: object) -> None:
        document = {"title": "x"} if oid is None else {OBJECT_ID: oid}
        with pytest.raises(InvalidIdentifier):
            codec.to_entity(document, "articles")

    @pytest.mark.parametrize("value", [None, [1, 2], {"a": 1}, Color.RED, {1}, LargeText("abc")])
    def test_unsupported_type(self, codec: EntityCodec, value: object) -> None:
        with pytest.raises(UnsupportedType) as exc_info:
            codec.to_entity({OBJECT_ID: "1", "field": value}, "articles")
        assert exc_info.value.key == "field"

    def test_string_at_threshold_stays_plain(self) -> None:
        codec = EntityCodec(max_string_length=10)
        assert codec.max_string_length == 10
        entity = codec.to_entity({OBJECT_ID: "1", "body": "a" * 10}, "articles")
        assert entity.properties["body"] == "a" * 10

    def test_string_over_threshold_becomes_large_text(self) -> None:
        codec = EntityCodec(max_string_length=10)
        entity = codec.to_entity({OBJECT_ID: "1", "body": "a" * 11}, "articles")
        assert entity.properties["body"] == LargeText("a" * 11)

    def test_long_identifier_stays_plain_string(self) -> None:
        codec = EntityCodec(max_string_length=10)
        oid = "k" * 11
        entity = codec.to_entity({OBJECT_ID: oid, "body": "a" * 11}, "articles")
        assert type(entity.properties[OBJECT_ID]) is str
        assert entity.properties["body"] == LargeText("a" * 11)

    def test_rejects_non_positive_threshold(self) -> None:
        with pytest.raises(ValueError):
            EntityCodec(max_string_length=0)


class TestToDocument:
    """Tests for entity -> document mapping."""

    def test_round_trip_all_supported_types(self, codec: EntityCodec) -> None:
        document = {
            OBJECT_ID: "1",
            "title": "Hello",
            "count": 3,
            "ratio": 0.5,
            "published": True,
            "created": datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC),
            "local": datetime(2024, 1, 2, 3, 4, 5),
            "blob": b"\x00\x01",
        }
        assert codec.to_document(codec.to_entity(document, "articles", PARENT)) == document

    def test_round_trip_unwraps_large_text(self) -> None:
        codec = EntityCodec(max_string_length=5)
        document = {OBJECT_ID: "1", "body": "abcdef"}
        restored = codec.to_document(codec.to_entity(document, "articles"))
        assert restored == document
        assert type(restored["body"]) is str

    def test_identifier_filled_from_key_name(self, codec: EntityCodec) -> None:
        entity = codec.to_entity({OBJECT_ID: "7"}, "articles")
        del entity.properties[OBJECT_ID]
        assert codec.to_document(entity) == {OBJECT_ID: "7"}
