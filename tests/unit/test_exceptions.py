"""Unit tests for domain exceptions."""

import pytest

from kindstore.domain.exceptions import (
    CacheConfigurationError,
    InvalidIdentifier,
    InvalidPageNumber,
    InvalidPageSize,
    KindstoreError,
    NotFound,
    PersistenceFailure,
    RepositoryNotWritable,
    UnsupportedOperator,
    UnsupportedSortDirection,
    UnsupportedType,
    ValidationError,
)


@pytest.mark.parametrize(
    "error_type",
    [
        CacheConfigurationError,
        InvalidIdentifier,
        InvalidPageNumber,
        InvalidPageSize,
        NotFound,
        PersistenceFailure,
        RepositoryNotWritable,
        UnsupportedOperator,
        UnsupportedSortDirection,
        UnsupportedType,
        ValidationError,
    ],
)
def test_inherits_kindstore_error(error_type: type) -> None:
    assert issubclass(error_type, KindstoreError)


def test_unsupported_type_message() -> None:
    error = UnsupportedType("tags", ["a"])
    assert error.key == "tags"
    assert error.value_type is list
    assert str(error) == "Unsupported type [list] for property [tags]"


def test_not_found_message() -> None:
    assert str(NotFound("Repository", "users")) == "Repository [users] not found"


def test_persistence_failure_carries_context() -> None:
    cause = ConnectionError("refused")
    error = PersistenceFailure("add", "articles", cause)
    assert error.operation == "add"
    assert error.repository == "articles"
    assert str(error) == "Repository [articles] failed to add: refused"


def test_raise_unsupported_operator_catchable_as_kindstore_error() -> None:
    with pytest.raises(KindstoreError, match="LIKE"):
        raise UnsupportedOperator("LIKE")
