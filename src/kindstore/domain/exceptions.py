"""Domain exceptions."""


class KindstoreError(Exception):
    """Base exception for kindstore."""

    pass


class UnsupportedType(KindstoreError):
    """Document field value is not one of the supported property types."""

    def __init__(self, key: str, value: object) -> None:
        self.key = key
        self.value_type = type(value)
        super().__init__(
            f"Unsupported type [{self.value_type.__name__}] for property [{key}]"
        )


class InvalidIdentifier(KindstoreError):
    """Object identifier is missing or is not a non-empty string."""

    pass


class UnsupportedOperator(KindstoreError):
    """Filter operator is not one of the supported comparison operators."""

    def __init__(self, operator: object) -> None:
        self.operator = operator
        super().__init__(f"Unsupported filter operator [{operator}]")


class UnsupportedSortDirection(KindstoreError):
    """Sort direction is neither ascending nor descending."""

    def __init__(self, direction: object) -> None:
        self.direction = direction
        super().__init__(f"Unsupported sort direction [{direction}]")


class InvalidPageNumber(KindstoreError):
    """Page number is lower than 1."""

    pass


class InvalidPageSize(KindstoreError):
    """Page size is lower than 1."""

    pass


class RepositoryNotWritable(KindstoreError):
    """Write attempted on a repository switched to read-only."""

    pass


class NotFound(KindstoreError):
    """Requested resource was not found."""

    def __init__(self, resource: str, identifier: str) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} [{identifier}] not found")


class PersistenceFailure(KindstoreError):
    """Backend entity store failed while serving a repository operation."""

    def __init__(self, operation: str, repository: str, cause: BaseException) -> None:
        self.operation = operation
        self.repository = repository
        super().__init__(
            f"Repository [{repository}] failed to {operation}: {cause}"
        )


class CacheConfigurationError(KindstoreError):
    """Cache backend is unknown or misconfigured."""

    pass


class ValidationError(KindstoreError):
    """Validation failed for input data."""

    pass
