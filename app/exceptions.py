from typing import Any, Iterable, List, Mapping, Optional


class DatabaseError(Exception):
    """Base error for everything raised by the persistence layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (statement, params, ids)
        code: machine-readable error code
    """

    default_code = "DATABASE_ERROR"

    def __init__(
        self,
        message: str = "Database error",
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class NotInitializedError(DatabaseError):
    """Raised when an operation runs before the connection has been initialized."""

    default_code = "NOT_INITIALIZED"

    def __init__(self, message: str = "Database not initialized. Call initialize() first."):
        super().__init__(message)


class ConnectionFailedError(DatabaseError):
    """Raised when the database file cannot be opened or configured."""

    default_code = "CONNECTION_FAILED"


class ServiceValidationError(DatabaseError):
    """Raised when an entity breaks one or more invariants.

    Every violation is kept in ``errors``; ``message`` is the joined list so
    callers can show it inline without unpacking.
    """

    default_code = "VALIDATION_ERROR"

    def __init__(self, entity: str, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__(
            f"{entity} validation failed: {', '.join(self.errors)}",
            details={"errors": self.errors},
        )


class NotFoundError(DatabaseError):
    """Raised when an update or delete targets an id that does not exist."""

    default_code = "NOT_FOUND"


class _StatementError(DatabaseError):
    """Storage engine rejected a statement; keeps the statement for diagnostics."""

    def __init__(self, message: str, statement: str, params: Optional[Mapping[str, Any]] = None):
        self.statement = statement
        self.params = dict(params or {})
        super().__init__(
            message, details={"statement": statement, "params": self.params}
        )


class QueryFailedError(_StatementError):
    """Raised when a read statement fails."""

    default_code = "QUERY_FAILED"


class WriteFailedError(_StatementError):
    """Raised when a mutating statement fails."""

    default_code = "WRITE_FAILED"


class MigrationError(DatabaseError):
    """Raised when a migration's up/down fails or the migration list is inconsistent."""

    default_code = "MIGRATION_FAILED"

    def __init__(
        self,
        message: str,
        version: Optional[int] = None,
        migration_name: Optional[str] = None,
        code: Optional[str] = None,
    ):
        self.version = version
        self.migration_name = migration_name
        details = None
        if version is not None:
            details = {"version": version, "name": migration_name}
        super().__init__(message, details=details, code=code)


class SeedError(DatabaseError):
    """Raised when sample data could not be written completely."""

    default_code = "SEED_FAILED"
