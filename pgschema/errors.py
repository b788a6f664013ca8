"""Error types raised by schema reconciliation."""


class SchemaResourceError(Exception):
    """Base class for all errors raised by pgschema."""


class DatabaseConnectionError(SchemaResourceError):
    """A database connection could not be obtained."""


class ValidationError(SchemaResourceError):
    """A desired attribute value was rejected before any SQL was sent."""

    def __init__(self, message: str, attribute: str | None = None) -> None:
        super().__init__(message)
        self.attribute = attribute


class ExecutionError(SchemaResourceError):
    """A SQL statement failed.

    The driver error is kept as ``__cause__``; ``action`` and ``attribute``
    say what was being applied when it failed.
    """

    def __init__(
        self,
        message: str,
        action: str,
        attribute: str | None = None,
        sql: str | None = None,
    ) -> None:
        super().__init__(message)
        self.action = action
        self.attribute = attribute
        self.sql = sql
