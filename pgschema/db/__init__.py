"""Database access submodule for pgschema."""

from .connection import ConnectionConfig, ConnectionProvider, PsycopgConnectionProvider
from .schemas import Schema, fetch_current_user, fetch_schema, fetch_schemas

__all__ = [
    "ConnectionConfig",
    "ConnectionProvider",
    "PsycopgConnectionProvider",
    "Schema",
    "fetch_current_user",
    "fetch_schema",
    "fetch_schemas",
]
