"""pgschema - Declarative PostgreSQL schema management."""

from .db import ConnectionConfig, PsycopgConnectionProvider, Schema
from .errors import (
    DatabaseConnectionError,
    ExecutionError,
    SchemaResourceError,
    ValidationError,
)
from .reconciler import SchemaReconciler
from .resource import SchemaResource
from .statements import (
    Action,
    Statement,
    alter_schema_owner,
    create_schema,
    drop_schema,
    plan_update,
    quote_identifier,
    rename_schema,
)

__all__ = [
    "ConnectionConfig",
    "PsycopgConnectionProvider",
    "Schema",
    "DatabaseConnectionError",
    "ExecutionError",
    "SchemaResourceError",
    "ValidationError",
    "SchemaReconciler",
    "SchemaResource",
    "Action",
    "Statement",
    "alter_schema_owner",
    "create_schema",
    "drop_schema",
    "plan_update",
    "quote_identifier",
    "rename_schema",
]
