"""Create, read, update and delete PostgreSQL schemas from resource records.

Each entry point opens its own connection through the provider and closes
it before returning. Mutating operations always finish with a read, so the
recorded state reflects what the catalog reports rather than what was
requested.
"""

import logging

import psycopg
from psycopg import sql

from .db.connection import ConnectionProvider
from .db.schemas import fetch_schema
from .errors import ExecutionError
from .resource import NAME_ATTR, OWNER_ATTR, ResourceData
from .statements import Statement, create_schema, drop_schema, plan_update

logger = logging.getLogger(__name__)

_UPDATE_ERRORS = {
    NAME_ATTR: "Error updating schema NAME",
    OWNER_ATTR: "Error updating schema OWNER",
}


def _execute(conn: psycopg.Connection, statement: Statement, context: str) -> None:
    """Run one statement, wrapping driver failures in ExecutionError."""
    logger.debug("Executing: %s", statement.sql)
    try:
        with conn.cursor() as cur:
            cur.execute(sql.SQL(statement.sql))
    except psycopg.Error as e:
        raise ExecutionError(
            f"{context}: {e}",
            action=statement.action.value,
            attribute=statement.attribute,
            sql=statement.sql,
        ) from e


class SchemaReconciler:
    """Converges a schema resource record with the database."""

    def __init__(self, provider: ConnectionProvider) -> None:
        self.provider = provider

    def create(self, resource: ResourceData) -> None:
        name = resource.get(NAME_ATTR)
        owner, has_owner = resource.get_ok(OWNER_ATTR)
        statement = create_schema(name, owner if has_owner else None)

        with self.provider.connect() as conn:
            _execute(conn, statement, f"Error creating schema {name}")

        logger.info("Created schema %s", name)
        resource.set_id(name)
        self.read(resource)

    def read(self, resource: ResourceData) -> None:
        """Refresh the record from the catalog.

        A schema that no longer exists is not an error: the identity is
        cleared so the host treats the resource as gone.
        """
        schema_id = resource.id
        with self.provider.connect() as conn:
            try:
                schema = fetch_schema(conn, schema_id)
            except psycopg.Error as e:
                raise ExecutionError(
                    f"Error reading schema: {e}", action="read", attribute=None
                ) from e

        if schema is None:
            logger.warning("PostgreSQL schema (%s) not found", schema_id)
            resource.set_id("")
            return

        resource.set(NAME_ATTR, schema.schema_name)
        resource.set(OWNER_ATTR, schema.schema_owner)
        resource.set_id(schema.schema_name)

    def update(self, resource: ResourceData) -> None:
        statements = self.plan(resource)

        if statements:
            with self.provider.connect() as conn:
                for statement in statements:
                    _execute(conn, statement, _UPDATE_ERRORS[statement.attribute])
                    logger.info("Applied: %s", statement.description)
                    if statement.attribute == NAME_ATTR:
                        new_name = resource.get(NAME_ATTR)
                        resource.set(NAME_ATTR, new_name)
                        resource.set_id(new_name)
        else:
            logger.debug("Schema %s is up to date", resource.id)

        self.read(resource)

    def delete(self, resource: ResourceData) -> None:
        """Drop the schema; the record keeps its identity if the drop fails."""
        name = resource.get(NAME_ATTR)
        statement = drop_schema(name)

        with self.provider.connect() as conn:
            _execute(conn, statement, "Error deleting schema")

        logger.info("Dropped schema %s", name)
        resource.set_id("")

    def import_(self, resource: ResourceData, identity: str) -> None:
        """Adopt an existing schema by name and read its attributes."""
        resource.set_id(identity)
        self.read(resource)

    def plan(self, resource: ResourceData) -> list[Statement]:
        """Statements an update would run, without touching the database."""
        return plan_update(resource)
