"""Schema dataclass and catalog queries for PostgreSQL namespaces."""

from dataclasses import dataclass

import psycopg


@dataclass(frozen=True)
class Schema:
    """A schema as recorded in pg_catalog.pg_namespace."""

    schema_name: str
    schema_owner: str

    @property
    def key(self) -> str:
        """Identity of the schema resource."""
        return self.schema_name

    def __str__(self) -> str:
        return f"Schema({self.schema_name})"


QUERY = """
SELECT
    nspname,
    pg_catalog.pg_get_userbyid(nspowner)
FROM pg_catalog.pg_namespace
WHERE nspname = %s
"""

LIST_QUERY = """
SELECT
    nspname,
    pg_catalog.pg_get_userbyid(nspowner)
FROM pg_catalog.pg_namespace
WHERE nspname <> 'information_schema'
  AND nspname NOT LIKE 'pg\\_%'
ORDER BY nspname
"""


def fetch_schema(conn: psycopg.Connection, name: str) -> Schema | None:
    """Fetch one schema by name, or None when it does not exist."""
    with conn.cursor() as cur:
        cur.execute(QUERY, (name,))
        row = cur.fetchone()
    if row is None:
        return None
    return Schema(schema_name=row[0], schema_owner=row[1])


def fetch_schemas(conn: psycopg.Connection) -> dict[str, Schema]:
    """Fetch all user schemas from the database."""
    schemas = {}
    with conn.cursor() as cur:
        cur.execute(LIST_QUERY)
        for row in cur.fetchall():
            schema = Schema(
                schema_name=row[0],
                schema_owner=row[1],
            )
            schemas[schema.key] = schema
    return schemas


def fetch_current_user(conn: psycopg.Connection) -> str:
    """Return the role the connection is authenticated as."""
    with conn.cursor() as cur:
        cur.execute("SELECT current_user")
        row = cur.fetchone()
        return row[0] if row else ""
