"""Shared test fixtures for pytest.

Provides an in-memory stand-in for a PostgreSQL server that understands the
handful of statements pgschema sends, plus a provider handing out
connections to it.
"""

import re
from contextlib import contextmanager
from typing import Any

import psycopg
import pytest
from psycopg.sql import Composable

from pgschema.errors import DatabaseConnectionError

IDENT = r'"((?:[^"]|"")*)"'


def _unquote(value: str) -> str:
    return value.replace('""', '"')


class FakeDatabase:
    """Tracks schemas and owners, and records every statement received."""

    def __init__(self, current_user: str = "postgres") -> None:
        self.current_user = current_user
        self.roles = {current_user, "alice", "bob"}
        self.schemas: dict[str, str] = {}
        self.dependents: set[str] = set()
        self.statements: list[str] = []
        self.queries: list[Any] = []
        self.fail_on: str | None = None

    @property
    def ddl(self) -> list[str]:
        """Statements that were not catalog reads."""
        return [s for s in self.statements if not s.lstrip().startswith("SELECT")]

    def execute(self, sql: str, params: Any = None) -> list[tuple]:
        self.statements.append(sql)
        if self.fail_on and self.fail_on in sql:
            raise psycopg.errors.InsufficientPrivilege("permission denied")

        if m := re.fullmatch(rf"CREATE SCHEMA {IDENT}(?: AUTHORIZATION {IDENT})?", sql):
            name = _unquote(m.group(1))
            owner = _unquote(m.group(2)) if m.group(2) is not None else self.current_user
            if name in self.schemas:
                raise psycopg.errors.DuplicateSchema(f'schema "{name}" already exists')
            self._check_role(owner)
            self.schemas[name] = owner
            return []

        if m := re.fullmatch(rf"ALTER SCHEMA {IDENT} RENAME TO {IDENT}", sql):
            old, new = _unquote(m.group(1)), _unquote(m.group(2))
            self._check_schema(old)
            if new in self.schemas:
                raise psycopg.errors.DuplicateSchema(f'schema "{new}" already exists')
            self.schemas[new] = self.schemas.pop(old)
            return []

        if m := re.fullmatch(rf"ALTER SCHEMA {IDENT} OWNER TO {IDENT}", sql):
            name, owner = _unquote(m.group(1)), _unquote(m.group(2))
            self._check_schema(name)
            self._check_role(owner)
            self.schemas[name] = owner
            return []

        if m := re.fullmatch(rf"DROP SCHEMA {IDENT}", sql):
            name = _unquote(m.group(1))
            self._check_schema(name)
            if name in self.dependents:
                raise psycopg.errors.DependentObjectsStillExist(
                    f"cannot drop schema {name} because other objects depend on it"
                )
            del self.schemas[name]
            return []

        if "FROM pg_catalog.pg_namespace" in sql and params:
            name = params[0]
            return [(name, self.schemas[name])] if name in self.schemas else []

        if "FROM pg_catalog.pg_namespace" in sql:
            return sorted(self.schemas.items())

        if sql == "SELECT current_user":
            return [(self.current_user,)]

        raise psycopg.errors.SyntaxError(f"unexpected statement: {sql}")

    def _check_schema(self, name: str) -> None:
        if name not in self.schemas:
            raise psycopg.errors.InvalidSchemaName(f'schema "{name}" does not exist')

    def _check_role(self, role: str) -> None:
        if role not in self.roles:
            raise psycopg.errors.UndefinedObject(f'role "{role}" does not exist')


class FakeCursor:
    def __init__(self, db: FakeDatabase) -> None:
        self.db = db
        self.rows: list[tuple] = []

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, *exc: Any) -> None:
        return None

    def execute(self, query: Any, params: Any = None) -> None:
        self.db.queries.append(query)
        if isinstance(query, Composable):
            query = query.as_string(None)
        self.rows = self.db.execute(query, params)

    def fetchone(self) -> tuple | None:
        return self.rows[0] if self.rows else None

    def fetchall(self) -> list[tuple]:
        return list(self.rows)


class FakeConnection:
    def __init__(self, db: FakeDatabase) -> None:
        self.db = db
        self.closed = False

    def cursor(self) -> FakeCursor:
        return FakeCursor(self.db)

    def close(self) -> None:
        self.closed = True


class FakeProvider:
    """Hands out one fake connection per call and remembers them all."""

    def __init__(self, db: FakeDatabase) -> None:
        self.db = db
        self.connections: list[FakeConnection] = []
        self.connect_error: str | None = None

    @contextmanager
    def connect(self):
        if self.connect_error:
            raise DatabaseConnectionError(
                f"Error connecting to PostgreSQL: {self.connect_error}"
            )
        conn = FakeConnection(self.db)
        self.connections.append(conn)
        try:
            yield conn
        finally:
            conn.close()


@pytest.fixture
def fake_db() -> FakeDatabase:
    """An empty fake server connected as role 'postgres'."""
    return FakeDatabase()


@pytest.fixture
def provider(fake_db: FakeDatabase) -> FakeProvider:
    return FakeProvider(fake_db)
