"""Connection configuration and per-call connection provider."""

import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field
from typing import Protocol

import psycopg
from psycopg.conninfo import make_conninfo

from ..errors import DatabaseConnectionError

logger = logging.getLogger(__name__)

ENV_VARS = ("PGSCHEMA_DATABASE_URL", "DATABASE_URL")


@dataclass(frozen=True)
class ConnectionConfig:
    """Settings used to open a PostgreSQL connection.

    Explicit fields override whatever the DSN says. Anything left unset is
    resolved by libpq itself (PGHOST, PGUSER, PGPASSWORD, ~/.pgpass, ...).
    The password only ever comes from the DSN or from libpq.
    """

    dsn: str = field(default="", repr=False)
    host: str = ""
    port: int | None = None
    database: str = ""
    username: str = ""
    sslmode: str = ""
    connect_timeout: int | None = None
    application_name: str = "pgschema"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ConnectionConfig":
        """Build a config from the first DSN variable that is set."""
        env = os.environ if environ is None else environ
        for name in ENV_VARS:
            if env.get(name):
                return cls(dsn=env[name])
        return cls()

    def conninfo(self) -> str:
        """Return the libpq connection string for this config."""
        params = {
            "host": self.host,
            "port": self.port,
            "dbname": self.database,
            "user": self.username,
            "sslmode": self.sslmode,
            "connect_timeout": self.connect_timeout,
            "application_name": self.application_name,
        }
        return make_conninfo(
            self.dsn, **{k: v for k, v in params.items() if v not in (None, "")}
        )


class ConnectionProvider(Protocol):
    """Supplies one live connection per operation."""

    def connect(self) -> AbstractContextManager[psycopg.Connection]: ...


class PsycopgConnectionProvider:
    """Opens a fresh autocommit connection for every call to ``connect``."""

    def __init__(self, config: ConnectionConfig) -> None:
        self.config = config

    @contextmanager
    def connect(self) -> Iterator[psycopg.Connection]:
        try:
            conn = psycopg.connect(self.config.conninfo(), autocommit=True)
        except (psycopg.OperationalError, psycopg.InterfaceError) as e:
            raise DatabaseConnectionError(f"Error connecting to PostgreSQL: {e}") from e
        logger.debug("Opened connection")
        try:
            yield conn
        finally:
            conn.close()
            logger.debug("Closed connection")
