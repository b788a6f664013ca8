"""DDL statement construction for schema resources.

Every function here is pure: it only formats SQL text, it never talks to
the database. Identifiers are always quoted, so mixed-case names, reserved
words and names containing double quotes survive unchanged.
"""

from dataclasses import dataclass
from enum import Enum

from .errors import ValidationError
from .resource import NAME_ATTR, OWNER_ATTR, ResourceData


class Action(Enum):
    """Kind of change a statement applies."""

    CREATE = "create"
    RENAME = "rename"
    OWNER = "owner"
    DROP = "drop"


@dataclass(frozen=True)
class Statement:
    """A single DDL statement and what it changes."""

    action: Action
    sql: str
    attribute: str | None = None
    description: str = ""

    def __str__(self) -> str:
        return self.sql


def quote_identifier(name: str) -> str:
    """Quote an identifier the way PostgreSQL expects.

    Embedded double quotes are doubled. Anything after a NUL character is
    dropped; the statement builders reject such names before quoting.
    """
    end = name.find("\x00")
    if end > -1:
        name = name[:end]
    return '"' + name.replace('"', '""') + '"'


def _reject_nul(value: str, attribute: str) -> None:
    if "\x00" in value:
        raise ValidationError(
            f"Error setting schema {attribute}: {value!r} contains a NUL character",
            attribute,
        )


def create_schema(name: str, owner: str | None = None) -> Statement:
    """CREATE SCHEMA, with AUTHORIZATION only when an owner was given."""
    if not name:
        raise ValidationError("Error creating schema with an empty name", NAME_ATTR)
    _reject_nul(name, NAME_ATTR)
    sql = f"CREATE SCHEMA {quote_identifier(name)}"
    if owner:
        _reject_nul(owner, OWNER_ATTR)
        sql += f" AUTHORIZATION {quote_identifier(owner)}"
    return Statement(
        action=Action.CREATE,
        sql=sql,
        attribute=NAME_ATTR,
        description=f"create schema {name}",
    )


def rename_schema(old_name: str, new_name: str) -> Statement:
    if not new_name:
        raise ValidationError("Error setting schema name to an empty string", NAME_ATTR)
    _reject_nul(new_name, NAME_ATTR)
    return Statement(
        action=Action.RENAME,
        sql=(
            f"ALTER SCHEMA {quote_identifier(old_name)} "
            f"RENAME TO {quote_identifier(new_name)}"
        ),
        attribute=NAME_ATTR,
        description=f"rename schema {old_name} to {new_name}",
    )


def alter_schema_owner(name: str, owner: str) -> Statement:
    if not owner:
        raise ValidationError("Error setting schema owner to an empty string", OWNER_ATTR)
    _reject_nul(owner, OWNER_ATTR)
    return Statement(
        action=Action.OWNER,
        sql=f"ALTER SCHEMA {quote_identifier(name)} OWNER TO {quote_identifier(owner)}",
        attribute=OWNER_ATTR,
        description=f"change owner of schema {name} to {owner}",
    )


def drop_schema(name: str) -> Statement:
    """DROP SCHEMA without CASCADE; the server refuses if objects depend on it."""
    if not name:
        raise ValidationError("Error dropping schema with an empty name", NAME_ATTR)
    _reject_nul(name, NAME_ATTR)
    return Statement(
        action=Action.DROP,
        sql=f"DROP SCHEMA {quote_identifier(name)}",
        attribute=NAME_ATTR,
        description=f"drop schema {name}",
    )


def plan_update(resource: ResourceData) -> list[Statement]:
    """Compute the ALTER statements that move recorded state to the desired state.

    The rename is planned before the owner change, and the owner change
    refers to the schema by its new name. Both attributes are validated
    before anything is returned, so an invalid target yields no statements.
    """
    statements = []
    old_name, name = resource.get_change(NAME_ATTR)

    if resource.has_change(NAME_ATTR):
        statements.append(rename_schema(old_name, name))
    else:
        name = old_name

    if resource.has_change(OWNER_ATTR):
        _, owner = resource.get_change(OWNER_ATTR)
        statements.append(alter_schema_owner(name, owner))

    return statements
