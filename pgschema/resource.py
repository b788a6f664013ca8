"""Resource records exchanged with the host that persists schema state."""

from dataclasses import dataclass, field
from typing import Protocol

NAME_ATTR = "name"
OWNER_ATTR = "owner"


class ResourceData(Protocol):
    """What the reconciler needs from the host's resource record."""

    @property
    def id(self) -> str: ...

    def get(self, key: str) -> str: ...

    def get_ok(self, key: str) -> tuple[str, bool]: ...

    def get_change(self, key: str) -> tuple[str, str]: ...

    def has_change(self, key: str) -> bool: ...

    def set(self, key: str, value: str) -> None: ...

    def set_id(self, value: str) -> None: ...


@dataclass
class SchemaResource:
    """In-memory schema resource: recorded state plus desired attributes.

    ``state`` holds what was last read from the database. ``desired`` holds
    what the caller wants; a desired value of None means "keep whatever is
    recorded", which is how an omitted owner behaves.
    """

    state: dict[str, str] = field(default_factory=dict)
    desired: dict[str, str | None] = field(default_factory=dict)
    id: str = ""

    @classmethod
    def new(cls, name: str, owner: str | None = None) -> "SchemaResource":
        """A resource that does not exist yet."""
        return cls(desired={NAME_ATTR: name, OWNER_ATTR: owner})

    @classmethod
    def from_state(cls, name: str, owner: str) -> "SchemaResource":
        """A resource previously recorded with the given attributes."""
        return cls(state={NAME_ATTR: name, OWNER_ATTR: owner}, id=name)

    @classmethod
    def for_import(cls, identity: str) -> "SchemaResource":
        """A resource known only by its identity, waiting to be read."""
        return cls(id=identity)

    @property
    def exists(self) -> bool:
        return bool(self.id)

    def with_changes(
        self, name: str | None = None, owner: str | None = None
    ) -> "SchemaResource":
        """Return a copy with the given desired values."""
        desired = dict(self.desired)
        if name is not None:
            desired[NAME_ATTR] = name
        if owner is not None:
            desired[OWNER_ATTR] = owner
        return SchemaResource(state=dict(self.state), desired=desired, id=self.id)

    def get(self, key: str) -> str:
        value = self.desired.get(key)
        if value is not None:
            return value
        return self.state.get(key, "")

    def get_ok(self, key: str) -> tuple[str, bool]:
        value = self.get(key)
        return value, value != ""

    def get_change(self, key: str) -> tuple[str, str]:
        return self.state.get(key, ""), self.get(key)

    def has_change(self, key: str) -> bool:
        old, new = self.get_change(key)
        return old != new

    def set(self, key: str, value: str) -> None:
        """Record a value read back from the database."""
        self.state[key] = value
        self.desired.pop(key, None)

    def set_id(self, value: str) -> None:
        self.id = value

    def as_dict(self) -> dict[str, str]:
        return {NAME_ATTR: self.get(NAME_ATTR), OWNER_ATTR: self.get(OWNER_ATTR)}
