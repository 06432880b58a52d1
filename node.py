"""Namespace tree entities: directories and files held in fixed slot tables."""

from dataclasses import dataclass, field
from enum import Enum

# Number of child slots in every directory
CAPACITY = 1024


class Kind(Enum):
    DIRECTORY = "dir"
    FILE = "file"


def _empty_slots() -> list:
    return [None] * CAPACITY


@dataclass(eq=False)
class Node:
    """A directory or a file in the namespace.

    A node with alive=False is a tombstone: it keeps its slot (and its name)
    until the enclosing directory is purged or recursively deleted.
    Files carry a payload and no children; directories carry CAPACITY
    child slots indexed by slots.slot_hash and linear probing.
    """
    kind: Kind
    name: str
    alive: bool = True
    payload: str | None = None
    parent: "Node | None" = field(default=None, repr=False)
    children: list | None = field(default=None, repr=False)

    @classmethod
    def directory(cls, name: str, parent: "Node | None" = None) -> "Node":
        return cls(Kind.DIRECTORY, name, parent=parent, children=_empty_slots())

    @classmethod
    def file(cls, name: str, parent: "Node | None" = None) -> "Node":
        return cls(Kind.FILE, name, payload="", parent=parent)

    @property
    def is_dir(self) -> bool:
        return self.kind is Kind.DIRECTORY

    def full_path(self) -> str:
        """Climb parent links to the root, joining names with '/'."""
        parts = []
        cur = self
        while cur.parent is not None:
            parts.append(cur.name)
            cur = cur.parent
        return "/" + "/".join(reversed(parts))
