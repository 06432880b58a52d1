"""Open-addressed child tables: Fibonacci slot hashing, lookup and free-slot search.

Every directory owns CAPACITY slots. A name's preferred slot is
slot_hash(name); collisions probe forward linearly and wrap around once.

Slot states:
    None        -> never used since the last purge; terminates lookups
    dead node   -> tombstone; skipped by lookups, reusable by inserts
    alive node  -> a live entry
"""

from node import CAPACITY, Kind, Node

# Fibonacci hashing multiplier: golden ratio scaled by the table capacity
HASH_CONST = int(0.618033989 * CAPACITY)


def slot_hash(name: str) -> int:
    """Return the preferred slot index of name, in [0, CAPACITY)."""
    total = 0
    for b in name.encode("utf-8"):
        # bytes above 0x7f count as negative, like a signed char
        total += b - 256 if b > 127 else b
    return ((total * HASH_CONST) & 0xFFFFFFFF) % CAPACITY


def probe(name: str):
    """Yield every slot index in probe order for name."""
    start = slot_hash(name)
    yield from range(start, CAPACITY)
    yield from range(0, start)


def find_free_slot(directory: Node, name: str) -> int | None:
    """Return the first empty or dead slot on name's probe sequence, or None if full."""
    slots = directory.children
    for i in probe(name):
        if slots[i] is None or not slots[i].alive:
            return i
    return None


def find_child(directory: Node, name: str, kind: Kind | None = None) -> int | None:
    """Return the slot index of the alive child called name, or None.

    The scan stops at the first empty slot but walks past tombstones.
    """
    slots = directory.children
    for i in probe(name):
        child = slots[i]
        if child is None:
            return None
        if child.alive and child.name == name and (kind is None or child.kind is kind):
            return i
    return None


def find_child_dir(directory: Node, name: str) -> Node | None:
    i = find_child(directory, name, Kind.DIRECTORY)
    return None if i is None else directory.children[i]


def find_child_file(directory: Node, name: str) -> Node | None:
    i = find_child(directory, name, Kind.FILE)
    return None if i is None else directory.children[i]
