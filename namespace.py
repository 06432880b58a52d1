"""In-memory namespace: path resolution and the create/read/write/delete/find operations.

Paths are '/'-separated. Empty segments are ignored, so "/a/b", "a/b" and
"//a//b/" all name the same entry. The root is implicit and unnamed.
"""

import logging

from node import Kind, Node
from search import SearchTree
from slots import find_child, find_child_dir, find_child_file, find_free_slot

logger = logging.getLogger(__name__)


class NamespaceError(Exception):
    """Base error for namespace operations."""
    pass


class NotFoundError(NamespaceError):
    """Target, or one of its parent directories, does not exist."""
    pass


class InvalidPathError(NotFoundError):
    """Path has no final segment (it names the root)."""
    pass


class AlreadyExistsError(NamespaceError):
    """An alive entry of the same kind already has that name."""
    pass


class NotEmptyError(NamespaceError):
    """Directory still has an alive child."""
    pass


class CapacityError(NamespaceError):
    """Directory has no empty or dead slot left."""
    pass


def split_path(path: str) -> tuple[list[str], str]:
    """Split a path into (parent segments, final name)."""
    parts = [p for p in path.split("/") if p]
    if not parts:
        raise InvalidPathError(f"No name in path: {path!r}")
    return parts[:-1], parts[-1]


class Namespace:
    """A tree of directories and files rooted at an unnamed directory.

    With find_skips_dead=True, find ignores tombstones and does not descend
    into dead directories; by default every occupied slot is inspected.
    """

    def __init__(self, find_skips_dead: bool = False):
        self.root = Node.directory("")
        self.find_skips_dead = find_skips_dead

    def resolve(self, segments: list[str]) -> Node | None:
        """Walk directory segments from the root. Returns None if any is missing."""
        cur = self.root
        for segment in segments:
            cur = find_child_dir(cur, segment)
            if cur is None:
                return None
        return cur

    def _parent_of(self, path: str) -> tuple[Node, str]:
        segments, name = split_path(path)
        parent = self.resolve(segments)
        if parent is None:
            raise NotFoundError(f"No such directory: /{'/'.join(segments)}")
        return parent, name

    def _locate(self, path: str) -> tuple[Node, int]:
        """Return (parent, slot index) of the alive entry at path, of either kind."""
        parent, name = self._parent_of(path)
        i = find_child(parent, name)
        if i is None:
            raise NotFoundError(f"Not found: {path}")
        return parent, i

    # --- create ---

    def create(self, path: str, kind: Kind = Kind.FILE):
        """Create an empty file (or a directory) at path."""
        parent, name = self._parent_of(path)
        if find_child(parent, name, kind) is not None:
            raise AlreadyExistsError(f"Already exists: {path}")

        i = find_free_slot(parent, name)
        if i is None:
            logger.warning("Directory full, cannot create %s", path)
            raise CapacityError(f"No free slot for: {path}")

        if kind is Kind.DIRECTORY:
            parent.children[i] = Node.directory(name, parent)
        else:
            parent.children[i] = Node.file(name, parent)
        logger.debug("Created %s %s in slot %d", kind.value, path, i)

    def create_dir(self, path: str):
        self.create(path, Kind.DIRECTORY)

    # --- file content ---

    def write(self, path: str, data: str) -> int:
        """Replace the content of the file at path. Returns the new size in bytes."""
        parent, name = self._parent_of(path)
        target = find_child_file(parent, name)
        if target is None:
            raise NotFoundError(f"No such file: {path}")
        target.payload = data
        size = len(data.encode("utf-8"))
        logger.debug("Wrote %d bytes to %s", size, path)
        return size

    def read(self, path: str) -> str:
        parent, name = self._parent_of(path)
        target = find_child_file(parent, name)
        if target is None or target.payload is None:
            raise NotFoundError(f"No such file: {path}")
        return target.payload

    # --- delete ---

    def delete(self, path: str):
        """Mark the entry at path dead. Directories must have no alive child.

        Deleting a directory also clears its dead child slots, dropping those
        tombstones for good. The directory itself stays in its parent's slot
        as a tombstone.
        """
        parent, i = self._locate(path)
        target = parent.children[i]

        if target.is_dir:
            if any(child is not None and child.alive for child in target.children):
                raise NotEmptyError(f"Directory not empty: {path}")
            purged = 0
            for j, child in enumerate(target.children):
                if child is not None:
                    target.children[j] = None
                    purged += 1
            if purged:
                logger.debug("Purged %d tombstones under %s", purged, path)
        else:
            # name stays: find still reports tombstones until a purge
            target.payload = None

        target.alive = False
        logger.debug("Deleted %s", path)

    def delete_recursive(self, path: str):
        """Remove the entry at path and its whole subtree, tombstones included."""
        parent, i = self._locate(path)
        _release(parent.children[i])
        parent.children[i] = None
        logger.debug("Recursively deleted %s", path)

    # --- find ---

    def find(self, name: str) -> list[str]:
        """Return the full paths of every entry called name, in ascending order."""
        results = SearchTree()
        self._collect(name, results)
        if not results:
            raise NotFoundError(f"Nothing called {name!r}")
        paths = list(results)
        results.clear()
        logger.debug("Found %d entries called %r", len(paths), name)
        return paths

    def _collect(self, name: str, results: SearchTree):
        """Pre-order walk from the root, inserting the path of every match."""
        # Explicit stack of slot iterators: nesting depth is unbounded
        stack = [iter(self.root.children)]
        while stack:
            child = next(stack[-1], _DONE)
            if child is _DONE:
                stack.pop()
                continue
            if child is None:
                continue
            if self.find_skips_dead and not child.alive:
                continue
            if child.name == name:
                results.insert(child.full_path())
            if child.is_dir:
                stack.append(iter(child.children))


_DONE = object()


def _release(node: Node):
    """Post-order teardown of a subtree, dead entries included."""
    stack = [(node, False)]
    while stack:
        cur, expanded = stack.pop()
        if cur.is_dir and not expanded:
            stack.append((cur, True))
            for child in cur.children:
                if child is not None:
                    stack.append((child, False))
            continue
        if cur.is_dir:
            cur.children = [None] * len(cur.children)
        cur.payload = None
        cur.alive = False
        cur.parent = None
