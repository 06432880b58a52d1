"""Unbalanced binary search tree used to order find results."""


class _Entry:
    __slots__ = ("key", "left", "right")

    def __init__(self, key: str):
        self.key = key
        self.left = None
        self.right = None


class SearchTree:
    """Collects path strings and yields them in ascending order.

    Keys are compared with plain string ordering; equal keys go right, so
    duplicates are kept in insertion order. No balancing is done.
    """

    def __init__(self):
        self._root: _Entry | None = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def insert(self, key: str):
        new = _Entry(key)
        parent = None
        cur = self._root
        while cur is not None:
            parent = cur
            cur = cur.left if key < cur.key else cur.right
        if parent is None:
            self._root = new
        elif key < parent.key:
            parent.left = new
        else:
            parent.right = new
        self._size += 1

    def __iter__(self):
        # Explicit stack: sorted insertions degenerate into a long chain
        stack = []
        cur = self._root
        while stack or cur is not None:
            while cur is not None:
                stack.append(cur)
                cur = cur.left
            cur = stack.pop()
            yield cur.key
            cur = cur.right

    def clear(self):
        self._root = None
        self._size = 0
