"""Skip list mapping string keys to string values (Pugh, 1990).

Every node carries a ``forward`` list with one reference per level it takes
part in. Two sentinels frame the structure:

    • *header* – present at ``max_level``, start of every traversal
    • *tail*   – compares greater than any key, terminates every chain

Complexities (average case):
    • search   – O(log n)
    • insert   – O(log n)
    • delete   – O(log n)
    • iterate  – O(n)

Node heights follow a geometric distribution with a 25 % branching factor.
The random source is an explicit :class:`random.Random` owned by the list so
a fixed seed reproduces the exact same shape.
"""
from __future__ import annotations

import enum
import logging
import random
from collections.abc import Iterator
from typing import Optional

from .render import render

__all__ = ["SkipList", "Node", "NodeKind", "NotFound", "MAX_LEVEL", "P"]

logger = logging.getLogger(__name__)

MAX_LEVEL = 16  # Sized for ~ P ** -16 elements.
P = 0.25


class NotFound(KeyError):
    """Raised when a key is not present in the list."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"{self.key} was not found."


class NodeKind(enum.Enum):
    """Role of a node inside the list."""
    HEADER = 0
    ENTRY = 1
    TAIL = 2


class Node:
    __slots__ = ("kind", "key", "value", "forward")

    def __init__(self, kind: NodeKind, level: int, key: Optional[str] = None, value: Optional[str] = None):
        self.kind = kind
        self.key = key
        self.value = value
        self.forward: list[Node] = [None] * level  # type: ignore[list-item]

    @property
    def level(self) -> int:
        return len(self.forward)

    def compare_to_key(self, search_key: str) -> int:
        """Order this node against *search_key*: <0, 0 or >0.

        Sentinels sort after every possible key.
        """
        if self.kind is not NodeKind.ENTRY:
            return 1
        if self.key < search_key:  # type: ignore[operator]
            return -1
        return 0 if self.key == search_key else 1

    def __repr__(self) -> str:  # pragma: no cover
        if self.kind is NodeKind.ENTRY:
            return f"Node<{self.key!r}:{self.value!r} L{self.level}>"
        return f"Node<{self.kind.name}>"


class SkipList:
    """Ordered ``str -> str`` map backed by a skip list.

    Parameters
    ----------
    max_level: int
        Upper bound on node height.
    p: float
        Probability that a node of height *i* also reaches height *i + 1*.
    rng: random.Random | None
        Random source for node heights.
    seed:
        Seed for a private :class:`random.Random` when *rng* is omitted.
    """

    def __init__(self, max_level: int = MAX_LEVEL, p: float = P, *, rng: Optional[random.Random] = None, seed=None) -> None:
        if max_level < 1:
            raise ValueError(f"max_level must be positive, got {max_level}")
        if not 0.0 < p < 1.0:
            raise ValueError(f"p must be within (0, 1), got {p}")
        self._max_level = max_level
        self._p = p
        self._rng = rng if rng is not None else random.Random(seed)
        self._level = 1
        self._size = 0
        self._nil = Node(NodeKind.TAIL, 1)
        self._header = Node(NodeKind.HEADER, max_level)
        for i in range(max_level):
            self._header.forward[i] = self._nil

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def level(self) -> int:
        """Highest level currently populated (1 when empty)."""
        return self._level

    @property
    def max_level(self) -> int:
        return self._max_level

    @property
    def p(self) -> float:
        return self._p

    def is_empty(self) -> bool:
        return self._header.forward[0] is self._nil

    def __len__(self) -> int:
        return self._size

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _random_level(self) -> int:
        lvl = 1
        while self._rng.random() < self._p and lvl < self._max_level:
            lvl += 1
        return lvl

    def _find(self, key: str, update: Optional[list[Node]] = None) -> Node:
        """Return the level-0 successor of the last node whose key is < *key*.

        When *update* is given, ``update[i]`` receives the rightmost node
        visited on level *i* before dropping down.
        """
        x = self._header
        for i in reversed(range(self._level)):
            while x.forward[i].compare_to_key(key) < 0:
                x = x.forward[i]
            if update is not None:
                update[i] = x
        return x.forward[0]

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------
    def search(self, key: str) -> str:
        """Return the value stored under *key*; raise :class:`NotFound` otherwise."""
        x = self._find(key)
        if x.compare_to_key(key) == 0:
            return x.value  # type: ignore[return-value]
        raise NotFound(key)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        x = self._find(key)
        if x.compare_to_key(key) == 0:
            return x.value
        return default

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self._find(key).compare_to_key(key) == 0

    __getitem__ = search

    # ---------------------------------------------------------------------
    # Mutation API
    # ---------------------------------------------------------------------
    def insert(self, key: str, value: str) -> None:
        """Insert *key* with *value*, replacing the value of an existing key."""
        update: list[Node] = [self._header] * self._max_level
        x = self._find(key, update)
        if x.compare_to_key(key) == 0:  # Update
            x.value = value
            return
        lvl = self._random_level()
        if lvl > self._level:
            logger.debug("list level raised from %d to %d", self._level, lvl)
            self._level = lvl
        new_node = Node(NodeKind.ENTRY, lvl, key, value)
        for i in range(lvl):
            new_node.forward[i] = update[i].forward[i]
            update[i].forward[i] = new_node
        self._size += 1

    def delete(self, key: str) -> None:
        """Remove *key*; raise :class:`NotFound` if it is absent."""
        update: list[Node] = [self._header] * self._max_level
        x = self._find(key, update)
        if x.compare_to_key(key) != 0:
            raise NotFound(key)
        for i in range(self._level):
            # x does not reach level i, nor any level above it
            if update[i].forward[i] is not x:
                break
            update[i].forward[i] = x.forward[i]
        old_level = self._level
        while self._level > 1 and self._header.forward[self._level - 1] is self._nil:
            self._level -= 1
        if self._level != old_level:
            logger.debug("list level lowered from %d to %d", old_level, self._level)
        self._size -= 1

    __setitem__ = insert
    __delitem__ = delete

    # ------------------------------------------------------------------
    # Iteration helpers (ordered)
    # ------------------------------------------------------------------
    def _nodes(self) -> Iterator[Node]:
        x = self._header.forward[0]
        while x is not self._nil:
            yield x
            x = x.forward[0]

    def items(self) -> Iterator[tuple[str, str]]:
        for node in self._nodes():
            yield node.key, node.value  # type: ignore[misc]

    def keys(self) -> Iterator[str]:
        for node in self._nodes():
            yield node.key  # type: ignore[misc]

    def values(self) -> Iterator[str]:
        for node in self._nodes():
            yield node.value  # type: ignore[misc]

    __iter__ = keys

    def __str__(self) -> str:
        return render(self)

    def __repr__(self) -> str:
        return f"SkipList(size={self._size}, level={self._level}, max_level={self._max_level}, p={self._p})"
