"""
Insertion-ordered key/value container backed by two parallel lists.

Lookups are a linear scan (``list.index``) rather than a hash probe. Histograms
hold a few thousand classes at most, and keeping the structure to plain lists
means building a histogram allocates nothing but the lists and the entries.
"""

from typing import Generic, Iterator, List, Optional, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class OrderedMap(Generic[K, V]):
    """
    Key-unique map that iterates over its values in first-insertion order.

    `put` on an existing key replaces the value in place, so the key keeps the
    position it had when it was first inserted. There is no removal.
    """

    __slots__ = ("_keys", "_values")

    def __init__(self) -> None:
        self._keys: List[K] = []
        self._values: List[V] = []

    def _find(self, key: K) -> int:
        try:
            return self._keys.index(key)
        except ValueError:
            return -1

    def put(self, key: K, value: V) -> None:
        idx = self._find(key)
        if idx < 0:
            self._keys.append(key)
            self._values.append(value)
        else:
            self._values[idx] = value

    def get(self, key: K) -> Optional[V]:
        """Return the value stored for ``key``, or None when absent."""
        idx = self._find(key)
        if idx < 0:
            return None
        return self._values[idx]

    def contains_key(self, key: K) -> bool:
        return self._find(key) >= 0

    def keys(self) -> List[K]:
        return list(self._keys)

    def items(self) -> Iterator[Tuple[K, V]]:
        return zip(self._keys, self._values)

    def __contains__(self, key: object) -> bool:
        return self._find(key) >= 0  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[V]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self)} entries)"
