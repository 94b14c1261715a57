"""
Histogram entry value object.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HistogramEntry:
    """
    Memory used by all live instances of one class at a point in time.

    Entries are ordered by descending ``size``; ``sort_key`` gives the key to
    use with ``sorted`` so that ties keep their insertion order.
    """

    # Canonical, human readable class name (e.g. "String", "int[]", "java.util.ArrayList").
    class_name: str
    # Number of live instances.
    instances: int
    # Total bytes held by those instances.
    size: int

    def __str__(self) -> str:
        return f"{self.class_name},{self.instances},{self.size}"

    def negated(self) -> "HistogramEntry":
        """Return an entry with both counters sign-flipped."""
        return HistogramEntry(self.class_name, -self.instances, -self.size)

    @staticmethod
    def sort_key(entry: "HistogramEntry") -> int:
        return -entry.size
