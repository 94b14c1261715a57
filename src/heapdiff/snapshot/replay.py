"""
Snapshot sources that replay captures taken earlier.

FileSnapshotSource reads a capture saved with
``jcmd <pid> GC.class_histogram > before.txt``; SequenceSnapshotSource hands
out in-memory captures one after another.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Union

from ..validation import CaptureIOError
from .base import AbstractSnapshotSource

logger = logging.getLogger(__name__)


class FileSnapshotSource(AbstractSnapshotSource):
    """Reads one capture from a text file each time `capture` is called."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def capture(self) -> List[str]:
        try:
            with open(self.path, "r", encoding="utf-8", errors="replace") as f:
                lines = f.read().splitlines()
        except OSError as e:
            logger.error(f"Failed to read capture file {self.path}: {e}")
            raise CaptureIOError(f"Cannot read capture file {self.path}: {e}") from e
        logger.info(f"Loaded capture {self.path} ({len(lines)} lines)")
        return lines

    def describe(self) -> str:
        return f"file {self.path}"


class SequenceSnapshotSource(AbstractSnapshotSource):
    """
    Replays a fixed sequence of captures, one per `capture` call.

    Each capture is either a list of lines or a single string that is split
    into lines.
    """

    def __init__(self, captures: Iterable[Union[str, List[str]]]):
        self._captures: List[List[str]] = [
            c.splitlines() if isinstance(c, str) else list(c) for c in captures
        ]
        self._next = 0

    @property
    def remaining(self) -> int:
        return len(self._captures) - self._next

    def capture(self) -> List[str]:
        if self._next >= len(self._captures):
            raise CaptureIOError(
                f"No capture left to replay ({len(self._captures)} already used)"
            )
        lines = self._captures[self._next]
        self._next += 1
        return list(lines)
