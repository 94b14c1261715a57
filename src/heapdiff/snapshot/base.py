"""
Defines the abstract interface for heap histogram sources.

A snapshot source produces the raw text of one class histogram capture. The
parser turns those lines into a MemoryHistogram; sources know nothing about
the histogram format beyond splitting it into lines.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

logger = logging.getLogger(__name__)


class AbstractSnapshotSource(ABC):
    """
    Abstract base class for snapshot sources.

    Implementations return the capture as a list of lines without line
    terminators and release every resource used to produce it before
    returning, so that a following capture does not observe them.
    """

    @abstractmethod
    def capture(self) -> List[str]:
        """
        Take one histogram capture.

        Returns:
            The capture output, one string per line.

        Raises:
            CaptureIOError: If the capture cannot be produced.
        """
        pass

    def describe(self) -> str:
        """Short human readable description used in log messages."""
        return self.__class__.__name__
