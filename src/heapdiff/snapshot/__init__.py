"""
Snapshot sources: where the raw class histogram text comes from.
"""

from .base import AbstractSnapshotSource
from .factory import create_snapshot_source
from .jcmd import JcmdSnapshotSource
from .replay import FileSnapshotSource, SequenceSnapshotSource

__all__ = [
    "AbstractSnapshotSource",
    "FileSnapshotSource",
    "JcmdSnapshotSource",
    "SequenceSnapshotSource",
    "create_snapshot_source",
]
