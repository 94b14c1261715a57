"""
Factory for creating snapshot sources.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..models.config import CaptureConfig
from ..system.processes import find_jvm_pid
from ..validation import ValidationError
from .base import AbstractSnapshotSource
from .jcmd import JcmdSnapshotSource
from .replay import FileSnapshotSource

logger = logging.getLogger(__name__)


def create_snapshot_source(
    capture_config: CaptureConfig,
    pid: Optional[int] = None,
    path: Optional[Union[str, Path]] = None,
) -> AbstractSnapshotSource:
    """
    Create a snapshot source from configuration and explicit overrides.

    Resolution order: a capture file ``path``, then an explicit ``pid``, then
    the configured ``target_pattern`` resolved to a running JVM.

    Raises:
        ValidationError: If no target can be determined.
        CaptureIOError: If the target pattern matches no JVM or several.
    """
    if path is not None:
        logger.debug(f"Creating FileSnapshotSource for {path}")
        return FileSnapshotSource(path)

    if pid is None:
        if not capture_config.target_pattern:
            raise ValidationError(
                "No target JVM: pass a pid or set capture.target_pattern in config.toml",
                field_name="capture.target_pattern",
            )
        pid = find_jvm_pid(capture_config.target_pattern)

    return JcmdSnapshotSource(
        pid=pid,
        jcmd_path=capture_config.jcmd_path,
        live_only=capture_config.live_only,
        timeout_seconds=capture_config.timeout_seconds,
    )
