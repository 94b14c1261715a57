"""
Snapshot source backed by the `jcmd` command-line utility.

`jcmd <pid> GC.class_histogram` attaches to a running JVM and prints the
number of instances and bytes used by every loaded class. Without ``-all``
the JVM runs a full GC first, so only reachable objects are counted.
"""

import logging
import shlex
import time
from typing import List, Optional

from ..system.commands import build_jcmd_command, run_command
from ..validation import CaptureIOError, handle_subprocess_error
from .base import AbstractSnapshotSource

logger = logging.getLogger(__name__)


class JcmdSnapshotSource(AbstractSnapshotSource):
    """
    Captures class histograms of a JVM by running `jcmd`.

    Attributes:
        pid: Process id of the target JVM.
        jcmd_path: jcmd executable name or path.
        live_only: Count reachable objects only (forces a full GC).
        timeout_seconds: Maximum time to wait for jcmd, None to wait forever.
    """

    def __init__(
        self,
        pid: int,
        jcmd_path: str = "jcmd",
        live_only: bool = True,
        timeout_seconds: Optional[float] = 60.0,
    ):
        self.pid = pid
        self.jcmd_path = jcmd_path
        self.live_only = live_only
        self.timeout_seconds = timeout_seconds
        logger.info(
            f"Initializing {self.__class__.__name__} for pid {pid} "
            f"(jcmd: '{jcmd_path}', live_only: {live_only}, timeout: {timeout_seconds}s)"
        )

    def command(self) -> List[str]:
        return build_jcmd_command(self.pid, self.jcmd_path, self.live_only)

    def capture(self) -> List[str]:
        """
        Run jcmd and return its output lines.

        The whole output is read and the jcmd process reaped before returning.

        Raises:
            CaptureIOError: If jcmd is missing, fails, or times out.
        """
        command = self.command()
        command_str = shlex.join(command)
        start = time.monotonic()
        returncode, stdout, stderr = run_command(command, timeout=self.timeout_seconds)
        elapsed = time.monotonic() - start

        if returncode != 0:
            reason = (stderr or stdout).strip() or f"exit code {returncode}"
            error = CaptureIOError(
                f"Histogram capture failed for pid {self.pid}: {reason}",
                command=command_str,
                returncode=returncode,
            )
            handle_subprocess_error(error, command_str, logger=logger)

        lines = stdout.splitlines()
        logger.info(f"Captured histogram of pid {self.pid}: {len(lines)} lines in {elapsed:.2f}s")
        return lines

    def describe(self) -> str:
        return f"jcmd pid {self.pid}"
