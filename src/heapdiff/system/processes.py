"""
Process lookup utilities.

Helpers to locate the JVM whose heap should be captured, using psutil.
"""

import logging
import re
from typing import List

import psutil

from ..validation import CaptureIOError

logger = logging.getLogger(__name__)

JAVA_PROCESS_NAMES = ("java", "java.exe", "javaw", "javaw.exe")


def list_jvm_pids(pattern: str) -> List[int]:
    """Return the pids of java processes whose command line matches ``pattern``.

    Args:
        pattern: Regular expression searched in the space-joined command line.

    Note:
        Processes that exit or deny access while being inspected are skipped.
    """
    compiled = re.compile(pattern)
    own_pid = psutil.Process().pid
    matches: List[int] = []
    for proc in psutil.process_iter(["pid", "name", "cmdline"]):
        try:
            info = proc.info
            if info["pid"] == own_pid or info["name"] not in JAVA_PROCESS_NAMES:
                continue
            cmdline = " ".join(info["cmdline"] or [])
            if compiled.search(cmdline):
                matches.append(info["pid"])
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
            continue
    return matches


def find_jvm_pid(pattern: str) -> int:
    """Locate the single JVM matching ``pattern``.

    Raises:
        CaptureIOError: If no JVM, or more than one, matches.
    """
    pids = list_jvm_pids(pattern)
    if not pids:
        raise CaptureIOError(f"No running JVM matches pattern '{pattern}'")
    if len(pids) > 1:
        raise CaptureIOError(
            f"Pattern '{pattern}' matches several JVMs: {', '.join(map(str, sorted(pids)))}"
        )
    logger.info(f"Pattern '{pattern}' resolved to JVM pid {pids[0]}")
    return pids[0]


def is_process_running(pid: int) -> bool:
    """Check whether a live (non-zombie) process with this pid exists."""
    try:
        return psutil.Process(pid).status() != psutil.STATUS_ZOMBIE
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        return psutil.pid_exists(pid)
