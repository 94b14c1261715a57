"""
System interaction utilities.

- Command execution with output capture and timeouts
- jcmd command construction and availability checks
- JVM process discovery with psutil
"""

from .commands import (
    HISTOGRAM_COMMAND,
    build_jcmd_command,
    check_jcmd_installed,
    run_command,
)
from .processes import find_jvm_pid, is_process_running, list_jvm_pids

__all__ = [
    # Commands
    "HISTOGRAM_COMMAND",
    "build_jcmd_command",
    "check_jcmd_installed",
    "run_command",
    # Processes
    "find_jvm_pid",
    "is_process_running",
    "list_jvm_pids",
]
