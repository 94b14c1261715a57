"""
Command execution utilities.

This module builds the jcmd command line used to take a class histogram,
runs commands with full output capture and checks for the jcmd executable.
"""

import logging
import shlex
import shutil
import subprocess
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

HISTOGRAM_COMMAND = "GC.class_histogram"


def run_command(
    command: List[str], timeout: Optional[float] = None
) -> Tuple[int, str, str]:
    """Execute a command and capture its output.

    The child's stdout and stderr are read to the end and its pipes closed
    before this function returns.

    Args:
        command: The command and its arguments.
        timeout: Seconds to wait before killing the command, None to wait forever.

    Returns:
        Tuple of (return_code, stdout_string, stderr_string).
        return_code is -1 for execution errors (missing executable, timeout,
        OS failure), with the reason in stderr_string.
    """
    command_str = shlex.join(command)
    logger.debug(f"Executing command: '{command_str}'")
    try:
        process = subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
        return process.returncode, process.stdout, process.stderr
    except FileNotFoundError as e:
        logger.error(f"Command not found: {command[0]}: {type(e).__name__}: {e}")
        return -1, "", f"Error: Command not found '{command[0]}'"
    except subprocess.TimeoutExpired:
        logger.error(f"Command '{command_str}' timed out after {timeout}s")
        return -1, "", f"Error: Command timed out after {timeout}s"
    except OSError as e:
        logger.error(f"Failed to run command '{command_str}': {type(e).__name__}: {e}")
        return -1, "", f"An OS error occurred: {e}"


def build_jcmd_command(pid: int, jcmd_path: str = "jcmd", live_only: bool = True) -> List[str]:
    """Build the command line that prints the class histogram of a JVM.

    Args:
        pid: Process id of the target JVM.
        jcmd_path: jcmd executable name or path.
        live_only: When False, ``-all`` is passed so unreachable objects are
            counted too and no full GC is forced.

    Examples:
        >>> build_jcmd_command(4242)
        ['jcmd', '4242', 'GC.class_histogram']
        >>> build_jcmd_command(4242, live_only=False)
        ['jcmd', '4242', 'GC.class_histogram', '-all']
    """
    command = [jcmd_path, str(pid), HISTOGRAM_COMMAND]
    if not live_only:
        command.append("-all")
    return command


def check_jcmd_installed(jcmd_path: str = "jcmd") -> bool:
    """Check if the jcmd executable is available.

    Note:
        jcmd ships with every JDK (not with JRE-only installs).
    """
    return shutil.which(jcmd_path) is not None
