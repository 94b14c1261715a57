"""
Failures raised by heapdiff and the helpers that log them.

Histogram failures derive from HistogramError. Capture, layout and number
problems are fatal to the snapshot being taken; a bad filter criterion is
fatal to that one call. Configuration and argument problems raise
ValidationError.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def log_level(self) -> int:
        return getattr(logging, self.name)

    @property
    def with_traceback(self) -> bool:
        return self in (ErrorSeverity.DEBUG, ErrorSeverity.CRITICAL)


class ValidationError(Exception):
    """A config.toml value or a CLI argument was rejected."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        # Dotted config key (``report.top_n``) or option name (``--pid``)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class HistogramError(Exception):
    """Base class for every failure raised by the histogram engine."""


class CaptureIOError(HistogramError):
    """
    The heap histogram could not be captured.

    Raised when the jcmd executable is missing, exits with an error, times out,
    or when a capture file cannot be read. Never retried internally.
    """

    def __init__(self, message: str, command: Optional[str] = None,
                 returncode: Optional[int] = None):
        super().__init__(message)
        self.command = command
        self.returncode = returncode


class StructuralParseError(HistogramError):
    """The capture text does not have the expected histogram layout."""


class NumericFormatError(HistogramError, ValueError):
    """An instances or bytes field is not a valid integer."""

    def __init__(self, message: str, line_number: Optional[int] = None,
                 text: Optional[str] = None):
        super().__init__(message)
        self.line_number = line_number
        self.text = text


class UnsupportedCriteriaError(HistogramError, TypeError):
    """A filter criterion is not one of the recognized kinds."""

    def __init__(self, criterion: Any):
        super().__init__(f"{type(criterion).__name__} type not supported as filter criteria")
        self.criterion = criterion


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Log ``error`` as "Error in <context>: <error>" and re-raise it.

    Args:
        error: The exception that occurred
        context: Where it occurred, e.g. "config loading main configuration file"
        severity: Log level; DEBUG and CRITICAL also log the traceback
        reraise: Set to False to only log
        logger: Logger of the calling module (defaults to this module's)
    """
    if isinstance(severity, str):
        severity = ErrorSeverity(severity.lower())
    (logger or globals()["logger"]).log(
        severity.log_level, f"Error in {context}: {error}", exc_info=severity.with_traceback
    )
    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    handle_error(error, f"config {context}", **kwargs)


def handle_subprocess_error(error: Exception, command: str, **kwargs) -> None:
    handle_error(error, f"subprocess command '{command}'", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """
    Log a CLI error and exit the process.

    Keyword Args:
        exit_code: Process exit status (default 1)
        include_traceback: Log at CRITICAL with the traceback
    """
    exit_code = kwargs.pop("exit_code", 1)
    if kwargs.pop("include_traceback", False):
        kwargs["severity"] = ErrorSeverity.CRITICAL
    handle_error(error, f"CLI {context}", reraise=False, **kwargs)
    sys.exit(exit_code)
