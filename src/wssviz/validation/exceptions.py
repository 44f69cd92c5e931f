"""
Exception types and error handling helpers.

This module holds the error taxonomy of the renderer together with the
logging helpers used to report errors consistently across the application.
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


class ValidationError(Exception):
    """
    Exception raised when validation of a configuration or input value fails.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class WssVizError(Exception):
    """Base class for all fatal rendering errors."""


class UsageError(WssVizError):
    """The command line was called with the wrong number of arguments."""


class MissingSamples(WssVizError):
    """No timestamp directories were found under the sample root."""


class MalformedSample(WssVizError):
    """
    A sample file or timestamp name cannot be interpreted.

    Raised when a sample's byte size is not a multiple of the flag word size,
    or when a timestamp directory name cannot be parsed as a capture time.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class EmptyRange(WssVizError):
    """The resolved page frame range contains no pages."""


class PfnOutOfRange(WssVizError):
    """A decoded page falls outside the precomputed raster."""

    def __init__(self, pfn: int, first_pfn: int, last_pfn: int):
        super().__init__(
            f"pfn {pfn:#x} outside of raster range [{first_pfn:#x}, {last_pfn:#x})"
        )
        self.pfn = pfn
        self.first_pfn = first_pfn
        self.last_pfn = last_pfn


class NoPagesSampled(WssVizError):
    """A timestamp produced no pages, so its fractions are undefined."""


_LOG_LEVELS = {
    ErrorSeverity.DEBUG: logging.DEBUG,
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Log an error in a uniform format and optionally re-raise it.

    Args:
        error: The exception that occurred
        context: What was being done when it occurred
        severity: Severity to log at; strings such as "warning" are accepted
        reraise: Whether to re-raise the exception after logging
        logger: Logger to use (defaults to this module's logger)
    """
    if isinstance(severity, str):
        severity = ErrorSeverity(severity.lower())
    target = logger or globals()["logger"]
    # Tracebacks only for the extremes: debugging detail and crashes.
    with_traceback = severity in (ErrorSeverity.DEBUG, ErrorSeverity.CRITICAL)
    target.log(_LOG_LEVELS[severity], f"Error in {context}: {error}", exc_info=with_traceback)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    handle_error(error, f"config {context}", **kwargs)


def handle_file_error(error: Exception, context: str, **kwargs) -> None:
    handle_error(error, f"file {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """
    Log a command-line level error and terminate the process.

    Keyword Args:
        exit_code: Process exit status (default 1)
        include_traceback: Log at CRITICAL with the traceback
    """
    exit_code = kwargs.pop("exit_code", 1)
    if kwargs.pop("include_traceback", False):
        kwargs["severity"] = ErrorSeverity.CRITICAL
    kwargs.setdefault("severity", ErrorSeverity.ERROR)
    handle_error(error, f"CLI {context}", reraise=False, **kwargs)
    sys.exit(exit_code)
