"""
Validation and error handling for the wssviz package.

This module provides input validation, the fatal error taxonomy of the
renderer, and error handling with consistent error reporting.
"""

from .exceptions import (
    EmptyRange,
    ErrorSeverity,
    MalformedSample,
    MissingSamples,
    NoPagesSampled,
    PfnOutOfRange,
    UsageError,
    ValidationError,
    WssVizError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_file_error,
)

from .validators import (
    validate_enum_choice,
    validate_non_empty_string,
    validate_pid,
    validate_positive_float,
    validate_positive_integer,
)

__all__ = [
    # Errors
    "ErrorSeverity",
    "ValidationError",
    "WssVizError",
    "UsageError",
    "MissingSamples",
    "MalformedSample",
    "EmptyRange",
    "PfnOutOfRange",
    "NoPagesSampled",
    # Handlers
    "handle_error",
    "handle_config_error",
    "handle_file_error",
    "handle_cli_error",
    # Validators
    "validate_enum_choice",
    "validate_non_empty_string",
    "validate_pid",
    "validate_positive_float",
    "validate_positive_integer",
]
