"""
Value validation functions.

Small validators shared by the configuration layer and the command line.
Each returns the normalized value or raises ValidationError carrying the
offending field name and value.
"""

from typing import Any, Callable, List, Optional, TypeVar, Union

from .exceptions import ValidationError

Number = TypeVar("Number", int, float)


def _reject(field_name: str, value: Any, reason: str) -> ValidationError:
    return ValidationError(f"{field_name} {reason}", field_name=field_name, value=value)


def _bounded(
    value: Any,
    convert: Callable[[Any], Number],
    kind: str,
    min_value: Union[int, float],
    max_value: Optional[Union[int, float]],
    field_name: str,
) -> Number:
    # bool is an int subclass, but `true` is never a valid size or count.
    if isinstance(value, bool):
        raise _reject(field_name, value, f"must be a valid {kind}, got {value}")
    try:
        number = convert(value)
    except (ValueError, TypeError):
        raise _reject(field_name, value, f"must be a valid {kind}, got {value}")
    if number < min_value:
        raise _reject(field_name, value, f"must be >= {min_value}, got {number}")
    if max_value is not None and number > max_value:
        raise _reject(field_name, value, f"must be <= {max_value}, got {number}")
    return number


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is an integer within bounds.

    Args:
        value: Value to validate; numeric strings are accepted
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Raises:
        ValidationError: If validation fails
    """
    return _bounded(value, int, "integer", min_value, max_value, field_name)


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """Validate that a value is a number within bounds."""
    return _bounded(value, float, "number", min_value, max_value, field_name)


def validate_enum_choice(
    value: Any,
    valid_choices: List[str],
    field_name: str = "value"
) -> str:
    """
    Validate that a value is one of a fixed set of strings.

    Raises:
        ValidationError: If the value is not among valid_choices
    """
    if not isinstance(value, str) or value not in valid_choices:
        raise _reject(field_name, value, f"must be one of {valid_choices}, got {value!r}")
    return value


def validate_non_empty_string(value: Any, field_name: str = "value") -> str:
    if not isinstance(value, str) or not value.strip():
        raise _reject(field_name, value, "must be a non-empty string")
    return value


def validate_pid(value: Any, field_name: str = "pid") -> int:
    """
    Validate a process identifier given on the command line.

    The pid only selects a sample directory, so any positive integer
    is accepted even if no such process is running.
    """
    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            raise _reject(field_name, value, f"must be a decimal process id, got {value!r}")
    return validate_positive_integer(value, min_value=1, field_name=field_name)
