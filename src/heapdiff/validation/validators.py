"""
Value checks shared by the config.toml validators and the CLI.

Every check returns the normalized value or raises ValidationError naming the
offending field, e.g. ``report.top_n`` or ``--pid``.
"""

import re
from typing import Any, List, Optional, Union

from .exceptions import ValidationError

Number = Union[int, float]


def _invalid(field_name: str, value: Any, reason: str) -> ValidationError:
    return ValidationError(f"{field_name} {reason}, got {value!r}", field_name=field_name, value=value)


def _check_range(
    number: Number, min_value: Number, max_value: Optional[Number], field_name: str, value: Any
) -> Number:
    if number < min_value:
        raise _invalid(field_name, value, f"must be >= {min_value}")
    if max_value is not None and number > max_value:
        raise _invalid(field_name, value, f"must be <= {max_value}")
    return number


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Convert ``value`` to an int and check it lies in ``[min_value, max_value]``.

    Strings such as ``"20"`` (CLI arguments) are accepted; booleans are not,
    so ``top_n = true`` in config.toml is reported instead of read as 1.

    Raises:
        ValidationError: If the value is not an integer or is out of range
    """
    if isinstance(value, bool):
        raise _invalid(field_name, value, "must be an integer")
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise _invalid(field_name, value, "must be an integer") from None
    return _check_range(int_value, min_value, max_value, field_name, value)


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """Convert ``value`` to a float and check it lies in ``[min_value, max_value]``."""
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise _invalid(field_name, value, "must be a number") from None
    return _check_range(float_value, min_value, max_value, field_name, value)


def validate_regex_pattern(pattern: str, field_name: str = "regex_pattern") -> str:
    """
    Check that ``pattern`` is a non-empty string that compiles.

    Returns:
        The pattern, uncompiled
    """
    if not isinstance(pattern, str) or not pattern:
        raise _invalid(field_name, pattern, "must be a non-empty regular expression")
    try:
        re.compile(pattern)
    except re.error as e:
        raise _invalid(field_name, pattern, f"is not a valid regular expression ({e})") from None
    return pattern


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Check that ``value`` is one of ``choices``.

    Returns:
        The matching choice, spelled as in ``choices``
    """
    text = str(value)
    candidates = choices if case_sensitive else [choice.lower() for choice in choices]
    key = text if case_sensitive else text.lower()
    if key not in candidates:
        raise _invalid(field_name, value, f"must be one of {choices}")
    return choices[candidates.index(key)]


def validate_string_list(value: Any, field_name: str = "value") -> List[str]:
    """Check that ``value`` is a list of non-empty strings and return a copy."""
    if not isinstance(value, list):
        raise _invalid(field_name, value, "must be a list of strings")
    for item in value:
        if not isinstance(item, str) or not item:
            raise _invalid(field_name, value, f"must only hold non-empty strings ({item!r})")
    return list(value)


def validate_pid(value: Any, field_name: str = "pid") -> int:
    return validate_positive_integer(value, min_value=1, field_name=field_name)
