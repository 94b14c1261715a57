"""
Filter criteria for selecting histogram entries.

A criterion is one of four variants:

- ExactName: matches a single class name.
- NamePrefix: matches every class name starting with a prefix
  (built from strings ending in ``*``, e.g. ``"java.util.*"``).
- NamePattern: matches class names where a compiled regex finds a match
  anywhere (``re.search``, not ``re.fullmatch``).
- TypeName: matches the canonical name of a Python type exactly.

`as_criterion` turns the raw values accepted by `MemoryHistogram.filter`
into one of these variants and rejects everything else.
"""

import re
from dataclasses import dataclass
from typing import Any, Union

from ..names import canonical_type_name
from ..validation import UnsupportedCriteriaError


@dataclass(frozen=True)
class ExactName:
    class_name: str


@dataclass(frozen=True)
class NamePrefix:
    prefix: str


@dataclass(frozen=True)
class NamePattern:
    pattern: "re.Pattern[str]"


@dataclass(frozen=True)
class TypeName:
    python_type: type

    @property
    def class_name(self) -> str:
        return canonical_type_name(self.python_type)


Criterion = Union[ExactName, NamePrefix, NamePattern, TypeName]
CRITERION_TYPES = (ExactName, NamePrefix, NamePattern, TypeName)


def as_criterion(value: Any) -> Criterion:
    """
    Coerce a raw filter argument into a criterion variant.

    Args:
        value: A criterion instance, a class name, a ``prefix*`` wildcard,
               a compiled regular expression or a Python type.

    Raises:
        UnsupportedCriteriaError: If ``value`` is none of the above.
    """
    if isinstance(value, CRITERION_TYPES):
        return value
    if isinstance(value, str):
        if value.endswith("*"):
            return NamePrefix(value[:-1])
        return ExactName(value)
    if isinstance(value, re.Pattern):
        if not isinstance(value.pattern, str):
            raise UnsupportedCriteriaError(value)
        return NamePattern(value)
    if isinstance(value, type):
        return TypeName(value)
    raise UnsupportedCriteriaError(value)
