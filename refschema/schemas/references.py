"""Composition arguments, classified once at the call boundary."""
import re
from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Union

from ..exceptions import TypeMismatchError
from .validator import Validator

# Name in brackets marks an optional field
_OPTIONAL_REFERENCE = re.compile(r'\[(.*)\]', re.DOTALL)


@dataclass(frozen=True)
class Reference:
    """A registry name, e.g. 'id' (required) or '[id]' (optional)."""

    name: str
    optional: bool = False

    @classmethod
    def parse(cls, token: str) -> 'Reference':
        match = _OPTIONAL_REFERENCE.fullmatch(token)
        if match:
            return cls(match.group(1), optional=True)
        return cls(token)


@dataclass(frozen=True)
class InlineSpec:
    """A mapping of field name to composition argument."""

    fields: Mapping[str, Any]


@dataclass(frozen=True)
class ArraySpec:
    """A list literal, composed as an array of its items."""

    items: Tuple[Any, ...]


@dataclass(frozen=True)
class ValidatorArg:
    """A ready-made validator, used as is."""

    validator: Validator


CompositionArg = Union[Reference, InlineSpec, ArraySpec, ValidatorArg]


def classify(value: Any) -> CompositionArg:
    """
    Tag a raw composition argument.

    Raises:
        TypeMismatchError: value is none of str, mapping, list/tuple or Validator
    """
    if isinstance(value, Validator):
        return ValidatorArg(value)
    if isinstance(value, str):
        return Reference.parse(value)
    if isinstance(value, Mapping):
        return InlineSpec(value)
    if isinstance(value, (list, tuple)):
        return ArraySpec(tuple(value))
    raise TypeMismatchError(f"Cannot compose a schema from {type(value).__name__}: {value!r}")
