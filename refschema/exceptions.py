"""Exceptions raised by refschema.

Both registry errors signal misuse by the calling code. Failures of actual
input data come from the validation engine and are re-exported unchanged.
"""
from pydantic import ValidationError as ValidationFailure


class RefSchemaError(Exception):
    """Base exception for refschema errors."""
    pass


class UnknownSchemaError(RefSchemaError, KeyError):
    """Raised when a reference names a schema missing from the registry."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown schema: {self.name!r}"


class TypeMismatchError(RefSchemaError, TypeError):
    """Raised when a validator was expected and something else was given."""
    pass


class ConfigurationError(RefSchemaError, ValueError):
    """Raised for invalid registry configuration."""
    pass


__all__ = [
    'RefSchemaError',
    'UnknownSchemaError',
    'TypeMismatchError',
    'ConfigurationError',
    'ValidationFailure',
]
