"""
refschema - validation helpers over pydantic

- Common validators: id, slug, text, varchar255
- Object and array validators composed from short string references
- Runtime registration of new named validators

    import refschema as validate

    schema = validate.a.params({'id': 'id', 'name': '[slug]'})
    schema.validate({'id': 5, 'name': 'My-Slug'})
"""

__version__ = "0.1.0"

import pydantic as engine

from .config import RegistryConfig, load_config, reload_config
from .exceptions import (
    ConfigurationError,
    RefSchemaError,
    TypeMismatchError,
    UnknownSchemaError,
    ValidationFailure,
)
from .schemas.registry import SchemaRegistry, get_registry
from .schemas.validator import Presence, Validator, is_validator

registry = get_registry()

# Same registry under two names, for readable call sites
a = registry
an = registry

params = registry.params
compose = registry.compose
array_of = registry.array_of
arrayOf = registry.arrayOf
extend = registry.extend
mixin = registry.mixin
resolve = registry.resolve


def __getattr__(name):
    # refschema.slug, refschema.email after mixin('email', ...), ...
    try:
        return registry.get(name)
    except UnknownSchemaError:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}") from None


__all__ = [
    "engine",
    "registry",
    "a",
    "an",
    "params",
    "compose",
    "array_of",
    "arrayOf",
    "extend",
    "mixin",
    "resolve",
    "SchemaRegistry",
    "get_registry",
    "Validator",
    "Presence",
    "is_validator",
    "RegistryConfig",
    "load_config",
    "reload_config",
    "RefSchemaError",
    "UnknownSchemaError",
    "TypeMismatchError",
    "ConfigurationError",
    "ValidationFailure",
]
