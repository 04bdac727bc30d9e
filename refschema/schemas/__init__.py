"""Named validators and the registry composing them."""

from .definitions import (
    BUILTINS,
    ID,
    SLUG,
    SLUG_MESSAGE,
    SLUG_PATTERN,
    TEXT,
    VARCHAR255,
)

from .validator import (
    Presence,
    Validator,
    is_validator,
)

from .references import (
    ArraySpec,
    InlineSpec,
    Reference,
    ValidatorArg,
    classify,
)

from .registry import (
    SchemaRegistry,
    get_registry,
)

__all__ = [
    'BUILTINS',
    'ID',
    'SLUG',
    'SLUG_MESSAGE',
    'SLUG_PATTERN',
    'TEXT',
    'VARCHAR255',
    'Presence',
    'Validator',
    'is_validator',
    'ArraySpec',
    'InlineSpec',
    'Reference',
    'ValidatorArg',
    'classify',
    'SchemaRegistry',
    'get_registry',
]
