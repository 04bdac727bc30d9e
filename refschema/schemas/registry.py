"""
Schema registry and composer.

Holds named validators and builds object and array validators out of
short string references:

    registry = SchemaRegistry()
    schema = registry.params({'id': 'id', 'name': '[slug]'})
    schema.validate({'id': 5, 'name': 'My-Slug'})  # {'id': 5, 'name': 'my-slug'}
"""
import logging
import threading
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import AfterValidator, BeforeValidator, ConfigDict, with_config
from pydantic.json_schema import WithJsonSchema
from typing_extensions import Annotated, NotRequired, Required, TypedDict

from ..config import RegistryConfig, load_config
from ..exceptions import TypeMismatchError, UnknownSchemaError
from .definitions import BUILTINS
from .references import ArraySpec, CompositionArg, InlineSpec, Reference, ValidatorArg, classify
from .validator import Validator, is_validator

logger = logging.getLogger(__name__)


def _single_to_list(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value
    return [value]


def _all_of(*schemas: Validator) -> Dict[str, Any]:
    # Nested definitions move to the top level so their $refs still resolve
    definitions: Dict[str, Any] = {}
    parts = []
    for schema in schemas:
        document = dict(schema.json_schema())
        definitions.update(document.pop('$defs', {}))
        parts.append(document)
    combined: Dict[str, Any] = {'allOf': parts}
    if definitions:
        combined['$defs'] = definitions
    return combined


class SchemaRegistry:
    """Named validators plus helpers to compose them."""

    def __init__(self, config: Optional[RegistryConfig] = None):
        self.config = config or RegistryConfig()
        self._schemas: Dict[str, Validator] = {}
        self._lock = threading.RLock()
        if self.config.register_builtins:
            self.register_builtins()

    def register_builtins(self) -> None:
        """Register id, slug, text and varchar255."""
        with self._lock:
            self._schemas.update(BUILTINS)
        logger.debug("Registered built-in schemas: %s", ', '.join(BUILTINS))

    def get(self, name: str) -> Validator:
        """Registered validator for name, as registered."""
        try:
            return self._schemas[name]
        except KeyError:
            raise UnknownSchemaError(name) from None

    def names(self) -> List[str]:
        return list(self._schemas)

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __getattr__(self, name: str) -> Validator:
        # Only reached when normal lookup fails: registry.slug, registry.email, ...
        if name.startswith('_'):
            raise AttributeError(name)
        try:
            return self.get(name)
        except UnknownSchemaError:
            raise AttributeError(f"{type(self).__name__!r} has no schema or attribute {name!r}") from None

    def resolve(self, reference: str) -> Tuple[str, Validator]:
        """
        Look up a reference string.

        'name' yields a required copy, '[name]' an optional copy.

        Raises:
            UnknownSchemaError: name is not registered
        """
        if not isinstance(reference, str):
            raise TypeMismatchError(f"Schema reference must be a string, got {type(reference).__name__}")
        ref = Reference.parse(reference)
        return ref.name, self._resolve(ref)

    def _resolve(self, ref: Reference) -> Validator:
        schema = self.get(ref.name)
        return schema.optional() if ref.optional else schema.required()

    def _build(self, arg: CompositionArg) -> Validator:
        if isinstance(arg, Reference):
            return self._resolve(arg)
        if isinstance(arg, ValidatorArg):
            return arg.validator
        if isinstance(arg, ArraySpec):
            return self.array_of(*arg.items)
        if isinstance(arg, InlineSpec):
            return self.compose(arg.fields)
        raise TypeMismatchError(f"Unsupported composition argument: {arg!r}")

    def _object(self, fields: Mapping[str, Validator]) -> Validator:
        shape = {
            key: Required[schema.annotation] if schema.is_required else NotRequired[schema.annotation]
            for key, schema in fields.items()
        }
        params = with_config(ConfigDict(extra=self.config.extra_keys))(TypedDict('Params', shape))
        return Validator(params, fields=dict(fields))

    def compose(self, *spec: Union[str, Mapping[str, Any]]) -> Validator:
        """
        Build an object validator.

        Either a single mapping of field name to reference, Validator, list or
        nested mapping:

            compose({'id': 'id', 'name': '[slug]', 'tags': ['slug']})

        or reference strings naming both the field and its schema:

            compose('id', '[slug]')

        Raises:
            UnknownSchemaError: a reference is not registered
            TypeMismatchError: a value cannot be composed
        """
        if len(spec) == 1 and isinstance(spec[0], Mapping):
            fields = {key: self._build(classify(value)) for key, value in spec[0].items()}
            return self._object(fields)

        fields = {}
        for token in spec:
            name, schema = self.resolve(token)
            fields[name] = schema
        return self._object(fields)

    params = compose

    def array_of(self, *items: Any) -> Validator:
        """
        Build a validator for a list of items matching any of the given schemas.

        Items may be references, mappings (composed) or validators. A lone
        value is accepted and wrapped into a one-element list.
        """
        schemas = [self._build(classify(item)) for item in items]
        if not schemas:
            item_type = Any
        elif len(schemas) == 1:
            item_type = schemas[0].annotation
        else:
            item_type = Union[tuple(schema.annotation for schema in schemas)]
        return Validator(Annotated[List[item_type], BeforeValidator(_single_to_list)])

    arrayOf = array_of

    def extend(self, base: Validator, spec: Union[str, Mapping[str, Any], List[str]]) -> Validator:
        """
        Add fields to an existing validator.

        Object validators get a field-level merge, where fields from spec
        replace base fields of the same name. Any other validator is chained:
        a value must pass base and then the composed object.

        Raises:
            TypeMismatchError: base is not a Validator
        """
        if not is_validator(base):
            raise TypeMismatchError('Base schema must be a Validator.')

        if isinstance(spec, (str, Mapping)):
            extension = self.compose(spec)
        else:
            extension = self.compose(*spec)

        if base.is_object:
            merged = dict(base.fields)
            merged.update(extension.fields)
            return replace(self._object(merged), presence=base.presence)

        return Validator(
            Annotated[
                base.annotation,
                AfterValidator(extension.validate),
                WithJsonSchema(_all_of(base, extension)),
            ],
            presence=base.presence,
        )

    def mixin(self, name: str, schema: Validator) -> None:
        """
        Register a validator under name, replacing any previous one.

        Raises:
            TypeMismatchError: schema is not a Validator
        """
        if not is_validator(schema):
            raise TypeMismatchError('Schema must be a Validator.')
        with self._lock:
            replaced = name in self._schemas
            self._schemas[name] = schema
        logger.debug("%s schema %r", 'Replaced' if replaced else 'Registered', name)


# Module-level registry for convenience
_default_registry = None


def get_registry() -> SchemaRegistry:
    """Get the process-wide registry, built from load_config() on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = SchemaRegistry(load_config())
    return _default_registry
