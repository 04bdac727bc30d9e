"""Validator wrapper around pydantic annotations, with jsonschema boundary checks."""
from dataclasses import dataclass, replace
from enum import Enum
from functools import cached_property
from typing import Any, Dict, Mapping, Optional

import jsonschema
from jsonschema import ValidationError as JsonSchemaValidationError
from pydantic import StringConstraints, TypeAdapter, ValidationError
from typing_extensions import Annotated


class Presence(str, Enum):
    """How a validator behaves when used as an object field."""
    DEFAULT = 'default'
    REQUIRED = 'required'
    OPTIONAL = 'optional'


@dataclass(frozen=True, eq=False)
class Validator:
    """
    A set of acceptance rules for a value.

    `annotation` is any type pydantic can build a TypeAdapter for. Object
    validators also keep their field map so they can be extended later.
    """

    annotation: Any
    presence: Presence = Presence.DEFAULT
    fields: Optional[Mapping[str, 'Validator']] = None
    name: Optional[str] = None

    @cached_property
    def _adapter(self) -> TypeAdapter:
        return TypeAdapter(self.annotation)

    @property
    def is_object(self) -> bool:
        return self.fields is not None

    @property
    def is_required(self) -> bool:
        return self.presence is Presence.REQUIRED

    def required(self) -> 'Validator':
        """Copy of this validator that must be present as an object field."""
        return replace(self, presence=Presence.REQUIRED)

    def optional(self) -> 'Validator':
        """Copy of this validator that may be absent as an object field."""
        return replace(self, presence=Presence.OPTIONAL)

    def constrain(self, name: Optional[str] = None, **constraints: Any) -> 'Validator':
        """Copy of this validator with extra string constraints applied."""
        return Validator(
            Annotated[self.annotation, StringConstraints(**constraints)],
            presence=self.presence,
            name=name,
        )

    def validate(self, value: Any) -> Any:
        """
        Validate and normalize a value.

        Raises:
            pydantic.ValidationError: the value does not satisfy the rules
        """
        return self._adapter.validate_python(value)

    def check(self, value: Any) -> tuple[bool, Optional[str]]:
        """
        Validate without raising.

        Returns: (is_valid, error_message)
        """
        try:
            self.validate(value)
            return True, None
        except ValidationError as e:
            first = e.errors()[0]
            return False, f"Validation error: {first['msg']} at {list(first['loc'])}"

    def json_schema(self) -> Dict[str, Any]:
        """JSON Schema document describing this validator."""
        return self._adapter.json_schema()

    def check_document(self, document: Any) -> tuple[bool, Optional[str]]:
        """
        Strict boundary check of a raw document against json_schema().

        No normalization happens here: a document must already be in its
        normalized form to pass.

        Returns: (is_valid, error_message)
        """
        try:
            jsonschema.validate(instance=document, schema=self.json_schema())
            return True, None
        except JsonSchemaValidationError as e:
            return False, f"Validation error: {e.message} at {list(e.path)}"

    def __repr__(self) -> str:
        kind = 'object' if self.is_object else (self.name or 'schema')
        return f"Validator({kind}, {self.presence.value})"


def is_validator(obj: Any) -> bool:
    """True if obj is a Validator built by this package."""
    return isinstance(obj, Validator)
