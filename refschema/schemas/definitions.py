"""
Built-in validators.

Every registry starts with these under the names in BUILTINS.
"""
import re
from typing import Any

from pydantic import AfterValidator, BeforeValidator, Field, StringConstraints
from pydantic.json_schema import WithJsonSchema
from pydantic_core import PydanticCustomError
from typing_extensions import Annotated

from .validator import Validator

SLUG_PATTERN = r'^[a-z0-9-]{3,100}$'
SLUG_MESSAGE = 'must be alphanumerical and 3-100 characters long.'

# jsonschema searches with re, where a bare $ also matches before a final newline
SLUG_DOCUMENT_PATTERN = r'^[a-z0-9-]{3,100}$(?!\n)'

_SLUG_RE = re.compile(SLUG_PATTERN)


def _check_slug(value: str) -> str:
    # Runs after lowercasing
    if not _SLUG_RE.fullmatch(value):
        raise PydanticCustomError('slug_pattern', SLUG_MESSAGE)
    return value


def _reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise PydanticCustomError('int_type', 'Input should be a valid integer')
    return value


# Positive integer identifier; numeric strings are converted, booleans are not
ID = Validator(Annotated[int, Field(gt=0), BeforeValidator(_reject_bool)], name='id')

# Lowercased slug
SLUG = Validator(
    Annotated[
        str,
        StringConstraints(strict=True, to_lower=True),
        AfterValidator(_check_slug),
        WithJsonSchema({'type': 'string', 'pattern': SLUG_DOCUMENT_PATTERN}),
    ],
    name='slug',
)

# Text with surrounding whitespace stripped
TEXT = Validator(
    Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)],
    name='text',
)

# Text fitting a VARCHAR(255) column
VARCHAR255 = TEXT.constrain(name='varchar255', max_length=255)

BUILTINS = {
    'id': ID,
    'slug': SLUG,
    'text': TEXT,
    'varchar255': VARCHAR255,
}
