"""Tests for reference parsing and argument classification."""
import pytest

from refschema import TypeMismatchError
from refschema.schemas.definitions import ID
from refschema.schemas.references import (
    ArraySpec,
    InlineSpec,
    Reference,
    ValidatorArg,
    classify,
)


def test_bare_reference_is_required():
    assert Reference.parse('id') == Reference('id', optional=False)


def test_bracketed_reference_is_optional():
    assert Reference.parse('[slug]') == Reference('slug', optional=True)


def test_half_bracketed_reference_is_a_name():
    assert Reference.parse('[slug') == Reference('[slug')


def test_classify_each_shape():
    assert classify('id') == Reference('id')
    assert isinstance(classify({'id': 'id'}), InlineSpec)
    assert classify(['id', 'slug']) == ArraySpec(('id', 'slug'))
    assert classify(('id',)) == ArraySpec(('id',))
    arg = classify(ID)
    assert isinstance(arg, ValidatorArg)
    assert arg.validator is ID


@pytest.mark.parametrize('value', [42, None, 1.5, object()])
def test_classify_rejects_other_values(value):
    with pytest.raises(TypeMismatchError):
        classify(value)
