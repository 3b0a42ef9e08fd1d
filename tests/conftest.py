"""Test configuration and fixtures for modelql."""

import pytest

from modelql import FieldVisibility, InputGenerator, TypeMapper
from tests.schema import build_registry


@pytest.fixture()
def registry():
    """A fresh registry per test so registrations never leak between tests."""
    return build_registry()


@pytest.fixture()
def type_mapper(registry):
    return TypeMapper(registry)


@pytest.fixture()
def input_generator(type_mapper):
    return InputGenerator(type_mapper, FieldVisibility.all())
