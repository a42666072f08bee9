"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import make_bag, make_catalogue
from tests.factories.weblate import (
    make_component_data,
    make_response,
    make_translation_data,
    make_unit_data,
    make_xliff,
)

__all__ = [
    "make_bag",
    "make_catalogue",
    "make_component_data",
    "make_response",
    "make_translation_data",
    "make_unit_data",
    "make_xliff",
]
