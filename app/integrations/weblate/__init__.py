"""Weblate REST API integration package."""

from .client import WeblateClient
from .components import ComponentApi
from .dsn import Dsn
from .errors import IncompleteDsnError, UnsupportedSchemeError, WeblateAPIError
from .models import Component, Resolved, Translation, Unit
from .translations import TranslationApi
from .units import UnitApi

__all__ = [
    "Component",
    "ComponentApi",
    "Dsn",
    "IncompleteDsnError",
    "Resolved",
    "Translation",
    "TranslationApi",
    "Unit",
    "UnitApi",
    "UnsupportedSchemeError",
    "WeblateAPIError",
    "WeblateClient",
]
