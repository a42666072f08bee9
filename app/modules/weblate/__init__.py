"""Weblate translation sync module.

Pushes, pulls and deletes translation catalogues on a Weblate project
through ``WeblateProvider``; ``create_provider`` builds one from settings.
"""

from modules.weblate.factory import WeblateProviderFactory, create_provider
from modules.weblate.provider import WeblateProvider

__all__ = [
    "WeblateProvider",
    "WeblateProviderFactory",
    "create_provider",
]
