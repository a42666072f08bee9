"""Weblate translations: per-component listing, get-or-create, file transfer.

API reference: https://docs.weblate.org/en/latest/api.html#translations
"""

from typing import Dict, Set, Tuple

from core.logging import get_module_logger
from integrations.weblate.client import WeblateClient
from integrations.weblate.errors import WeblateAPIError
from integrations.weblate.models import Component, Resolved, Translation
from integrations.weblate.utils import log_failed_response, preserve_whitespace

logger = get_module_logger()


class TranslationApi:
    """Cache of translations keyed by component slug, then language code.

    The translation list of a component is fetched at most once. A component
    whose list was fetched and found empty keeps an empty entry, so later
    lookups for any locale of that component do not hit the server again.
    """

    def __init__(self, client: WeblateClient):
        self.client = client
        self._translations: Dict[str, Dict[str, Translation]] = {}
        self._created: Set[Tuple[str, str]] = set()

    def get_translations(
        self, component: Component, reload: bool = False
    ) -> Dict[str, Translation]:
        """Return the translations of a component keyed by language code.

        Raises:
            WeblateAPIError: If the listing does not answer 200
        """
        if component.slug in self._translations and not reload:
            return self._translations[component.slug]

        translations: Dict[str, Translation] = {}
        for result in self.client.iter_results(
            component.translations_url,
            f"Unable to get weblate components translations for {component.slug}.",
        ):
            translation = Translation.model_validate(result)
            translations[translation.language_code] = translation
            logger.debug(
                "weblate_translation_loaded",
                slug=component.slug,
                locale=translation.language_code,
            )

        self._translations[component.slug] = translations
        # Listing results are never reported as created.
        self._created = {
            key
            for key in self._created
            if key[0] != component.slug
            or (not reload and key[1] not in translations)
        }
        return translations

    def has_translation(self, component: Component, locale: str) -> bool:
        return locale in self.get_translations(component)

    def get_translation(
        self, component: Component, locale: str
    ) -> Resolved[Translation]:
        """Return the translation of ``component`` for ``locale``, creating it if needed."""
        if self.has_translation(component, locale):
            translation = self._translations[component.slug][locale]
            return Resolved(
                translation, created=(component.slug, locale) in self._created
            )

        return self.add_translation(component, locale)

    def add_translation(
        self, component: Component, locale: str
    ) -> Resolved[Translation]:
        """Start a new translation of ``component`` for ``locale``.

        Raises:
            WeblateAPIError: If the server does not answer 201
        """
        response = self.client.request(
            "POST", component.translations_url, data={"language_code": locale}
        )

        if response.status_code != 201:
            log_failed_response(
                "weblate_translation_add_failed",
                response,
                slug=component.slug,
                locale=locale,
            )
            raise WeblateAPIError(
                f"Unable to add weblate components translation for {component.slug} {locale}.",
                response,
            )

        translation = Translation.model_validate(response.json()["data"])
        if component.slug in self._translations:
            self._translations[component.slug][locale] = translation
        self._created.add((component.slug, locale))

        logger.debug("weblate_translation_added", slug=component.slug, locale=locale)

        return Resolved(translation, created=True)

    def upload_translation(self, translation: Translation, content: str) -> None:
        """Replace the translation file on the server with ``content``.

        Raises:
            WeblateAPIError: If the server does not answer 200
        """
        content = preserve_whitespace(content)

        response = self.client.request(
            "POST",
            translation.file_url,
            data={"method": "replace"},
            files={"file": (translation.filename, content)},
        )

        if response.status_code != 200:
            log_failed_response(
                "weblate_translation_upload_failed",
                response,
                filename=translation.filename,
            )
            raise WeblateAPIError(
                f"Unable to upload weblate translation {translation.filename}.",
                response,
            )

        logger.debug("weblate_translation_uploaded", filename=translation.filename)

    def download_translation(self, translation: Translation) -> str:
        """Return the serialized translation file as stored on the server.

        Raises:
            WeblateAPIError: If the server does not answer 200
        """
        response = self.client.request("GET", translation.file_url)

        if response.status_code != 200:
            log_failed_response(
                "weblate_translation_download_failed",
                response,
                filename=translation.filename,
            )
            raise WeblateAPIError(
                f"Unable to download weblate translation {translation.filename}.",
                response,
            )

        logger.debug("weblate_translation_downloaded", filename=translation.filename)

        return response.content.decode("utf-8")
