"""Synchronization of translation catalogues with a Weblate project.

Each translation domain maps to one Weblate component and each locale of a
domain to one translation of that component:

- ``write`` pushes local catalogues, creating components and translations as
  needed and keeping messages that only exist on the server;
- ``read`` pulls the requested domains and locales into a ``TranslatorBag``;
- ``delete`` removes the units of the given messages from the server.

Calls are sequential. The first ``WeblateAPIError`` aborts the operation and
leaves the remaining domains untouched.
"""

from typing import Iterable, Optional

from core.logging import get_module_logger
from infrastructure.i18n import (
    MessageCatalogue,
    TranslationLoader,
    TranslatorBag,
    XliffFileDumper,
    merge_catalogues,
)
from integrations.weblate import ComponentApi, TranslationApi, UnitApi

logger = get_module_logger()


class WeblateProvider:
    """Translation provider backed by one Weblate project.

    Attributes:
        loader: Parses the files downloaded from Weblate
        dumper: Serializes local catalogues for upload
        default_locale: Source locale of every component
        endpoint: ``host[:port][/path]`` of the Weblate server
    """

    def __init__(
        self,
        loader: TranslationLoader,
        dumper: XliffFileDumper,
        default_locale: str,
        endpoint: str,
        component_api: ComponentApi,
        translation_api: TranslationApi,
        unit_api: UnitApi,
    ):
        self.loader = loader
        self.dumper = dumper
        self.default_locale = default_locale
        self.endpoint = endpoint
        self.component_api = component_api
        self.translation_api = translation_api
        self.unit_api = unit_api

    def __str__(self) -> str:
        return f"weblate://{self.endpoint}"

    def __enter__(self) -> "WeblateProvider":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP sessions of the resource APIs."""
        clients = []
        for api in (self.component_api, self.translation_api, self.unit_api):
            if not any(api.client is client for client in clients):
                clients.append(api.client)

        for client in clients:
            client.close()
        logger.debug("weblate_provider_closed", endpoint=self.endpoint)

    def write(self, bag: TranslatorBag) -> None:
        """Push every catalogue of ``bag`` to Weblate.

        A missing component is created from the dumped domain, which makes
        that content the default-locale translation. A missing translation is
        created and receives the local content. An existing translation is
        downloaded first: messages only found on the server are added to the
        local catalogue before the merged content replaces the server file.

        Raises:
            WeblateAPIError: If any API call fails
        """
        for catalogue in bag.get_catalogues():
            for domain in catalogue.get_domains():
                self._write_domain(catalogue, domain)

    def read(
        self, domains: Optional[Iterable[str]], locales: Iterable[str]
    ) -> TranslatorBag:
        """Download the given domains and locales.

        Args:
            domains: Domains to read; every component of the project when
                empty.
            locales: Locales to read. A missing translation is created.

        Returns:
            TranslatorBag with one catalogue per locale.

        Raises:
            WeblateAPIError: If any API call fails
        """
        domains = list(domains or [])
        if not domains:
            domains = list(self.component_api.get_components())

        locales = list(locales)
        bag = TranslatorBag()

        for domain in domains:
            resolved = self.component_api.get_component(domain)
            if resolved is None:
                logger.debug("weblate_read_component_missing", domain=domain)
                continue

            for locale in locales:
                translation = self.translation_api.get_translation(
                    resolved.resource, locale
                ).resource
                content = self.translation_api.download_translation(translation)
                bag.add_catalogue(self.loader.load(content, locale, domain))

        logger.info(
            "weblate_read_completed",
            endpoint=self.endpoint,
            domains=len(domains),
            locales=len(locales),
        )
        return bag

    def delete(self, bag: TranslatorBag) -> None:
        """Delete the units matching the messages of ``bag``.

        Nothing is created: domains without a component, locales without a
        translation and keys without a unit are skipped.

        Raises:
            WeblateAPIError: If any API call fails
        """
        for catalogue in bag.get_catalogues():
            for domain in catalogue.get_domains():
                messages = catalogue.all(domain)
                if not messages:
                    continue

                resolved = self.component_api.get_component(domain)
                if resolved is None:
                    continue

                component = resolved.resource
                if not self.translation_api.has_translation(component, catalogue.locale):
                    continue

                translation = self.translation_api.get_translation(
                    component, catalogue.locale
                ).resource

                deleted = 0
                for key in messages:
                    unit = self.unit_api.get_unit(translation, key)
                    if unit is None:
                        continue
                    self.unit_api.delete_unit(unit)
                    deleted += 1

                logger.info(
                    "weblate_units_deleted",
                    domain=domain,
                    locale=catalogue.locale,
                    count=deleted,
                )

    def _write_domain(self, catalogue: MessageCatalogue, domain: str) -> None:
        locale = catalogue.locale
        log = logger.bind(domain=domain, locale=locale)

        if not catalogue.all(domain):
            log.debug("weblate_write_skipped_empty_domain")
            return

        content = self._dump(catalogue, domain)
        component = self.component_api.get_component(domain, content)
        if component is None:
            log.error("weblate_component_unresolved")
            return

        if component.created and locale == self.default_locale:
            log.info("weblate_component_created_from_source")
            return

        resolved = self.translation_api.get_translation(component.resource, locale)
        translation = resolved.resource

        if resolved.created:
            self.translation_api.upload_translation(translation, content)
            log.info("weblate_translation_created")
            return

        remote_content = self.translation_api.download_translation(translation)
        remote = self.loader.load(remote_content, locale, domain)

        merge = merge_catalogues(catalogue, remote, domain)
        self.translation_api.upload_translation(
            translation, self._dump(merge.catalogue, domain)
        )
        merge.apply_to(catalogue)
        log.info(
            "weblate_translation_updated",
            merged=merge.has_changes,
            new_messages=len(merge.new_messages),
        )

    def _dump(self, catalogue: MessageCatalogue, domain: str) -> str:
        return self.dumper.format_catalogue(
            catalogue, domain, default_locale=self.default_locale
        )
