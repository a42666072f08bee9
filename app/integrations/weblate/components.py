"""Weblate components: listing, get-or-create, delete and commit.

API reference: https://docs.weblate.org/en/latest/api.html#components
"""

from typing import Dict, Optional, Set

from core.logging import get_module_logger
from integrations.weblate.client import WeblateClient
from integrations.weblate.errors import WeblateAPIError
from integrations.weblate.models import Component, Resolved
from integrations.weblate.utils import log_failed_response, preserve_whitespace

logger = get_module_logger()

# Weblate creates a glossary component in every project; it never holds a
# translation domain.
RESERVED_SLUGS = frozenset({"glossary"})


class ComponentApi:
    """Cache of the components of one Weblate project.

    The component list is fetched once, on first use, and then served from
    memory until ``get_components(reload=True)`` is called.
    """

    def __init__(self, client: WeblateClient, project: str, default_locale: str):
        self.client = client
        self.project = project
        self.default_locale = default_locale
        self._components: Optional[Dict[str, Component]] = None
        self._created: Set[str] = set()

    @property
    def _list_path(self) -> str:
        return f"projects/{self.project}/components/"

    def get_components(self, reload: bool = False) -> Dict[str, Component]:
        """Return every component of the project keyed by slug.

        Args:
            reload: Discard the cached list and fetch it again.

        Raises:
            WeblateAPIError: If the listing does not answer 200
        """
        if self._components is not None and not reload:
            return self._components

        components: Dict[str, Component] = {}
        for result in self.client.iter_results(
            self._list_path, "Unable to get weblate components."
        ):
            component = Component.model_validate(result)
            if component.slug in RESERVED_SLUGS:
                continue

            components[component.slug] = component
            logger.debug("weblate_component_loaded", slug=component.slug)

        self._components = components
        # Listing results are never reported as created.
        if reload:
            self._created.clear()
        else:
            self._created.difference_update(components)
        return self._components

    def has_component(self, slug: str) -> bool:
        return slug in self.get_components()

    def get_component(
        self, slug: str, optional_content: str = ""
    ) -> Optional[Resolved[Component]]:
        """Return the component for ``slug``, creating it when content is given.

        Args:
            slug: Component slug (the translation domain)
            optional_content: XLIFF document used as the component template if
                the component does not exist yet.

        Returns:
            The resolved component, or None when it does not exist and no
            content was given.
        """
        if self.has_component(slug):
            return self._resolved(self.get_components()[slug])

        if not optional_content:
            return None

        return self.add_component(slug, optional_content)

    def add_component(self, slug: str, content: str) -> Resolved[Component]:
        """Create a component whose template is ``content``.

        The content is uploaded as ``<slug>/<default_locale>.xlf`` and
        becomes the source-language translation of the new component.

        Raises:
            WeblateAPIError: If the server does not answer 201
        """
        content = preserve_whitespace(content)

        form_fields = {
            "name": slug,
            "slug": slug,
            "edit_template": "true",
            "manage_units": "true",
            "source_language": self.default_locale,
            "file_format": "xliff",
        }
        files = {"docfile": (f"{slug}/{self.default_locale}.xlf", content)}

        response = self.client.request(
            "POST", self._list_path, data=form_fields, files=files
        )

        if response.status_code != 201:
            log_failed_response("weblate_component_add_failed", response, slug=slug)
            raise WeblateAPIError(f"Unable to add weblate component {slug}.", response)

        component = Component.model_validate(response.json())
        if self._components is not None:
            self._components[component.slug] = component
        self._created.add(component.slug)

        logger.debug("weblate_component_added", slug=component.slug)

        return Resolved(component, created=True)

    def delete_component(self, component: Component) -> None:
        """Delete a component on the server and drop it from the cache.

        Raises:
            WeblateAPIError: If the server does not answer 204; the cache is
                left untouched in that case.
        """
        response = self.client.request("DELETE", component.url)

        if response.status_code != 204:
            log_failed_response(
                "weblate_component_delete_failed", response, slug=component.slug
            )
            raise WeblateAPIError(
                f"Unable to delete weblate component {component.slug}.", response
            )

        if self._components is not None:
            self._components.pop(component.slug, None)
        self._created.discard(component.slug)

        logger.debug("weblate_component_deleted", slug=component.slug)

    def commit_component(self, component: Component) -> None:
        """Commit pending changes of the component to its VCS repository.

        Raises:
            WeblateAPIError: If the server does not answer 200
        """
        response = self.client.request(
            "POST", component.repository_url, data={"operation": "commit"}
        )

        if response.status_code != 200:
            log_failed_response(
                "weblate_component_commit_failed", response, slug=component.slug
            )
            raise WeblateAPIError(
                f"Unable to commit weblate component {component.slug}.", response
            )

        logger.debug("weblate_component_committed", slug=component.slug)

    def _resolved(self, component: Component) -> Resolved[Component]:
        return Resolved(component, created=component.slug in self._created)
