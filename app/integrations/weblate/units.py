"""Weblate units: per-translation listing, add, update and delete.

API reference: https://docs.weblate.org/en/latest/api.html#units
"""

from typing import Dict, Optional

from core.logging import get_module_logger
from integrations.weblate.client import WeblateClient
from integrations.weblate.errors import WeblateAPIError
from integrations.weblate.models import Translation, Unit
from integrations.weblate.utils import log_failed_response

logger = get_module_logger()

# Weblate unit states; only these two are ever written.
STATE_EMPTY = 0
STATE_TRANSLATED = 20


class UnitApi:
    """Cache of units keyed by translation filename, then message key."""

    def __init__(self, client: WeblateClient):
        self.client = client
        self._units: Dict[str, Dict[str, Unit]] = {}

    def get_units(self, translation: Translation, reload: bool = False) -> Dict[str, Unit]:
        """Return the units of a translation keyed by context (message key).

        Raises:
            WeblateAPIError: If the listing does not answer 200
        """
        if translation.filename in self._units and not reload:
            return self._units[translation.filename]

        units: Dict[str, Unit] = {}
        for result in self.client.iter_results(
            translation.units_list_url,
            f"Unable to get weblate units for {translation.filename}.",
        ):
            unit = Unit.model_validate(result)
            units[unit.context] = unit
            logger.debug(
                "weblate_unit_loaded",
                filename=translation.filename,
                context=unit.context,
            )

        self._units[translation.filename] = units
        return units

    def has_unit(self, translation: Translation, key: str) -> bool:
        return key in self.get_units(translation)

    def get_unit(self, translation: Translation, key: str) -> Optional[Unit]:
        return self.get_units(translation).get(key)

    def add_unit(self, translation: Translation, key: str, value: str) -> None:
        """Add a unit to a translation.

        The new unit is not added to the cache; reload the units of the
        translation to see it.

        Raises:
            WeblateAPIError: If the server does not answer 200
        """
        response = self.client.request(
            "POST", translation.units_list_url, data={"key": key, "value": value}
        )

        if response.status_code != 200:
            log_failed_response(
                "weblate_unit_add_failed",
                response,
                filename=translation.filename,
                context=key,
            )
            raise WeblateAPIError(
                f"Unable to add weblate unit for {translation.filename} {key}.",
                response,
            )

        logger.debug("weblate_unit_added", filename=translation.filename, context=key)

    def update_unit(self, unit: Unit, value: str) -> None:
        """Set the target of a unit; an empty value marks it untranslated.

        Raises:
            WeblateAPIError: If the server does not answer 200
        """
        state = STATE_TRANSLATED if value else STATE_EMPTY
        response = self.client.request(
            "PATCH", unit.url, data={"target": value, "state": state}
        )

        if response.status_code != 200:
            log_failed_response("weblate_unit_update_failed", response, context=unit.context)
            raise WeblateAPIError(
                f"Unable to update weblate unit for {unit.context} {value}.", response
            )

        logger.debug("weblate_unit_updated", context=unit.context, state=state)

    def delete_unit(self, unit: Unit) -> None:
        """Delete a unit on the server and drop it from the cache.

        Raises:
            WeblateAPIError: If the server does not answer 204
        """
        response = self.client.request("DELETE", unit.url)

        if response.status_code != 204:
            log_failed_response("weblate_unit_delete_failed", response, context=unit.context)
            raise WeblateAPIError(
                f"Unable to delete weblate unit for {unit.context}.", response
            )

        for units in self._units.values():
            if units.get(unit.context) == unit:
                del units[unit.context]

        logger.debug("weblate_unit_deleted", context=unit.context)
