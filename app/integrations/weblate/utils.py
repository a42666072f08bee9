"""Helpers shared by the Weblate resource APIs."""

from typing import Any

from core.logging import get_module_logger

logger = get_module_logger()

TRANS_UNIT_TAG = "<trans-unit"
PRESERVE_SPACE = '<trans-unit xml:space="preserve"'


def preserve_whitespace(content: str) -> str:
    """Mark every XLIFF ``trans-unit`` element to keep literal whitespace.

    Weblate strips leading and trailing blanks from messages unless the unit
    says otherwise.
    """
    return content.replace(TRANS_UNIT_TAG, PRESERVE_SPACE)


def log_failed_response(event: str, response: Any, **context: Any) -> None:
    """Log the status and body of an unexpected Weblate response."""
    logger.debug(
        event,
        status_code=getattr(response, "status_code", None),
        body=getattr(response, "text", ""),
        **context,
    )
