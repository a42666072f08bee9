"""Errors raised by the Weblate integration."""

from typing import Any, Optional


class WeblateAPIError(Exception):
    """Raised when a Weblate API call does not answer with its expected status.

    Attributes:
        message: human-friendly description of the failed operation
        response: the ``requests.Response`` returned by the server
    """

    def __init__(self, message: str, response: Any = None):
        super().__init__(message)
        self.message = message
        self.response = response

    @property
    def status_code(self) -> Optional[int]:
        return getattr(self.response, "status_code", None)


class UnsupportedSchemeError(ValueError):
    """Raised when a DSN does not use the ``weblate`` scheme."""

    def __init__(self, scheme: str, supported: Optional[list] = None):
        supported = supported or ["weblate"]
        super().__init__(
            f'The "{scheme}" scheme is not supported; supported schemes are: '
            f'"{", ".join(supported)}".'
        )
        self.scheme = scheme
        self.supported = supported


class IncompleteDsnError(ValueError):
    """Raised when a DSN lacks the project (user) or API token (password)."""
