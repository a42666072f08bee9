"""HTTP transport for the Weblate REST API.

Every request is sent through one ``requests.Session`` scoped to the API base
URL of a Weblate server. Relative paths are resolved against that base;
absolute locators returned by the API (``url``, ``file_url``, ...) are used
as-is.

Usage:
    from integrations.weblate.client import WeblateClient

    client = WeblateClient("https://weblate.example.com/api/", token="wlu_...")
    response = client.request("GET", "projects/website/components/")
"""

from typing import Any, Dict, Iterator, Optional
from urllib.parse import urljoin

import requests

from core.logging import get_module_logger
from integrations.weblate.errors import WeblateAPIError
from integrations.weblate.utils import log_failed_response

logger = get_module_logger()


class WeblateClient:
    """Token-authenticated session for one Weblate API endpoint.

    Attributes:
        base_uri: API root, always ending with a slash
        timeout: Timeout in seconds applied to every request
        verify_peer: Whether TLS certificates are verified
    """

    def __init__(
        self,
        base_uri: str,
        token: str,
        verify_peer: bool = True,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_uri = base_uri if base_uri.endswith("/") else base_uri + "/"
        self.timeout = timeout
        self.verify_peer = verify_peer
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Token {token}",
                "Accept": "application/json",
                "User-Agent": "weblate-sync/0.1",
            }
        )
        self._session.verify = verify_peer
        self._logger = logger.bind(base_uri=self.base_uri)

    def url(self, path: str) -> str:
        return urljoin(self.base_uri, path)

    def request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """Send one request and return the raw response.

        Status codes are not interpreted here; each resource API checks the
        code its operation expects.

        Args:
            method: HTTP method
            path: Path relative to the API root, or an absolute locator
            data: Form fields (urlencoded, or multipart when ``files`` is set)
            files: Multipart file parts as ``{field: (filename, content)}``

        Returns:
            The ``requests.Response``

        Raises:
            requests.RequestException: On transport failures
        """
        url = self.url(path)
        log = self._logger.bind(method=method, url=url)
        log.debug("weblate_request")

        response = self._session.request(
            method=method,
            url=url,
            data=data,
            files=files,
            timeout=self.timeout,
        )

        log.debug("weblate_response", status_code=response.status_code)
        return response

    def iter_results(self, path: str, error_message: str) -> Iterator[Dict[str, Any]]:
        """Yield every item of a paginated list endpoint.

        Weblate list endpoints answer ``{"results": [...], "next": url}``;
        pages are followed until ``next`` is empty.

        Raises:
            WeblateAPIError: If any page does not answer 200
        """
        next_page: Optional[str] = path
        while next_page:
            response = self.request("GET", next_page)
            if response.status_code != 200:
                log_failed_response("weblate_request_failed", response, url=next_page)
                raise WeblateAPIError(error_message, response)

            payload = response.json()
            yield from payload.get("results", [])
            next_page = payload.get("next")

    def close(self) -> None:
        """Close the HTTP session and release connections."""
        self._session.close()
        self._logger.debug("weblate_client_closed")
