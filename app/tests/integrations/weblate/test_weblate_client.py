from unittest.mock import MagicMock, patch

import pytest
import requests

from integrations.weblate import WeblateAPIError, WeblateClient
from tests.factories.weblate import make_page, make_response


@pytest.mark.unit
class TestWeblateClient:
    """Tests for the Weblate HTTP transport."""

    def test_init_sets_auth_headers_and_verify(self, mock_session):
        """The session carries the token and the TLS verification flag."""
        WeblateClient(
            "http://localhost:8080/api",
            token="secret",
            verify_peer=False,
            session=mock_session,
        )

        assert mock_session.headers["Authorization"] == "Token secret"
        assert mock_session.headers["Accept"] == "application/json"
        assert mock_session.verify is False

    def test_init_adds_trailing_slash(self, mock_session):
        """The base URI always ends with a slash."""
        client = WeblateClient("https://weblate.example.com/api", "t", session=mock_session)
        assert client.base_uri == "https://weblate.example.com/api/"

    @patch("integrations.weblate.client.requests.Session")
    def test_init_creates_session_when_not_given(self, session_cls):
        """A new requests.Session is created when none is passed."""
        session_cls.return_value.headers = {}
        client = WeblateClient("https://weblate.example.com/api/", "t")
        assert client._session is session_cls.return_value

    def test_url_joins_relative_paths(self, weblate_client):
        """Relative paths resolve against the API root."""
        assert (
            weblate_client.url("projects/website/components/")
            == "https://weblate.example.com/api/projects/website/components/"
        )

    def test_url_keeps_absolute_locators(self, weblate_client):
        """Absolute URLs returned by the API are used as-is."""
        locator = "https://weblate.example.com/api/units/7/"
        assert weblate_client.url(locator) == locator

    def test_request_passes_data_files_and_timeout(self, weblate_client, mock_session):
        """request() forwards form data, files and the configured timeout."""
        expected = make_response(201, {})
        mock_session.request.return_value = expected

        response = weblate_client.request(
            "POST", "components/", data={"a": "b"}, files={"f": ("x.xlf", "<x/>")}
        )

        assert response is expected
        mock_session.request.assert_called_once_with(
            method="POST",
            url="https://weblate.example.com/api/components/",
            data={"a": "b"},
            files={"f": ("x.xlf", "<x/>")},
            timeout=30,
        )

    def test_request_does_not_interpret_status(self, weblate_client, mock_session):
        """Unexpected statuses are returned, not raised."""
        mock_session.request.return_value = make_response(500, {"detail": "boom"})
        assert weblate_client.request("GET", "x/").status_code == 500

    def test_request_propagates_transport_errors(self, weblate_client, mock_session):
        """Transport exceptions reach the caller unchanged."""
        mock_session.request.side_effect = requests.ConnectionError("down")
        with pytest.raises(requests.ConnectionError):
            weblate_client.request("GET", "x/")

    def test_iter_results_follows_next_links(self, weblate_client, mock_session):
        """Every page of a paginated listing is yielded in order."""
        next_url = "https://weblate.example.com/api/x/?page=2"
        mock_session.request.side_effect = [
            make_response(200, make_page([{"n": 1}, {"n": 2}], next_url)),
            make_response(200, make_page([{"n": 3}])),
        ]

        results = list(weblate_client.iter_results("x/", "failed"))

        assert results == [{"n": 1}, {"n": 2}, {"n": 3}]
        assert mock_session.request.call_count == 2
        assert mock_session.request.call_args.kwargs["url"] == next_url

    def test_iter_results_raises_on_failed_page(self, weblate_client, mock_session):
        """A non-200 page raises WeblateAPIError with the given message."""
        mock_session.request.return_value = make_response(403, {"detail": "no"})

        with pytest.raises(WeblateAPIError) as exc_info:
            list(weblate_client.iter_results("x/", "Unable to list x."))

        assert exc_info.value.message == "Unable to list x."
        assert exc_info.value.status_code == 403

    def test_close_closes_session(self, weblate_client, mock_session):
        """close() releases the HTTP session."""
        weblate_client.close()
        mock_session.close.assert_called_once()


@pytest.mark.unit
def test_weblate_api_error_without_response():
    """status_code is None when no response is attached."""
    error = WeblateAPIError("failed")
    assert str(error) == "failed"
    assert error.status_code is None
    assert WeblateAPIError("failed", MagicMock(status_code=404)).status_code == 404
