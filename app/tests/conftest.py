import sys
from pathlib import Path
from unittest.mock import MagicMock

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `core.config`) works during pytest collection.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest  # noqa: E402

from integrations.weblate import WeblateClient  # noqa: E402
from tests.factories.weblate import make_response  # noqa: E402


@pytest.fixture
def mock_session():
    """A requests.Session stand-in; queue responses on ``request.side_effect``."""
    session = MagicMock()
    session.headers = {}
    session.request.return_value = make_response(200, {"results": [], "next": None})
    return session


@pytest.fixture
def weblate_client(mock_session):
    """WeblateClient bound to https://weblate.example.com/api/ and a mocked session."""
    return WeblateClient(
        "https://weblate.example.com/api/",
        token="wlu_token",
        session=mock_session,
    )
