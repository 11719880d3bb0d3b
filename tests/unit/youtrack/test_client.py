"""Tests for the YouTrack REST client."""

from unittest.mock import MagicMock

import pytest
import requests
from requests.exceptions import HTTPError

from youtrack_mcp.exceptions import (
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    YouTrackAPIError,
    YouTrackAuthenticationError,
)
from youtrack_mcp.youtrack.auth import BearerTokenAuth
from youtrack_mcp.youtrack.client import YouTrackClient


def _response(status_code=200, body=None, reason="OK"):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.reason = reason
    response.content = b"{}" if body is not None else b""
    response.json.return_value = body
    response.text = ""
    if status_code >= 400:
        response.raise_for_status.side_effect = HTTPError(response=response)
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session, headers={})


@pytest.fixture
def client(youtrack_config, session):
    return YouTrackClient(config=youtrack_config, session=session)


class TestYouTrackClient:
    def test_session_setup(self, client, session):
        assert isinstance(session.auth, BearerTokenAuth)
        assert session.verify is True
        assert session.headers["Accept"] == "application/json"

    def test_get_builds_api_url(self, client, session):
        session.request.return_value = _response(body={"id": "0-1"})

        result = client.get("issues/PROJ-1", params={"fields": "id"})

        assert result == {"id": "0-1"}
        session.request.assert_called_once_with(
            "GET",
            "https://test.youtrack.cloud/api/issues/PROJ-1",
            params={"fields": "id"},
            json=None,
            timeout=30.0,
        )

    def test_post_sends_json(self, client, session):
        session.request.return_value = _response(body={"id": "1"})

        client.post("/commands", json={"query": "State: Open"})

        args, kwargs = session.request.call_args
        assert args == ("POST", "https://test.youtrack.cloud/api/commands")
        assert kwargs["json"] == {"query": "State: Open"}

    def test_empty_body_returns_none(self, client, session):
        session.request.return_value = _response()
        assert client.delete("issues/PROJ-1") is None

    def test_401_raises_authentication_error(self, client, session):
        session.request.return_value = _response(401, {"error": "denied"}, "Unauthorized")
        with pytest.raises(YouTrackAuthenticationError, match="401"):
            client.get("users/me")

    def test_403_raises_permission_denied(self, client, session):
        session.request.return_value = _response(403, {"error_description": "no"}, "Forbidden")
        with pytest.raises(PermissionDeniedError, match="403 Forbidden") as excinfo:
            client.get("issues/PROJ-1")
        assert excinfo.value.status_code == 403

    def test_404_raises_not_found(self, client, session):
        session.request.return_value = _response(404, {"error": "Not Found"}, "Not Found")
        with pytest.raises(NotFoundError, match="404"):
            client.get("issues/NOPE-1")

    def test_400_raises_api_error_with_status(self, client, session):
        session.request.return_value = _response(400, {"error": "bad query"}, "Bad Request")
        with pytest.raises(YouTrackAPIError) as excinfo:
            client.get("issues", params={"query": "((("})
        assert excinfo.value.status_code == 400
        assert not isinstance(excinfo.value, NotFoundError)
        assert "400 Bad Request" in str(excinfo.value)

    def test_connection_error_raises_network_error(self, client, session):
        session.request.side_effect = requests.ConnectionError("Connection refused")
        with pytest.raises(NetworkError, match="Cannot reach YouTrack"):
            client.get("issues")

    def test_timeout_raises_network_error(self, client, session):
        session.request.side_effect = requests.Timeout("timed out")
        with pytest.raises(NetworkError):
            client.get("issues")


class TestBearerTokenAuth:
    def test_sets_authorization_header(self):
        request = MagicMock(headers={})
        BearerTokenAuth(lambda: "perm:abc")(request)
        assert request.headers["Authorization"] == "Bearer perm:abc"

    def test_reads_token_on_every_request(self):
        tokens = iter(["one", "two"])
        auth = BearerTokenAuth(lambda: next(tokens))
        first, second = MagicMock(headers={}), MagicMock(headers={})
        auth(first)
        auth(second)
        assert first.headers["Authorization"] == "Bearer one"
        assert second.headers["Authorization"] == "Bearer two"
