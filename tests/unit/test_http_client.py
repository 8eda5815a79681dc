"""
Unit tests for the requests based transport.
"""
import base64
from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from testrail_service.exceptions import TestRailConnectionError
from testrail_service.infrastructure.testrail.http_client import (
    RequestsTransport,
    basic_auth_header,
)

SESSION = 'testrail_service.infrastructure.testrail.http_client.requests.Session'
URL = "https://acme.testrail.com/index.php?/api/v2/get_case/7"


def fake_response(status=200, content=b'{"id": 7}', reason="OK", headers=None):
    response = Mock(spec=requests.Response)
    response.status_code = status
    response.content = content
    response.reason = reason
    response.headers = headers or {}
    return response


def session_returning(response=None, error=None):
    """Patched Session class whose context-managed instance answers once."""
    session = MagicMock()
    session.__enter__.return_value = session
    session.__exit__.return_value = False
    for method in (session.get, session.post):
        if error is not None:
            method.side_effect = error
        else:
            method.return_value = response
    return session


class TestBasicAuthHeader:
    """Test Authorization header creation."""

    def test_encodes_credentials(self):
        header = basic_auth_header("qa@acme.com", "secret")
        assert header.startswith("Basic ")
        assert base64.b64decode(header[6:]).decode() == "qa@acme.com:secret"


class TestRequestsTransport:
    """Test GET/POST round trips."""

    @patch(SESSION)
    def test_get(self, mock_session_class):
        session = session_returning(fake_response())
        mock_session_class.return_value = session

        result = RequestsTransport(timeout=12).get(URL, "Basic abc", {"X-Trace": "1"})

        assert result.status_code == 200
        assert result.content == b'{"id": 7}'
        session.get.assert_called_once()
        args, kwargs = session.get.call_args
        assert args[0] == URL
        assert kwargs['timeout'] == 12
        assert kwargs['headers']['Authorization'] == "Basic abc"
        assert kwargs['headers']['Content-Type'] == "application/json"
        assert kwargs['headers']['X-Trace'] == "1"

    @patch(SESSION)
    def test_post_sends_raw_json_bytes(self, mock_session_class):
        session = session_returning(fake_response(headers={"Retry-After": "3"}, status=429,
                                                  reason="Too Many Requests"))
        mock_session_class.return_value = session

        result = RequestsTransport().post(URL, "Basic abc", b'{"status_id": 1}')

        _, kwargs = session.post.call_args
        assert kwargs['data'] == b'{"status_id": 1}'
        assert kwargs['headers']['Content-Type'] == "application/json"
        assert result.status_code == 429
        assert result.reason == "Too Many Requests"
        assert result.header("Retry-After") == "3"

    @patch(SESSION)
    def test_session_is_always_closed(self, mock_session_class):
        session = session_returning(error=requests.ConnectionError("refused"))
        mock_session_class.return_value = session

        with pytest.raises(TestRailConnectionError):
            RequestsTransport().get(URL, "Basic abc")

        session.__exit__.assert_called_once()

    @patch(SESSION)
    def test_network_failure_names_url(self, mock_session_class):
        mock_session_class.return_value = session_returning(error=requests.Timeout("read timed out"))

        with pytest.raises(TestRailConnectionError) as exc_info:
            RequestsTransport().post(URL, "Basic abc", b"")

        assert exc_info.value.url == URL
        assert URL in str(exc_info.value)
        assert "read timed out" in str(exc_info.value)

    @patch(SESSION)
    def test_new_session_per_call(self, mock_session_class):
        mock_session_class.return_value = session_returning(fake_response())
        transport = RequestsTransport()

        transport.get(URL, "Basic abc")
        transport.post(URL, "Basic abc", b"{}")

        assert mock_session_class.call_count == 2
