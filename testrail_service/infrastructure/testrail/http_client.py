"""
TestRail HTTP transport - low-level HTTP interactions with TestRail.

This module handles only HTTP concerns: it sends one request, reads the
whole response and releases the connection.
"""
import base64
import logging
from typing import Dict, Optional

import requests

from testrail_service.core.interfaces.transport import HttpTransport, TransportResponse
from testrail_service.exceptions import TestRailConnectionError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = 'application/json'


def basic_auth_header(username: str, password: str) -> str:
    """Create the Basic ``Authorization`` header value."""
    # TestRail uses Basic Auth with username:password (or email:api_key)
    credentials = base64.b64encode(
        f"{username}:{password}".encode()
    ).decode()
    return f'Basic {credentials}'


class RequestsTransport(HttpTransport):
    """``requests`` based transport; one session per call, no pooling."""

    def __init__(self, timeout: float = 30):
        """Initialize transport.

        Args:
            timeout: Connect/read timeout in seconds
        """
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    def _create_headers(
        self,
        auth_header: str,
        headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, str]:
        merged = {'Content-Type': JSON_CONTENT_TYPE}
        merged.update(headers or {})
        merged['Authorization'] = auth_header
        return merged

    @staticmethod
    def _to_response(response: requests.Response) -> TransportResponse:
        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers=response.headers,
            reason=response.reason or ""
        )

    def get(
        self,
        url: str,
        auth_header: str,
        headers: Optional[Dict[str, str]] = None
    ) -> TransportResponse:
        """Make GET request to TestRail API.

        Args:
            url: Complete request URL
            auth_header: ``Authorization`` header value
            headers: Optional extra headers

        Returns:
            TransportResponse with the fully read body

        Raises:
            TestRailConnectionError: If the request fails at network level
        """
        logger.debug("GET %s", url)
        try:
            with requests.Session() as session:
                response = session.get(
                    url,
                    headers=self._create_headers(auth_header, headers),
                    timeout=self._timeout
                )
                return self._to_response(response)
        except requests.RequestException as e:
            logger.error(
                "An exception was raised while processing a REST request against URL: %s", url
            )
            raise TestRailConnectionError(url, str(e)) from e

    def post(
        self,
        url: str,
        auth_header: str,
        body: bytes,
        headers: Optional[Dict[str, str]] = None
    ) -> TransportResponse:
        """Make POST request to TestRail API.

        Args:
            url: Complete request URL
            auth_header: ``Authorization`` header value
            body: Raw JSON body
            headers: Optional extra headers

        Returns:
            TransportResponse with status, body and headers

        Raises:
            TestRailConnectionError: If the request fails at network level
        """
        logger.debug("POST %s (%d bytes)", url, len(body or b""))
        try:
            with requests.Session() as session:
                response = session.post(
                    url,
                    headers=self._create_headers(auth_header, headers),
                    data=body or b"",
                    timeout=self._timeout
                )
                return self._to_response(response)
        except requests.RequestException as e:
            logger.error(
                "An exception was raised while processing a REST request against URL: [%s]", url
            )
            raise TestRailConnectionError(url, str(e)) from e
