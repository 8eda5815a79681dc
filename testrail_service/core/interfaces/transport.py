"""
Transport interface the service talks HTTP through.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional


@dataclass
class TransportResponse:
    """Status, raw body and headers of one HTTP response."""
    status_code: int
    content: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)
    reason: str = ""

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        value = self.headers.get(name)
        if value is not None:
            return value
        lowered = name.lower()
        for key, header_value in self.headers.items():
            if key.lower() == lowered:
                return header_value
        return None


class HttpTransport(ABC):
    """Performs single GET/POST round trips."""

    @abstractmethod
    def get(
        self,
        url: str,
        auth_header: str,
        headers: Optional[Dict[str, str]] = None
    ) -> TransportResponse:
        """Issue a GET and return once the whole response is read.

        Args:
            url: Complete request URL
            auth_header: Value of the ``Authorization`` header
            headers: Extra request headers

        Returns:
            TransportResponse

        Raises:
            TestRailConnectionError: If no response could be obtained
        """
        pass

    @abstractmethod
    def post(
        self,
        url: str,
        auth_header: str,
        body: bytes,
        headers: Optional[Dict[str, str]] = None
    ) -> TransportResponse:
        """Issue a POST with a raw JSON body.

        Args:
            url: Complete request URL
            auth_header: Value of the ``Authorization`` header
            body: Encoded JSON body (may be empty)
            headers: Extra request headers

        Returns:
            TransportResponse

        Raises:
            TestRailConnectionError: If no response could be obtained
        """
        pass
