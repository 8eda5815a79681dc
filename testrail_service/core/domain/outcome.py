"""
Outcome of a single TestRail request.
"""
from dataclasses import dataclass
from typing import Any, Optional

from testrail_service.exceptions import TestRailApiError


@dataclass
class ApiOutcome:
    """Tagged success/failure result of one request/response cycle.

    ``value`` holds the decoded entity (or list) on success. On failure
    ``error_message`` carries the message TestRail put in its error body
    and ``reason`` the HTTP reason phrase.
    """
    status_code: int
    value: Any = None
    error_message: Optional[str] = None
    reason: str = ""
    url: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @property
    def rate_limited(self) -> bool:
        return self.status_code == 429

    def unwrap(self) -> Any:
        """Return the decoded value or raise ``TestRailApiError``."""
        if not self.ok:
            raise TestRailApiError(self.status_code, self.error_message or self.reason, self.url)
        return self.value

    def __bool__(self) -> bool:
        return self.ok
