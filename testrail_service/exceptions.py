"""
Exceptions raised by the TestRail service client.
"""
from typing import Optional


class TestRailError(Exception):
    """Base class for every TestRail client error."""

    __test__ = False


class TestRailConnectionError(TestRailError):
    """The request never produced a usable response (refused, timeout, garbage)."""

    def __init__(self, url: str, detail: str = ""):
        self.url = url
        self.detail = detail
        message = f"Connection is null, check URL: {url}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class TestRailApiError(TestRailError):
    """TestRail answered a read with a non-200 status."""

    def __init__(
        self,
        status_code: int,
        error_message: str = "",
        url: Optional[str] = None
    ):
        self.status_code = status_code
        self.error_message = error_message
        self.url = url
        message = f"TestRail returned HTTP {status_code}"
        if url:
            message += f" for [{url}]"
        if error_message:
            message += f": {error_message}"
        super().__init__(message)


class TestRailOperationError(TestRailError):
    """A delete/close/add-result call was rejected by TestRail."""

    def __init__(
        self,
        message: str,
        resource_id: int,
        status_code: int,
        reason: str = ""
    ):
        self.resource_id = resource_id
        self.status_code = status_code
        self.reason = reason
        super().__init__(message)
