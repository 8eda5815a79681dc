"""
Test doubles for the TestRail transport.
"""
import json
from typing import Any, Dict, List, Optional

from testrail_service.core.interfaces.transport import HttpTransport, TransportResponse


def json_response(
    payload: Any,
    status: int = 200,
    reason: str = "OK",
    headers: Optional[Dict[str, str]] = None
) -> TransportResponse:
    """Build a TransportResponse whose body is ``payload`` as JSON."""
    return TransportResponse(
        status_code=status,
        content=json.dumps(payload).encode('utf-8'),
        headers=headers or {},
        reason=reason
    )


class FakeTransport(HttpTransport):
    """Scripted transport: answers with queued responses and records every call."""

    def __init__(self, *responses: TransportResponse):
        self.responses: List[TransportResponse] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def queue(self, *responses: TransportResponse) -> None:
        self.responses.extend(responses)

    def _answer(self, call: Dict[str, Any]) -> TransportResponse:
        self.calls.append(call)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {call['method']} {call['url']}")
        return self.responses.pop(0)

    def get(self, url, auth_header, headers=None):
        return self._answer({
            'method': 'GET', 'url': url, 'auth': auth_header,
            'body': None, 'headers': headers or {}
        })

    def post(self, url, auth_header, body, headers=None):
        return self._answer({
            'method': 'POST', 'url': url, 'auth': auth_header,
            'body': body, 'headers': headers or {}
        })

    @property
    def urls(self) -> List[str]:
        return [call['url'] for call in self.calls]

    def body_json(self, index: int = -1) -> Any:
        """Decoded JSON body of a recorded POST."""
        body = self.calls[index]['body']
        return json.loads(body.decode('utf-8')) if body else None
