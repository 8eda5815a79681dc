"""
JSON encoding/decoding of TestRail entities.
"""
import json
from typing import Any, List, Optional, Type, TypeVar

from testrail_service.core.domain.base import BaseEntity, ErrorPayload
from testrail_service.exceptions import TestRailConnectionError

E = TypeVar("E", bound=BaseEntity)


class JsonCodec:
    """Converts entities to request bodies and response bodies to entities."""

    encoding = 'utf-8'

    def encode(self, entity: Optional[BaseEntity]) -> bytes:
        """Encode an entity, leaving out unset fields. ``None`` gives an empty body."""
        if entity is None:
            return b""
        return json.dumps(entity.to_dict()).encode(self.encoding)

    def _load(self, content: bytes, url: Optional[str] = None) -> Any:
        if not content or not content.strip():
            return None
        try:
            return json.loads(content.decode(self.encoding))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise TestRailConnectionError(url or "<unknown>", f"malformed response: {e}") from e

    def decode(
        self,
        content: bytes,
        entity_type: Type[E],
        url: Optional[str] = None
    ) -> Optional[E]:
        """Decode a single entity; an empty or ``null`` body gives None."""
        data = self._load(content, url)
        if data is None:
            return None
        try:
            return entity_type.from_dict(data)
        except TypeError as e:
            raise TestRailConnectionError(url or "<unknown>", f"malformed response: {e}") from e

    def decode_list(
        self,
        content: bytes,
        entity_type: Type[E],
        envelope: Optional[str] = None,
        url: Optional[str] = None
    ) -> List[E]:
        """Decode a list of entities, keeping the server's order.

        TestRail 6.7+ wraps bulk responses in a paginated object
        (``{"offset": 0, "size": 2, "cases": [...]}``); the list is read from
        the ``envelope`` key in that case.
        """
        data = self._load(content, url)
        if data is None:
            return []
        if isinstance(data, dict):
            if envelope and envelope in data:
                data = data[envelope]
            else:
                raise TestRailConnectionError(
                    url or "<unknown>",
                    f"malformed response: expected a list of {entity_type.__name__}"
                )
        try:
            return [entity_type.from_dict(item) for item in data or []]
        except TypeError as e:
            raise TestRailConnectionError(url or "<unknown>", f"malformed response: {e}") from e

    def decode_error(self, content: bytes) -> str:
        """Extract the message from a TestRail error body."""
        if not content:
            return ""
        try:
            data = json.loads(content.decode(self.encoding))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return content.decode(self.encoding, errors='replace').strip()
        if isinstance(data, dict):
            return ErrorPayload.from_dict(data).error or ""
        return str(data)
