"""
Request parameters and filters.

TestRail takes positional ids in the path (``get_cases/16``) followed by
``&key=value`` filters (``get_cases/16&suite_id=3``). ``ApiParameters``
keeps both in insertion order so the rendered string is deterministic.
"""
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Union
from urllib.parse import quote


class ApiFilter(str, Enum):
    """Known filter keys accepted by TestRail list endpoints."""
    SUITE_ID = "suite_id"
    SECTION_ID = "section_id"
    LIMIT = "limit"
    OFFSET = "offset"
    IS_COMPLETED = "is_completed"
    IS_STARTED = "is_started"
    EMAIL = "email"
    CREATED_AFTER = "created_after"
    CREATED_BEFORE = "created_before"
    CREATED_BY = "created_by"
    UPDATED_AFTER = "updated_after"
    UPDATED_BEFORE = "updated_before"
    UPDATED_BY = "updated_by"
    MILESTONE_ID = "milestone_id"
    STATUS_ID = "status_id"
    TYPE_ID = "type_id"
    PRIORITY_ID = "priority_id"
    DEFECTS_FILTER = "defects_filter"


def format_value(value: Any) -> str:
    """Render a filter value the way TestRail expects it."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (list, tuple, set)):
        return ",".join(format_value(v) for v in value)
    return quote(str(value), safe=",")


@dataclass(frozen=True)
class ApiFilterValue:
    """A single ``&key=value`` filter."""
    filter: Union[ApiFilter, str]
    value: Any

    @property
    def key(self) -> str:
        if isinstance(self.filter, ApiFilter):
            return self.filter.value
        return str(self.filter)

    def append(self) -> str:
        return f"&{self.key}={format_value(self.value)}"


class ApiParameters:
    """Ordered path ids plus ordered filters.

    Example:
        >>> ApiParameters(16).add(ApiFilter.SUITE_ID, 3).render()
        '16&suite_id=3'
    """

    def __init__(self, *path_ids: Any):
        self._path_ids: List[str] = [str(p) for p in path_ids if p is not None and p != ""]
        self._filters: "OrderedDict[str, str]" = OrderedDict()

    def add(self, key: Union[ApiFilter, str], value: Any) -> "ApiParameters":
        """Add (or replace in place) a filter. Returns self for chaining."""
        name = key.value if isinstance(key, ApiFilter) else str(key)
        self._filters[name] = format_value(value)
        return self

    def add_if_positive(self, key: Union[ApiFilter, str], value: int) -> "ApiParameters":
        """Add an id filter only when it is set (ids <= 0 mean "not specified")."""
        if value is not None and value > 0:
            self.add(key, value)
        return self

    def extend(self, filters: Iterable[ApiFilterValue]) -> "ApiParameters":
        for api_filter in filters:
            self.add(api_filter.key, api_filter.value)
        return self

    def render(self) -> str:
        path = "/".join(self._path_ids)
        query = "".join(f"&{key}={value}" for key, value in self._filters.items())
        return path + query

    def __str__(self) -> str:
        return self.render()

    def __bool__(self) -> bool:
        return bool(self._path_ids or self._filters)

    def __repr__(self) -> str:
        return f"ApiParameters({self.render()!r})"
