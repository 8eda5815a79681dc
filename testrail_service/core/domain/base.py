"""
Base entity for TestRail resources.

Entities are plain dataclasses whose field names match the JSON keys
TestRail uses. The service that fetched an entity is attached after
construction so the entity can issue follow-up calls; it is never
serialized or compared.
"""
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Optional, Type, TypeVar, TYPE_CHECKING

if TYPE_CHECKING:
    from testrail_service.core.interfaces.service import ITestRailService


E = TypeVar("E", bound="BaseEntity")

CUSTOM_PREFIX = "custom_"


def _to_json_value(value: Any) -> Any:
    if isinstance(value, BaseEntity):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_json_value(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_json_value(v) for k, v in value.items() if v is not None}
    return value


@dataclass
class BaseEntity:
    """Common behaviour for every TestRail entity."""

    __test__ = False

    # Field name -> entity type for nested objects / lists of objects
    _nested: ClassVar[Dict[str, Type["BaseEntity"]]] = {}

    _service: Optional["ITestRailService"] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def service(self) -> "ITestRailService":
        """The service this entity was fetched through."""
        if self._service is None:
            raise ValueError(
                f"{type(self).__name__} is not attached to a TestRailService"
            )
        return self._service

    def attach(self: E, service: "ITestRailService") -> E:
        """Set the back-reference on this entity and every nested entity."""
        self._service = service
        for name in self._nested:
            value = getattr(self, name, None)
            if isinstance(value, BaseEntity):
                value.attach(service)
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, BaseEntity):
                        item.attach(service)
        return self

    @classmethod
    def _field_names(cls) -> List[str]:
        return [f.name for f in fields(cls) if not f.name.startswith("_")]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dict, leaving out unset (None) fields."""
        data: Dict[str, Any] = {}
        for name in self._field_names():
            value = getattr(self, name)
            if value is None:
                continue
            if name == "custom_fields":
                for key, custom_value in value.items():
                    if custom_value is not None:
                        data[key] = _to_json_value(custom_value)
                continue
            data[name] = _to_json_value(value)
        return data

    @classmethod
    def from_dict(cls: Type[E], data: Dict[str, Any]) -> E:
        """Build an entity from API data, ignoring keys it does not know."""
        if not isinstance(data, dict):
            raise TypeError(
                f"Expected a JSON object for {cls.__name__}, got {type(data).__name__}"
            )
        known = set(cls._field_names())
        kwargs: Dict[str, Any] = {}
        custom: Dict[str, Any] = {}
        for key, value in data.items():
            if key in known and key != "custom_fields":
                nested_type = cls._nested.get(key)
                if nested_type is not None and value is not None:
                    if isinstance(value, list):
                        value = [nested_type.from_dict(v) for v in value]
                    else:
                        value = nested_type.from_dict(value)
                kwargs[key] = value
            elif key.startswith(CUSTOM_PREFIX):
                custom[key] = value
        if "custom_fields" in known and custom:
            kwargs["custom_fields"] = custom
        return cls(**kwargs)


@dataclass
class ErrorPayload(BaseEntity):
    """Error body TestRail sends with non-200 responses."""
    error: Optional[str] = None
