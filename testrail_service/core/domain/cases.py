"""
Test case related entities: cases, case fields/types, sections and suites.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .base import BaseEntity


@dataclass
class TestCase(BaseEntity):
    """A test case (``C123`` in the TestRail UI)."""
    id: Optional[int] = None
    title: Optional[str] = None
    section_id: Optional[int] = None
    suite_id: Optional[int] = None
    template_id: Optional[int] = None
    type_id: Optional[int] = None
    priority_id: Optional[int] = None
    milestone_id: Optional[int] = None
    refs: Optional[str] = None
    estimate: Optional[str] = None
    estimate_forecast: Optional[str] = None
    created_by: Optional[int] = None
    created_on: Optional[int] = None
    updated_by: Optional[int] = None
    updated_on: Optional[int] = None
    display_order: Optional[int] = None
    is_deleted: Optional[int] = None
    # custom_* fields (custom_preconds, custom_steps_separated, ...)
    custom_fields: Optional[Dict[str, Any]] = None

    def get_custom_field(self, name: str) -> Any:
        """Look up a custom field with or without its ``custom_`` prefix."""
        if not self.custom_fields:
            return None
        if not name.startswith("custom_"):
            name = f"custom_{name}"
        return self.custom_fields.get(name)


@dataclass
class CaseField(BaseEntity):
    """A (custom) test case field definition."""
    id: Optional[int] = None
    name: Optional[str] = None
    system_name: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None
    type_id: Optional[int] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None
    include_all: Optional[bool] = None
    template_ids: Optional[List[int]] = None
    configs: Optional[List[Dict[str, Any]]] = None


@dataclass
class CaseType(BaseEntity):
    id: Optional[int] = None
    name: Optional[str] = None
    is_default: Optional[bool] = None


@dataclass
class Section(BaseEntity):
    """A section (folder) inside a suite."""
    id: Optional[int] = None
    suite_id: Optional[int] = None
    parent_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    display_order: Optional[int] = None
    depth: Optional[int] = None

    def get_test_cases(self, project_id: int) -> List[TestCase]:
        """All cases in this section."""
        return self.service.get_test_cases(project_id, self.suite_id or -1, self.id)


@dataclass
class TestSuite(BaseEntity):
    """A test suite (``S7`` in the TestRail UI)."""
    id: Optional[int] = None
    project_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    is_master: Optional[bool] = None
    is_baseline: Optional[bool] = None
    is_completed: Optional[bool] = None
    completed_on: Optional[int] = None

    def get_sections(self) -> List[Section]:
        return self.service.get_sections(self.project_id, self.id)

    def get_test_cases(self, section_id: int = -1) -> List[TestCase]:
        return self.service.get_test_cases(self.project_id, self.id, section_id)
