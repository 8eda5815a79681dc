"""
Project level entities: projects, milestones, users and configurations.
"""
from dataclasses import dataclass
from typing import ClassVar, Dict, List, Optional, Type, TYPE_CHECKING

from .base import BaseEntity

if TYPE_CHECKING:
    from .cases import TestCase, TestSuite
    from .runs import TestPlan, TestRun


@dataclass
class Project(BaseEntity):
    """A TestRail project (``P3`` in the UI)."""
    id: Optional[int] = None
    name: Optional[str] = None
    announcement: Optional[str] = None
    show_announcement: Optional[bool] = None
    is_completed: Optional[bool] = None
    completed_on: Optional[int] = None
    # 1 = single suite, 2 = single suite + baselines, 3 = multiple suites
    suite_mode: Optional[int] = None
    url: Optional[str] = None

    def get_test_suites(self) -> List["TestSuite"]:
        return self.service.get_test_suites(self.id)

    def get_test_runs(self) -> List["TestRun"]:
        return self.service.get_test_runs(self.id)

    def get_test_plans(self) -> List["TestPlan"]:
        return self.service.get_test_plans(self.id)

    def get_milestones(self) -> List["Milestone"]:
        return self.service.get_milestones(self.id)

    def get_test_cases(self, suite_id: int = -1) -> List["TestCase"]:
        """Cases in this project; pass a suite id for multi-suite projects."""
        return self.service.get_test_cases(self.id, suite_id)


@dataclass
class Milestone(BaseEntity):
    id: Optional[int] = None
    project_id: Optional[int] = None
    parent_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    refs: Optional[str] = None
    url: Optional[str] = None
    due_on: Optional[int] = None
    start_on: Optional[int] = None
    started_on: Optional[int] = None
    completed_on: Optional[int] = None
    is_started: Optional[bool] = None
    is_completed: Optional[bool] = None
    milestones: Optional[List["Milestone"]] = None

    def get_project(self) -> Optional[Project]:
        return self.service.get_project(self.project_id)


Milestone._nested = {"milestones": Milestone}


@dataclass
class MilestoneCreator(BaseEntity):
    """Body for ``add_milestone``; only the fields TestRail accepts on create."""
    name: Optional[str] = None
    description: Optional[str] = None
    due_on: Optional[int] = None
    start_on: Optional[int] = None
    parent_id: Optional[int] = None
    refs: Optional[str] = None


@dataclass
class User(BaseEntity):
    id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None
    is_active: Optional[bool] = None
    role_id: Optional[int] = None
    role: Optional[str] = None


@dataclass
class Configuration(BaseEntity):
    id: Optional[int] = None
    group_id: Optional[int] = None
    name: Optional[str] = None


@dataclass
class ConfigGroup(BaseEntity):
    """A configuration group and the configurations it holds."""
    _nested: ClassVar[Dict[str, Type[BaseEntity]]] = {"configs": Configuration}

    id: Optional[int] = None
    project_id: Optional[int] = None
    name: Optional[str] = None
    configs: Optional[List[Configuration]] = None
