"""
Service interface entities use for follow-up calls.

Entities hold a reference typed against this interface rather than the
concrete service, so the domain layer never imports infrastructure.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from testrail_service.core.domain.cases import Section, TestCase, TestSuite
    from testrail_service.core.domain.parameters import ApiFilterValue
    from testrail_service.core.domain.projects import Milestone, Project
    from testrail_service.core.domain.runs import (
        TestInstance, TestPlan, TestResult, TestRun
    )


class ITestRailService(ABC):
    """Calls available to an entity through its back-reference."""

    @abstractmethod
    def get_project(self, project_id: int) -> Optional["Project"]:
        pass

    @abstractmethod
    def get_test_suites(self, project_id: int) -> List["TestSuite"]:
        pass

    @abstractmethod
    def get_sections(self, project_id: int, suite_id: int = -1) -> List["Section"]:
        pass

    @abstractmethod
    def get_test_cases(
        self,
        project_id: int,
        suite_id: int = -1,
        section_id: int = -1,
        *filters: "ApiFilterValue"
    ) -> List["TestCase"]:
        """Cases in a project, optionally narrowed to a suite and section.

        Args:
            project_id: Project ID
            suite_id: Suite ID, <= 0 when not specified
            section_id: Section ID, <= 0 when not specified
            *filters: Extra filters, appended in the given order

        Returns:
            List of test cases in server order
        """
        pass

    @abstractmethod
    def get_milestones(self, project_id: int, *filters: "ApiFilterValue") -> List["Milestone"]:
        pass

    @abstractmethod
    def get_test_plan(self, plan_id: int) -> Optional["TestPlan"]:
        pass

    @abstractmethod
    def get_test_plans(self, project_id: int, *filters: "ApiFilterValue") -> List["TestPlan"]:
        pass

    @abstractmethod
    def get_test_runs(self, project_id: int, *filters: "ApiFilterValue") -> List["TestRun"]:
        pass

    @abstractmethod
    def close_test_run(self, run: "TestRun"):
        pass

    @abstractmethod
    def get_tests(self, run_id: int, *filters: "ApiFilterValue") -> List["TestInstance"]:
        pass

    @abstractmethod
    def get_test_result(self, test_id: int) -> Optional["TestResult"]:
        pass

    @abstractmethod
    def get_test_results(
        self,
        test_id: int,
        limit: Optional[int] = None,
        probe_empty: bool = False
    ) -> Optional[List["TestResult"]]:
        pass

    @abstractmethod
    def add_test_result(self, test_id: int, result: "TestResult") -> None:
        pass
