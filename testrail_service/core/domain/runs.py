"""
Execution entities: runs, plans, plan entries, tests and results.
"""
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Type

from .base import BaseEntity


@dataclass
class TestResult(BaseEntity):
    """A result posted against a test (or a case, in bulk bodies)."""

    # TestRail system status IDs
    STATUS_PASSED = 1
    STATUS_BLOCKED = 2
    STATUS_UNTESTED = 3
    STATUS_RETEST = 4
    STATUS_FAILED = 5

    id: Optional[int] = None
    test_id: Optional[int] = None
    case_id: Optional[int] = None
    status_id: Optional[int] = None
    comment: Optional[str] = None
    version: Optional[str] = None
    elapsed: Optional[str] = None
    defects: Optional[str] = None
    assignedto_id: Optional[int] = None
    created_by: Optional[int] = None
    created_on: Optional[int] = None
    custom_fields: Optional[Dict[str, Any]] = None


@dataclass
class TestResults(BaseEntity):
    """Body for ``add_results``: several results posted in one call."""
    _nested: ClassVar[Dict[str, Type[BaseEntity]]] = {"results": TestResult}

    results: Optional[List[TestResult]] = None


@dataclass
class TestInstance(BaseEntity):
    """A test: one case as it appears inside a run."""
    id: Optional[int] = None
    case_id: Optional[int] = None
    run_id: Optional[int] = None
    status_id: Optional[int] = None
    assignedto_id: Optional[int] = None
    title: Optional[str] = None
    template_id: Optional[int] = None
    type_id: Optional[int] = None
    priority_id: Optional[int] = None
    milestone_id: Optional[int] = None
    estimate: Optional[str] = None
    estimate_forecast: Optional[str] = None
    refs: Optional[str] = None
    custom_fields: Optional[Dict[str, Any]] = None

    def get_results(self, limit: Optional[int] = None) -> List[TestResult]:
        """Results for this test, most recent first."""
        return self.service.get_test_results(self.id, limit)

    def get_most_recent_result(self) -> Optional[TestResult]:
        return self.service.get_test_result(self.id)

    def add_result(self, result: TestResult) -> None:
        self.service.add_test_result(self.id, result)


@dataclass
class TestRun(BaseEntity):
    """A test run (``R42`` in the UI)."""
    id: Optional[int] = None
    suite_id: Optional[int] = None
    project_id: Optional[int] = None
    plan_id: Optional[int] = None
    milestone_id: Optional[int] = None
    assignedto_id: Optional[int] = None
    entry_id: Optional[str] = None
    entry_index: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    refs: Optional[str] = None
    url: Optional[str] = None
    config: Optional[str] = None
    config_ids: Optional[List[int]] = None
    case_ids: Optional[List[int]] = None
    include_all: Optional[bool] = None
    is_completed: Optional[bool] = None
    completed_on: Optional[int] = None
    created_by: Optional[int] = None
    created_on: Optional[int] = None
    updated_on: Optional[int] = None
    passed_count: Optional[int] = None
    blocked_count: Optional[int] = None
    untested_count: Optional[int] = None
    retest_count: Optional[int] = None
    failed_count: Optional[int] = None
    # custom_status1_count ... custom_status7_count
    custom_fields: Optional[Dict[str, Any]] = None

    def get_tests(self) -> List[TestInstance]:
        return self.service.get_tests(self.id)

    def close(self):
        """Close (archive) this run on the server."""
        return self.service.close_test_run(self)


@dataclass
class TestRunCreator(BaseEntity):
    """Body for ``add_run``; carries only what TestRail accepts on create."""
    suite_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    milestone_id: Optional[int] = None
    assignedto_id: Optional[int] = None
    include_all: Optional[bool] = None
    case_ids: Optional[List[int]] = None
    refs: Optional[str] = None


@dataclass
class PlanEntry(BaseEntity):
    """A plan entry: one suite and the run(s) created for it inside a plan."""
    _nested: ClassVar[Dict[str, Type[BaseEntity]]] = {"runs": TestRun}

    id: Optional[str] = None
    suite_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    assignedto_id: Optional[int] = None
    include_all: Optional[bool] = None
    case_ids: Optional[List[int]] = None
    config_ids: Optional[List[int]] = None
    refs: Optional[str] = None
    runs: Optional[List[TestRun]] = None


@dataclass
class TestPlan(BaseEntity):
    """A test plan grouping several runs."""
    _nested: ClassVar[Dict[str, Type[BaseEntity]]] = {"entries": PlanEntry}

    id: Optional[int] = None
    project_id: Optional[int] = None
    milestone_id: Optional[int] = None
    assignedto_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    is_completed: Optional[bool] = None
    completed_on: Optional[int] = None
    created_by: Optional[int] = None
    created_on: Optional[int] = None
    passed_count: Optional[int] = None
    blocked_count: Optional[int] = None
    untested_count: Optional[int] = None
    retest_count: Optional[int] = None
    failed_count: Optional[int] = None
    entries: Optional[List[PlanEntry]] = None

    def get_runs(self) -> List[TestRun]:
        """Every run in the plan, loading the full plan when entries are missing.

        ``get_plans`` answers without entries, so a plan taken from a list
        is re-fetched once through the service.
        """
        plan = self
        if self.entries is None:
            plan = self.service.get_test_plan(self.id)
            if plan is None:
                return []
        runs: List[TestRun] = []
        for entry in plan.entries or []:
            runs.extend(entry.runs or [])
        return runs


@dataclass
class TestPlanCreator(BaseEntity):
    """Body for ``add_plan``."""
    _nested: ClassVar[Dict[str, Type[BaseEntity]]] = {"entries": PlanEntry}

    name: Optional[str] = None
    description: Optional[str] = None
    milestone_id: Optional[int] = None
    entries: Optional[List[PlanEntry]] = None
