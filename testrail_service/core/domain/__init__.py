"""
Domain entities for the TestRail API.
"""
from .base import BaseEntity, ErrorPayload
from .cases import CaseField, CaseType, Section, TestCase, TestSuite
from .commands import TestRailCommand
from .outcome import ApiOutcome
from .parameters import ApiFilter, ApiFilterValue, ApiParameters
from .projects import (
    ConfigGroup,
    Configuration,
    Milestone,
    MilestoneCreator,
    Project,
    User,
)
from .runs import (
    PlanEntry,
    TestInstance,
    TestPlan,
    TestPlanCreator,
    TestResult,
    TestResults,
    TestRun,
    TestRunCreator,
)

__all__ = [
    'BaseEntity',
    'ErrorPayload',
    # Cases
    'TestCase',
    'CaseField',
    'CaseType',
    'Section',
    'TestSuite',
    # Projects
    'Project',
    'Milestone',
    'MilestoneCreator',
    'User',
    'ConfigGroup',
    'Configuration',
    # Runs
    'TestRun',
    'TestRunCreator',
    'TestPlan',
    'TestPlanCreator',
    'PlanEntry',
    'TestInstance',
    'TestResult',
    'TestResults',
    # Requests
    'TestRailCommand',
    'ApiFilter',
    'ApiFilterValue',
    'ApiParameters',
    'ApiOutcome',
]
