"""
TestRail API commands.

Each command is the path fragment that follows ``index.php?/api/v2/``.
List commands also name the key TestRail 6.7+ uses when it wraps the
list in a paginated object.
"""
from enum import Enum
from typing import Optional


class TestRailCommand(Enum):
    """Supported TestRail API operations."""

    __test__ = False

    # Cases
    GET_CASE = ("get_case", None)
    GET_CASES = ("get_cases", "cases")
    ADD_CASE = ("add_case", None)
    UPDATE_CASE = ("update_case", None)
    DELETE_CASE = ("delete_case", None)

    # Case fields / types
    GET_CASE_FIELDS = ("get_case_fields", None)
    GET_CASE_TYPES = ("get_case_types", None)

    # Configurations
    GET_CONFIGS = ("get_configs", None)
    ADD_CONFIG_GROUP = ("add_config_group", None)
    ADD_CONFIG = ("add_config", None)
    UPDATE_CONFIG_GROUP = ("update_config_group", None)
    UPDATE_CONFIG = ("update_config", None)
    DELETE_CONFIG_GROUP = ("delete_config_group", None)
    DELETE_CONFIG = ("delete_config", None)

    # Milestones
    GET_MILESTONE = ("get_milestone", None)
    GET_MILESTONES = ("get_milestones", "milestones")
    ADD_MILESTONE = ("add_milestone", None)
    UPDATE_MILESTONE = ("update_milestone", None)
    DELETE_MILESTONE = ("delete_milestone", None)

    # Plans
    GET_PLAN = ("get_plan", None)
    GET_PLANS = ("get_plans", "plans")
    ADD_PLAN = ("add_plan", None)
    ADD_PLAN_ENTRY = ("add_plan_entry", None)
    CLOSE_PLAN = ("close_plan", None)
    DELETE_PLAN = ("delete_plan", None)

    # Projects
    GET_PROJECT = ("get_project", None)
    GET_PROJECTS = ("get_projects", "projects")

    # Results
    GET_RESULTS = ("get_results", "results")
    ADD_RESULT = ("add_result", None)
    ADD_RESULTS = ("add_results", None)

    # Runs
    GET_RUN = ("get_run", None)
    GET_RUNS = ("get_runs", "runs")
    ADD_RUN = ("add_run", None)
    UPDATE_RUN = ("update_run", None)
    CLOSE_RUN = ("close_run", None)
    DELETE_RUN = ("delete_run", None)

    # Sections
    GET_SECTION = ("get_section", None)
    GET_SECTIONS = ("get_sections", "sections")
    ADD_SECTION = ("add_section", None)
    DELETE_SECTION = ("delete_section", None)

    # Suites
    GET_SUITE = ("get_suite", None)
    GET_SUITES = ("get_suites", None)
    ADD_SUITE = ("add_suite", None)
    DELETE_SUITE = ("delete_suite", None)

    # Tests
    GET_TEST = ("get_test", None)
    GET_TESTS = ("get_tests", "tests")

    # Users
    GET_USER_BY_ID = ("get_user", None)
    GET_USER_BY_EMAIL = ("get_user_by_email", None)
    GET_USERS = ("get_users", "users")

    @property
    def command(self) -> str:
        """Path fragment sent to the API (e.g. "get_case")."""
        return self.value[0]

    @property
    def envelope(self) -> Optional[str]:
        """Key holding the list in a paginated response, if any."""
        return self.value[1]

    @property
    def is_read(self) -> bool:
        """Read commands are sent as GET, everything else as POST."""
        return self.command.startswith("get_")

    def __str__(self) -> str:
        return self.command
