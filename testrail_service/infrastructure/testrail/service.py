"""
TestRail service - typed access to the TestRail API.

Every API operation goes through ``request``: build the URL, send a GET
(reads) or a POST through the retry policy (writes), decode the body into
entities and attach this service to them. The public methods are thin
typed wrappers around it.
"""
import logging
from typing import Any, List, Optional, Type, TypeVar, Union, TYPE_CHECKING

from testrail_service.core.domain.base import BaseEntity
from testrail_service.core.domain.cases import CaseField, CaseType, Section, TestCase, TestSuite
from testrail_service.core.domain.commands import TestRailCommand
from testrail_service.core.domain.outcome import ApiOutcome
from testrail_service.core.domain.parameters import ApiFilter, ApiFilterValue, ApiParameters
from testrail_service.core.domain.projects import (
    ConfigGroup,
    Configuration,
    Milestone,
    MilestoneCreator,
    Project,
    User,
)
from testrail_service.core.domain.runs import (
    PlanEntry,
    TestInstance,
    TestPlan,
    TestPlanCreator,
    TestResult,
    TestResults,
    TestRun,
    TestRunCreator,
)
from testrail_service.core.interfaces.service import ITestRailService
from testrail_service.core.interfaces.transport import HttpTransport, TransportResponse
from testrail_service.exceptions import TestRailOperationError
from .http_client import JSON_CONTENT_TYPE, RequestsTransport, basic_auth_header
from .retry import DEFAULT_MAX_ATTEMPTS, RetryPolicy
from .serialization import JsonCodec
from .url_builder import build_url, endpoint_template

if TYPE_CHECKING:
    from testrail_service.config import TestRailSettings

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=BaseEntity)
Params = Union[ApiParameters, str, int, None]

NOT_FOUND = 404


class TestRailService(ITestRailService):
    """Client for one TestRail instance.

    Configure it once (constructor or setters) before the first call; the
    endpoint and credentials are read, never written, while requests run.
    """

    __test__ = False

    def __init__(
        self,
        client_id: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[HttpTransport] = None,
        codec: Optional[JsonCodec] = None,
        retry_policy: Optional[RetryPolicy] = None,
        timeout: float = 30,
        max_post_attempts: int = DEFAULT_MAX_ATTEMPTS,
        api_version: str = "v2"
    ):
        """Initialize TestRail service.

        Args:
            client_id: Hosted account id (the ``foo`` in "foo.testrail.com")
            username: API user name (usually an email)
            password: Password or API key
            base_url: Full URL of a self-hosted instance (e.g. "https://server/testrail/")
            transport: HTTP transport; defaults to a requests based one
            codec: JSON codec
            retry_policy: Retry policy applied to POST requests
            timeout: Transport timeout in seconds (default transport only)
            max_post_attempts: Attempts per POST when rate limited
            api_version: API version segment
        """
        self._client_id = client_id
        self._base_url = base_url
        self._api_version = api_version
        self._username = username
        self._password = password
        self._transport = transport or RequestsTransport(timeout=timeout)
        self._codec = codec or JsonCodec()
        self._retry_policy = retry_policy or RetryPolicy()
        self._max_post_attempts = max_post_attempts

    @classmethod
    def from_settings(
        cls,
        settings: "TestRailSettings",
        transport: Optional[HttpTransport] = None
    ) -> "TestRailService":
        """Create a service from a ``TestRailSettings`` instance."""
        return cls(
            client_id=settings.client_id,
            username=settings.username,
            password=settings.password,
            base_url=settings.base_url,
            transport=transport,
            retry_policy=RetryPolicy(default_retry_after=settings.default_retry_after),
            timeout=settings.timeout,
            max_post_attempts=settings.max_post_attempts,
            api_version=settings.api_version
        )

    # Configuration

    @property
    def username(self) -> Optional[str]:
        return self._username

    @username.setter
    def username(self, value: str) -> None:
        self._username = value

    @property
    def password(self) -> Optional[str]:
        return self._password

    @password.setter
    def password(self, value: str) -> None:
        self._password = value

    @property
    def api_endpoint(self) -> str:
        """Endpoint template with ``{command}`` and ``{params}`` placeholders."""
        return endpoint_template(self._client_id, self._base_url, self._api_version)

    def set_client_id(self, client_id: str) -> None:
        """Point the service at a hosted account ("<client_id>.testrail.com")."""
        self._client_id = client_id
        self._base_url = None

    def set_api_endpoint(self, base_url: str) -> None:
        """Point the service at a self-hosted instance, e.g. "https://server/testrail/"."""
        self._base_url = base_url

    def set_transport(self, transport: HttpTransport) -> None:
        """Replace the HTTP transport (mainly for stubbing in tests)."""
        self._transport = transport

    def __repr__(self) -> str:
        endpoint = self._base_url or self._client_id
        return f"TestRailService(endpoint={endpoint!r}, username={self._username!r})"

    # Request pipeline

    def build_url(self, command: TestRailCommand, params: Params = None) -> str:
        """Complete request URL for a command and its parameters."""
        if isinstance(params, int):
            params = str(params)
        return build_url(self.api_endpoint, command, params)

    def _auth_header(self) -> str:
        if not self._username:
            raise ValueError("Username is required")
        if self._password is None:
            raise ValueError("Password is required")
        return basic_auth_header(self._username, self._password)

    def _attach(self, value: Any) -> Any:
        if isinstance(value, BaseEntity):
            value.attach(self)
        elif isinstance(value, list):
            for entity in value:
                entity.attach(self)
        return value

    def _send(
        self,
        command: TestRailCommand,
        url: str,
        body: Optional[BaseEntity]
    ) -> TransportResponse:
        auth_header = self._auth_header()
        headers = {'Content-Type': JSON_CONTENT_TYPE}
        if command.is_read:
            return self._transport.get(url, auth_header, headers)

        payload = self._codec.encode(body)
        return self._retry_policy.execute(
            lambda: self._transport.post(url, auth_header, payload, headers),
            self._max_post_attempts
        )

    def request(
        self,
        command: TestRailCommand,
        params: Params = None,
        body: Optional[BaseEntity] = None,
        result_type: Optional[Type[BaseEntity]] = None,
        many: bool = False
    ) -> ApiOutcome:
        """Run one request/response cycle.

        Read commands are sent as GET; every other command is POSTed with
        ``body`` as JSON and retried while rate limited. On status 200 the
        body is decoded into ``result_type`` (a list of it when ``many``)
        and every entity gets this service attached.

        Args:
            command: API command
            params: Positional ids and filters (already formatted or ApiParameters)
            body: Entity to send with a POST
            result_type: Entity type to decode the response into
            many: Decode a list instead of a single entity

        Returns:
            ApiOutcome carrying the decoded value or the server's error

        Raises:
            TestRailConnectionError: On network failure or a malformed body
        """
        url = self.build_url(command, params)
        logger.debug("url: %s", url)

        response = self._send(command, url, body)

        if response.status_code != 200:
            error_message = self._codec.decode_error(response.content)
            if not command.is_read:
                logger.error("Response code: %s", response.status_code)
                logger.error("TestRail reported an error message: %s", error_message)
            return ApiOutcome(
                status_code=response.status_code,
                error_message=error_message,
                reason=response.reason,
                url=url
            )

        value = None
        if result_type is not None:
            if many:
                value = self._codec.decode_list(
                    response.content, result_type, command.envelope, url
                )
            else:
                value = self._codec.decode(response.content, result_type, url)
            self._attach(value)

        return ApiOutcome(status_code=200, value=value, reason=response.reason, url=url)

    def _get_single(
        self,
        entity_type: Type[E],
        command: TestRailCommand,
        params: Params
    ) -> Optional[E]:
        outcome = self.request(command, params, result_type=entity_type)
        if outcome.status_code == NOT_FOUND:
            return None
        return outcome.unwrap()

    def _get_list(
        self,
        entity_type: Type[E],
        command: TestRailCommand,
        params: Params = None
    ) -> List[E]:
        return self.request(command, params, result_type=entity_type, many=True).unwrap()

    def _post_return(
        self,
        command: TestRailCommand,
        params: Params,
        body: Optional[BaseEntity],
        result_type: Type[E]
    ) -> Optional[E]:
        """POST and return the decoded entity, or None when TestRail refuses it."""
        outcome = self.request(command, params, body=body, result_type=result_type)
        if not outcome.ok:
            return None
        logger.info("Returning a JSON mapped %s from %s", result_type.__name__, command)
        return outcome.value

    def _post_action(
        self,
        command: TestRailCommand,
        resource_id: int,
        body: Optional[BaseEntity],
        failure_message: str,
        result_type: Optional[Type[BaseEntity]] = None
    ) -> ApiOutcome:
        """POST and raise ``TestRailOperationError`` unless TestRail answers 200."""
        outcome = self.request(command, resource_id, body=body, result_type=result_type)
        if not outcome.ok:
            raise TestRailOperationError(
                failure_message.format(id=resource_id, reason=outcome.reason),
                resource_id=resource_id,
                status_code=outcome.status_code,
                reason=outcome.reason
            )
        return outcome

    def verify_credentials(self) -> bool:
        """Ping the API to check the credentials.

        There is no "ping" endpoint, so this lists the projects and only
        looks at the status code.
        """
        url = self.build_url(TestRailCommand.GET_PROJECTS)
        response = self._transport.get(
            url, self._auth_header(), {'Content-Type': JSON_CONTENT_TYPE}
        )
        return response.status_code == 200

    # Cases

    def get_test_case(self, test_case_id: int) -> Optional[TestCase]:
        """The case with the given id (``C7`` in the UI, pass 7)."""
        return self._get_single(TestCase, TestRailCommand.GET_CASE, test_case_id)

    def get_test_cases(
        self,
        project_id: int,
        suite_id: int = -1,
        section_id: int = -1,
        *filters: ApiFilterValue
    ) -> List[TestCase]:
        """Cases in a project, optionally narrowed to a suite and section.

        Suite and section ids <= 0 are left out. Filters are appended in the
        order suite, section, then ``filters`` as given.
        """
        params = (
            ApiParameters(project_id)
            .add_if_positive(ApiFilter.SUITE_ID, suite_id)
            .add_if_positive(ApiFilter.SECTION_ID, section_id)
            .extend(filters)
        )
        return self._get_list(TestCase, TestRailCommand.GET_CASES, params)

    def get_test_cases_single_suite_mode(
        self,
        project_id: int,
        section_id: int = -1,
        *filters: ApiFilterValue
    ) -> List[TestCase]:
        """Cases of a project running in single suite mode."""
        return self.get_test_cases(project_id, -1, section_id, *filters)

    def add_test_case(self, test_case: TestCase, section_id: int) -> Optional[TestCase]:
        return self._post_return(TestRailCommand.ADD_CASE, section_id, test_case, TestCase)

    def update_test_case(self, test_case: TestCase, case_id: int) -> Optional[TestCase]:
        """Update a case; only the fields set on ``test_case`` are sent."""
        return self._post_return(TestRailCommand.UPDATE_CASE, case_id, test_case, TestCase)

    def delete_test_case(self, case_id: int) -> None:
        """Permanently delete a case, including its results in active runs."""
        self._post_action(
            TestRailCommand.DELETE_CASE, case_id, None,
            "TestCase was not properly deleted, TestCaseID [{id}]: {reason}"
        )

    # Case fields / types

    def get_case_fields(self) -> List[CaseField]:
        return self._get_list(CaseField, TestRailCommand.GET_CASE_FIELDS)

    def get_case_types(self) -> List[CaseType]:
        return self._get_list(CaseType, TestRailCommand.GET_CASE_TYPES)

    # Configurations

    def get_configurations(self, project_id: int) -> List[ConfigGroup]:
        """Configuration groups of a project with their configurations."""
        return self._get_list(ConfigGroup, TestRailCommand.GET_CONFIGS, project_id)

    def add_config_group(self, name: str, project_id: int) -> Optional[ConfigGroup]:
        return self._post_return(
            TestRailCommand.ADD_CONFIG_GROUP, project_id, ConfigGroup(name=name), ConfigGroup
        )

    def add_config(self, name: str, config_group_id: int) -> Optional[Configuration]:
        return self._post_return(
            TestRailCommand.ADD_CONFIG, config_group_id, Configuration(name=name), Configuration
        )

    def update_config_group(self, name: str, config_group_id: int) -> Optional[ConfigGroup]:
        return self._post_return(
            TestRailCommand.UPDATE_CONFIG_GROUP, config_group_id, ConfigGroup(name=name), ConfigGroup
        )

    def update_config(self, name: str, config_id: int) -> Optional[Configuration]:
        return self._post_return(
            TestRailCommand.UPDATE_CONFIG, config_id, Configuration(name=name), Configuration
        )

    def delete_config_group(self, config_group_id: int) -> None:
        """Delete a configuration group and every configuration in it."""
        self._post_action(
            TestRailCommand.DELETE_CONFIG_GROUP, config_group_id, None,
            "ConfigGroup was not properly deleted, ConfigGroupID [{id}]: {reason}"
        )

    def delete_config(self, config_id: int) -> None:
        self._post_action(
            TestRailCommand.DELETE_CONFIG, config_id, None,
            "Config was not properly deleted, ConfigID [{id}]: {reason}"
        )

    # Milestones

    def get_milestone(self, milestone_id: int) -> Optional[Milestone]:
        return self._get_single(Milestone, TestRailCommand.GET_MILESTONE, milestone_id)

    def get_milestones(self, project_id: int, *filters: ApiFilterValue) -> List[Milestone]:
        """Milestones of a project, e.g. ``ApiFilterValue(ApiFilter.IS_COMPLETED, False)``."""
        params = ApiParameters(project_id).extend(filters)
        return self._get_list(Milestone, TestRailCommand.GET_MILESTONES, params)

    def add_milestone(self, milestone: MilestoneCreator, project_id: int) -> Optional[Milestone]:
        return self._post_return(TestRailCommand.ADD_MILESTONE, project_id, milestone, Milestone)

    def update_milestone(self, milestone_id: int, is_completed: bool) -> Optional[Milestone]:
        """Mark a milestone completed (or active again)."""
        return self._post_return(
            TestRailCommand.UPDATE_MILESTONE, milestone_id,
            Milestone(is_completed=is_completed), Milestone
        )

    def delete_milestone(self, milestone_id: int) -> None:
        self._post_action(
            TestRailCommand.DELETE_MILESTONE, milestone_id, None,
            "Milestone was not properly deleted, MilestoneID [{id}]: {reason}"
        )

    # Plans

    def get_test_plan(self, plan_id: int) -> Optional[TestPlan]:
        return self._get_single(TestPlan, TestRailCommand.GET_PLAN, plan_id)

    def get_test_plans(self, project_id: int, *filters: ApiFilterValue) -> List[TestPlan]:
        """Plans of a project (returned without their entries)."""
        params = ApiParameters(project_id).extend(filters)
        return self._get_list(TestPlan, TestRailCommand.GET_PLANS, params)

    def add_test_plan(self, project_id: int, test_plan: TestPlanCreator) -> Optional[TestPlan]:
        return self._post_return(TestRailCommand.ADD_PLAN, project_id, test_plan, TestPlan)

    def add_test_plan_entry(self, plan_id: int, plan_entry: PlanEntry) -> Optional[PlanEntry]:
        """Add a suite (and its run or runs) to an existing plan."""
        return self._post_return(TestRailCommand.ADD_PLAN_ENTRY, plan_id, plan_entry, PlanEntry)

    def close_test_plan(self, plan_id: int) -> Optional[TestPlan]:
        outcome = self._post_action(
            TestRailCommand.CLOSE_PLAN, plan_id, None,
            "TestPlan was not properly closed, TestPlanID [{id}]: {reason}",
            result_type=TestPlan
        )
        return outcome.value

    def delete_test_plan(self, plan_id: int) -> None:
        self._post_action(
            TestRailCommand.DELETE_PLAN, plan_id, None,
            "TestPlan was not properly deleted, TestPlanID [{id}]: {reason}"
        )

    # Projects

    def get_project(self, project_id: int) -> Optional[Project]:
        return self._get_single(Project, TestRailCommand.GET_PROJECT, project_id)

    def get_project_by_name(self, project_name: str) -> Optional[Project]:
        """First project whose name matches exactly (case-sensitive), or None."""
        for project in self.get_projects():
            if project.name == project_name:
                return project
        return None

    def get_projects(self) -> List[Project]:
        """Every project visible to this user."""
        return self._get_list(Project, TestRailCommand.GET_PROJECTS)

    # Results

    def get_test_result(self, test_id: int) -> Optional[TestResult]:
        """Most recent result of a test, or None if it has none."""
        results = self.get_test_results(test_id, 1)
        if not results:
            return None
        return results[0]

    def get_test_results(
        self,
        test_id: int,
        limit: Optional[int] = None,
        probe_empty: bool = False
    ) -> Optional[List[TestResult]]:
        """Results of a test, most recent first.

        Args:
            test_id: Test ID (a case inside a run)
            limit: Maximum number of results; None for all
            probe_empty: First ask for a single result and return None when
                there is none, then fetch the real list (two round trips)

        Returns:
            List of results in server order; None only when probe_empty is
            set and the test has no results
        """
        if probe_empty:
            probe = self._get_list(
                TestResult, TestRailCommand.GET_RESULTS,
                ApiParameters(test_id).add(ApiFilter.LIMIT, 1)
            )
            if not probe:
                return None

        params = ApiParameters(test_id)
        if limit is not None:
            params.add(ApiFilter.LIMIT, limit)
        return self._get_list(TestResult, TestRailCommand.GET_RESULTS, params)

    def add_test_result(self, test_id: int, result: TestResult) -> None:
        """Add a result to a test.

        Raises:
            TestRailOperationError: If TestRail does not accept the result
        """
        self._post_action(
            TestRailCommand.ADD_RESULT, test_id, result,
            "TestResult was not properly added to TestInstance [{id}]: {reason}"
        )

    def add_test_results(self, run_id: int, results: TestResults) -> None:
        """Add several results to a run in one call.

        Raises:
            TestRailOperationError: If TestRail does not accept the results
        """
        self._post_action(
            TestRailCommand.ADD_RESULTS, run_id, results,
            "TestResults was not properly added to TestRun [{id}]: {reason}"
        )

    # Runs

    def get_test_run(self, test_run_id: int) -> Optional[TestRun]:
        return self._get_single(TestRun, TestRailCommand.GET_RUN, test_run_id)

    def get_test_runs(self, project_id: int, *filters: ApiFilterValue) -> List[TestRun]:
        params = ApiParameters(project_id).extend(filters)
        return self._get_list(TestRun, TestRailCommand.GET_RUNS, params)

    def add_test_run(self, project_id: int, run: TestRunCreator) -> Optional[TestRun]:
        """Create a run and return it as TestRail stores it.

        The ``add_run`` answer is re-fetched with ``get_run`` so the caller
        gets the complete run.
        """
        skeleton = self._post_return(TestRailCommand.ADD_RUN, project_id, run, TestRun)
        if skeleton is None or skeleton.id is None:
            return None
        return self.get_test_run(skeleton.id)

    def update_test_run(self, run_id: int, run: TestRunCreator) -> Optional[TestRun]:
        return self._post_return(TestRailCommand.UPDATE_RUN, run_id, run, TestRun)

    def close_test_run(self, run: TestRun) -> ApiOutcome:
        """Close (archive) a run.

        Raises:
            TestRailOperationError: If TestRail does not close the run
        """
        return self._post_action(
            TestRailCommand.CLOSE_RUN, run.id, run,
            "TestRun was not properly closed, TestRunID [{id}]: {reason}",
            result_type=TestRun
        )

    def delete_test_run(self, run_id: int) -> None:
        self._post_action(
            TestRailCommand.DELETE_RUN, run_id, None,
            "TestRun was not properly deleted, TestRunID [{id}]: {reason}"
        )

    # Sections

    def get_section(self, section_id: int) -> Optional[Section]:
        return self._get_single(Section, TestRailCommand.GET_SECTION, section_id)

    def get_sections(self, project_id: int, suite_id: int = -1) -> List[Section]:
        params = ApiParameters(project_id).add_if_positive(ApiFilter.SUITE_ID, suite_id)
        return self._get_list(Section, TestRailCommand.GET_SECTIONS, params)

    def add_section(self, section: Section, project_id: int) -> Optional[Section]:
        return self._post_return(TestRailCommand.ADD_SECTION, project_id, section, Section)

    def delete_section(self, section_id: int) -> None:
        self._post_action(
            TestRailCommand.DELETE_SECTION, section_id, None,
            "Section was not properly deleted, SectionID [{id}]: {reason}"
        )

    # Suites

    def get_test_suite(self, suite_id: int) -> Optional[TestSuite]:
        """The suite with the given id (``S7`` in the UI, pass 7)."""
        return self._get_single(TestSuite, TestRailCommand.GET_SUITE, suite_id)

    def get_test_suites(self, project_id: int) -> List[TestSuite]:
        return self._get_list(TestSuite, TestRailCommand.GET_SUITES, project_id)

    def add_test_suite(self, suite: TestSuite, project_id: int) -> Optional[TestSuite]:
        return self._post_return(TestRailCommand.ADD_SUITE, project_id, suite, TestSuite)

    def delete_test_suite(self, suite_id: int) -> None:
        self._post_action(
            TestRailCommand.DELETE_SUITE, suite_id, None,
            "TestSuite was not properly deleted, TestSuiteID [{id}]: {reason}"
        )

    # Tests

    def get_test(self, test_id: int) -> Optional[TestInstance]:
        return self._get_single(TestInstance, TestRailCommand.GET_TEST, test_id)

    def get_tests(self, run_id: int, *filters: ApiFilterValue) -> List[TestInstance]:
        """Tests (case instances) of a run."""
        params = ApiParameters(run_id).extend(filters)
        return self._get_list(TestInstance, TestRailCommand.GET_TESTS, params)

    # Users

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self._get_single(User, TestRailCommand.GET_USER_BY_ID, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        params = ApiParameters().add(ApiFilter.EMAIL, email)
        return self._get_single(User, TestRailCommand.GET_USER_BY_EMAIL, params)

    def get_users(self) -> List[User]:
        return self._get_list(User, TestRailCommand.GET_USERS)
