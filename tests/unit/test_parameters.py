"""
Unit tests for request parameters and filters.
"""
from testrail_service.core.domain.commands import TestRailCommand
from testrail_service.core.domain.parameters import ApiFilter, ApiFilterValue, ApiParameters


class TestApiFilterValue:
    """Test single filter rendering."""

    def test_append(self):
        assert ApiFilterValue(ApiFilter.LIMIT, 5).append() == "&limit=5"

    def test_boolean_is_numeric(self):
        assert ApiFilterValue(ApiFilter.IS_COMPLETED, True).append() == "&is_completed=1"
        assert ApiFilterValue(ApiFilter.IS_COMPLETED, False).append() == "&is_completed=0"

    def test_list_is_comma_joined(self):
        assert ApiFilterValue(ApiFilter.STATUS_ID, [1, 4, 5]).append() == "&status_id=1,4,5"

    def test_custom_key(self):
        assert ApiFilterValue("refs", "JIRA-1").append() == "&refs=JIRA-1"

    def test_value_is_url_quoted(self):
        assert ApiFilterValue(ApiFilter.EMAIL, "qa+1@acme.com").append() == "&email=qa%2B1%40acme.com"


class TestApiParameters:
    """Test ordered parameter rendering."""

    def test_path_only(self):
        assert ApiParameters(16).render() == "16"

    def test_two_path_ids(self):
        assert ApiParameters(16, 1231).render() == "16/1231"

    def test_filters_keep_insertion_order(self):
        params = (
            ApiParameters(5)
            .add(ApiFilter.SUITE_ID, 3)
            .add(ApiFilter.SECTION_ID, 2)
            .add(ApiFilter.LIMIT, 10)
        )
        assert params.render() == "5&suite_id=3&section_id=2&limit=10"

    def test_add_if_positive_skips_unset_ids(self):
        params = (
            ApiParameters(5)
            .add_if_positive(ApiFilter.SUITE_ID, -1)
            .add_if_positive(ApiFilter.SECTION_ID, 0)
        )
        assert params.render() == "5"

    def test_readding_replaces_in_place(self):
        params = ApiParameters(5).add(ApiFilter.SUITE_ID, 3).add(ApiFilter.LIMIT, 1)
        params.add(ApiFilter.SUITE_ID, 9)
        assert params.render() == "5&suite_id=9&limit=1"

    def test_extend_with_filter_values(self):
        params = ApiParameters(5).extend([
            ApiFilterValue(ApiFilter.CREATED_AFTER, 1700000000),
            ApiFilterValue(ApiFilter.PRIORITY_ID, [3, 4]),
        ])
        assert params.render() == "5&created_after=1700000000&priority_id=3,4"

    def test_filters_without_path(self):
        assert ApiParameters().add(ApiFilter.EMAIL, "a@b.com").render() == "&email=a%40b.com"

    def test_truthiness(self):
        assert not ApiParameters()
        assert ApiParameters(1)
        assert ApiParameters().add(ApiFilter.LIMIT, 1)


class TestTestRailCommand:
    """Test command metadata."""

    def test_path_fragment(self):
        assert TestRailCommand.GET_CASE.command == "get_case"
        assert str(TestRailCommand.ADD_RESULT) == "add_result"
        assert TestRailCommand.GET_USER_BY_ID.command == "get_user"

    def test_reads_and_writes(self):
        assert TestRailCommand.GET_RUNS.is_read
        assert not TestRailCommand.CLOSE_RUN.is_read
        assert not TestRailCommand.DELETE_CASE.is_read

    def test_envelope(self):
        assert TestRailCommand.GET_CASES.envelope == "cases"
        assert TestRailCommand.GET_CASE.envelope is None
