"""
Unit tests for the JSON codec.
"""
import json

import pytest

from testrail_service.core.domain import Project, TestCase, TestResult
from testrail_service.exceptions import TestRailConnectionError
from testrail_service.infrastructure.testrail.serialization import JsonCodec


@pytest.fixture
def codec():
    return JsonCodec()


class TestEncode:
    """Test request body encoding."""

    def test_omits_null_fields(self, codec):
        body = codec.encode(TestResult(status_id=5, comment="Fails on Safari"))
        assert json.loads(body) == {"status_id": 5, "comment": "Fails on Safari"}

    def test_none_is_empty_body(self, codec):
        assert codec.encode(None) == b""

    def test_unicode(self, codec):
        body = codec.encode(TestCase(title="Überprüfung"))
        assert json.loads(body.decode('utf-8')) == {"title": "Überprüfung"}


class TestDecode:
    """Test response decoding."""

    def test_single_entity(self, codec):
        project = codec.decode(b'{"id": 1, "name": "Checkout", "unknown": true}', Project)
        assert project == Project(id=1, name="Checkout")

    def test_empty_body_is_none(self, codec):
        assert codec.decode(b"", Project) is None
        assert codec.decode(b"null", Project) is None

    def test_list_keeps_order(self, codec):
        content = json.dumps([{"id": 3}, {"id": 1}, {"id": 2}]).encode()
        assert [r.id for r in codec.decode_list(content, TestResult)] == [3, 1, 2]

    def test_paginated_list(self, codec):
        content = json.dumps({
            "offset": 0, "limit": 250, "size": 2,
            "_links": {"next": None, "prev": None},
            "cases": [{"id": 10}, {"id": 11}],
        }).encode()
        cases = codec.decode_list(content, TestCase, envelope="cases")
        assert [c.id for c in cases] == [10, 11]

    def test_empty_list(self, codec):
        assert codec.decode_list(b"", TestCase) == []
        assert codec.decode_list(b"[]", TestCase) == []

    def test_object_without_envelope_is_malformed(self, codec):
        with pytest.raises(TestRailConnectionError, match="malformed"):
            codec.decode_list(b'{"id": 1}', TestCase, envelope="cases", url="http://x")

    def test_invalid_json_is_malformed(self, codec):
        with pytest.raises(TestRailConnectionError) as exc_info:
            codec.decode(b"<html>oops</html>", Project, url="http://x/get_project/1")
        assert exc_info.value.url == "http://x/get_project/1"


class TestDecodeError:
    """Test error payload decoding."""

    def test_error_field(self, codec):
        content = b'{"error": "Field :project_id is not a valid or accessible project."}'
        assert codec.decode_error(content) == "Field :project_id is not a valid or accessible project."

    def test_non_json_body(self, codec):
        assert codec.decode_error(b"Service Unavailable\n") == "Service Unavailable"

    def test_empty_body(self, codec):
        assert codec.decode_error(b"") == ""

    def test_object_without_error(self, codec):
        assert codec.decode_error(b'{"message": "x"}') == ""
