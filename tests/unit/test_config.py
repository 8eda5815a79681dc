"""
Unit tests for TestRail settings.

Tests loading from dicts, environment variables, .env and YAML files.
"""
import pytest
import yaml

from testrail_service.config import TestRailSettings

TESTRAIL_VARS = [
    'TESTRAIL_CLIENT_ID', 'TESTRAIL_BASE_URL', 'TESTRAIL_USERNAME', 'TESTRAIL_EMAIL',
    'TESTRAIL_PASSWORD', 'TESTRAIL_API_KEY', 'TESTRAIL_API_VERSION', 'TESTRAIL_TIMEOUT',
    'TESTRAIL_MAX_POST_ATTEMPTS', 'TESTRAIL_DEFAULT_RETRY_AFTER',
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove TESTRAIL_* variables; anything loaded from .env is undone too."""
    for name in TESTRAIL_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestDefaults:
    """Test TestRailSettings defaults and validation."""

    def test_creation_minimal(self):
        settings = TestRailSettings(client_id="acme", username="u", password="p")

        assert settings.api_version == "v2"
        assert settings.timeout == 30
        assert settings.max_post_attempts == 2
        assert settings.default_retry_after == 5
        assert settings.endpoint == "https://acme.testrail.com/index.php?/api/v2/{command}{params}"

    def test_base_url_wins(self):
        settings = TestRailSettings(client_id="acme", base_url="https://tr.local/")

        assert settings.endpoint.startswith("https://tr.local/index.php")

    def test_validate_ok(self):
        TestRailSettings(base_url="https://tr.local", username="u", password="p").validate()

    @pytest.mark.parametrize("kwargs, message", [
        ({"username": "u", "password": "p"}, "client_id or base_url"),
        ({"client_id": "acme", "password": "p"}, "Username"),
        ({"client_id": "acme", "username": "u"}, "Password"),
        ({"client_id": "acme", "username": "u", "password": "p", "max_post_attempts": 0},
         "max_post_attempts"),
    ])
    def test_validate_reports_first_problem(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            TestRailSettings(**kwargs).validate()


class TestFromDict:
    """Test TestRailSettings.from_dict."""

    def test_values_from_dict(self, clean_env):
        clean_env.setenv('TESTRAIL_PASSWORD', 'secret')
        settings = TestRailSettings.from_dict({
            'client_id': 'acme',
            'username': 'qa@acme.com',
            'timeout': '12.5',
            'max_post_attempts': 4,
        })

        assert settings.client_id == 'acme'
        assert settings.username == 'qa@acme.com'
        assert settings.password == 'secret'
        assert settings.timeout == 12.5
        assert settings.max_post_attempts == 4

    def test_password_never_from_dict(self, clean_env):
        settings = TestRailSettings.from_dict({'client_id': 'acme', 'password': 'leaked'})

        assert settings.password is None

    def test_env_fallback(self, clean_env):
        clean_env.setenv('TESTRAIL_BASE_URL', 'https://tr.local')
        clean_env.setenv('TESTRAIL_EMAIL', 'qa@acme.com')
        clean_env.setenv('TESTRAIL_API_KEY', 'key')
        clean_env.setenv('TESTRAIL_DEFAULT_RETRY_AFTER', '2')

        settings = TestRailSettings.from_dict({})

        assert settings.base_url == 'https://tr.local'
        assert settings.username == 'qa@acme.com'
        assert settings.password == 'key'
        assert settings.default_retry_after == 2.0

    def test_invalid_numbers_use_defaults(self, clean_env):
        clean_env.setenv('TESTRAIL_TIMEOUT', 'soon')
        clean_env.setenv('TESTRAIL_MAX_POST_ATTEMPTS', '')

        settings = TestRailSettings.from_dict({})

        assert settings.timeout == 30
        assert settings.max_post_attempts == 2


class TestFromFiles:
    """Test loading from .env and YAML files."""

    def test_from_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "TESTRAIL_CLIENT_ID=acme\n"
            "TESTRAIL_USERNAME=qa@acme.com\n"
            "TESTRAIL_PASSWORD=secret\n"
        )

        settings = TestRailSettings.from_env(str(env_file))

        assert settings.client_id == 'acme'
        assert settings.password == 'secret'
        settings.validate()

    def test_from_env_missing_file(self, clean_env, tmp_path):
        clean_env.setenv('TESTRAIL_CLIENT_ID', 'acme')

        settings = TestRailSettings.from_env(str(tmp_path / "missing.env"))

        assert settings.client_id == 'acme'

    def test_load_from_yaml_nested(self, clean_env, tmp_path):
        config_file = tmp_path / "testrail.yaml"
        config_file.write_text(
            "testrail:\n"
            "  base_url: https://tr.local/testrail/\n"
            "  username: qa@acme.com\n"
            "  max_post_attempts: 3\n"
        )

        settings = TestRailSettings.load_from_yaml(str(config_file))

        assert settings.base_url == 'https://tr.local/testrail/'
        assert settings.max_post_attempts == 3
        assert settings.client_id is None

    def test_load_from_yaml_top_level(self, clean_env, tmp_path):
        config_file = tmp_path / "testrail.yaml"
        config_file.write_text("client_id: acme\napi_version: v2\n")

        settings = TestRailSettings.load_from_yaml(str(config_file))

        assert settings.client_id == 'acme'

    def test_to_yaml_leaves_out_secrets(self, clean_env, tmp_path):
        settings = TestRailSettings(client_id="acme", username="u", password="p")

        dumped = settings.to_yaml()
        data = yaml.safe_load(dumped)

        assert "p" not in data['testrail'].values()
        assert 'password' not in data['testrail']
        assert 'base_url' not in data['testrail']

        config_file = tmp_path / "round.yaml"
        config_file.write_text(dumped)
        reloaded = TestRailSettings.load_from_yaml(str(config_file))
        assert reloaded.client_id == "acme"
        assert reloaded.username == "u"
