"""
Configuration for the TestRail service.

Settings come from keyword arguments, a dict, a YAML file or environment
variables. Secrets (password / API key) are only ever read from the
environment, never from YAML.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from testrail_service.infrastructure.testrail.retry import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RETRY_AFTER_SECONDS,
)
from testrail_service.infrastructure.testrail.url_builder import endpoint_template


def _safe_int(value: Any, default: int) -> int:
    """Convert to int, falling back to default for empty/invalid values."""
    if value is None or value == '':
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _safe_float(value: Any, default: float) -> float:
    if value is None or value == '':
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass
class TestRailSettings:
    """TestRail endpoint, credentials and request tuning."""

    __test__ = False

    client_id: Optional[str] = None  # e.g. "company" for company.testrail.com
    base_url: Optional[str] = None  # self-hosted, e.g. "https://server/testrail/"
    username: Optional[str] = None
    password: Optional[str] = None  # password or API key (from env var)
    api_version: str = "v2"
    timeout: float = 30
    max_post_attempts: int = DEFAULT_MAX_ATTEMPTS
    default_retry_after: float = DEFAULT_RETRY_AFTER_SECONDS

    @property
    def endpoint(self) -> str:
        """Endpoint template for these settings."""
        return endpoint_template(self.client_id, self.base_url, self.api_version)

    def validate(self) -> None:
        """Check that an endpoint and credentials are present.

        Raises:
            ValueError: Naming the first missing setting
        """
        if not self.client_id and not self.base_url:
            raise ValueError("Either client_id or base_url is required")
        if not self.username:
            raise ValueError("Username is required")
        if not self.password:
            raise ValueError("Password (or API key) is required")
        if self.max_post_attempts < 1:
            raise ValueError("max_post_attempts must be at least 1")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TestRailSettings':
        """Create settings from a dict (e.g. the ``testrail`` block of a YAML file).

        Values missing from ``data`` fall back to the TESTRAIL_* environment
        variables; the password always comes from the environment.
        """
        return cls(
            client_id=data.get('client_id', os.getenv('TESTRAIL_CLIENT_ID')) or None,
            base_url=data.get('base_url', os.getenv('TESTRAIL_BASE_URL')) or None,
            username=data.get(
                'username',
                os.getenv('TESTRAIL_USERNAME', os.getenv('TESTRAIL_EMAIL'))
            ) or None,
            password=os.getenv('TESTRAIL_PASSWORD', os.getenv('TESTRAIL_API_KEY')),
            api_version=data.get('api_version', os.getenv('TESTRAIL_API_VERSION', 'v2')),
            timeout=_safe_float(data.get('timeout', os.getenv('TESTRAIL_TIMEOUT')), 30),
            max_post_attempts=_safe_int(
                data.get('max_post_attempts', os.getenv('TESTRAIL_MAX_POST_ATTEMPTS')),
                DEFAULT_MAX_ATTEMPTS
            ),
            default_retry_after=_safe_float(
                data.get('default_retry_after', os.getenv('TESTRAIL_DEFAULT_RETRY_AFTER')),
                DEFAULT_RETRY_AFTER_SECONDS
            ),
        )

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> 'TestRailSettings':
        """Create settings from TESTRAIL_* environment variables.

        A ``.env`` file is loaded first when present (existing variables win).
        """
        env_path = Path(env_file) if env_file else Path.cwd() / '.env'
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)
        return cls.from_dict({})

    @classmethod
    def load_from_yaml(cls, yaml_path: str) -> 'TestRailSettings':
        """Load settings from a YAML file.

        The file may hold the settings at top level or under a ``testrail`` key.
        """
        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f) or {}
        if 'testrail' in data:
            data = data['testrail'] or {}
        return cls.from_dict(data)

    def to_yaml(self) -> str:
        """Dump the non-secret settings as YAML."""
        data = {
            'testrail': {
                'client_id': self.client_id,
                'base_url': self.base_url,
                'username': self.username,
                'api_version': self.api_version,
                'timeout': self.timeout,
                'max_post_attempts': self.max_post_attempts,
                'default_retry_after': self.default_retry_after,
            }
        }
        data['testrail'] = {k: v for k, v in data['testrail'].items() if v is not None}
        return yaml.dump(data, default_flow_style=False, sort_keys=False)
