"""
TestRail service client.

Typed access to the TestRail REST API (v2)::

    from testrail_service import TestRailService

    service = TestRailService("company", "qa@company.com", "api-key")
    project = service.get_project_by_name("Checkout")
    for run in project.get_test_runs():
        print(run.name, run.failed_count)
"""
import logging

from .config import TestRailSettings
from .core.domain import *  # noqa: F401,F403
from .core.domain import __all__ as _domain_all
from .exceptions import (
    TestRailApiError,
    TestRailConnectionError,
    TestRailError,
    TestRailOperationError,
)
from .infrastructure.testrail import (
    JsonCodec,
    RequestsTransport,
    RetryPolicy,
    TestRailService,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = list(_domain_all) + [
    'TestRailSettings',
    'TestRailService',
    'RequestsTransport',
    'RetryPolicy',
    'JsonCodec',
    'TestRailError',
    'TestRailConnectionError',
    'TestRailApiError',
    'TestRailOperationError',
]
