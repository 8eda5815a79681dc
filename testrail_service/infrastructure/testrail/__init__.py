"""
TestRail infrastructure module.

Provides the HTTP transport, retry policy, JSON codec and the service
facade for the TestRail API.
"""
from .http_client import RequestsTransport, basic_auth_header
from .retry import RetryPolicy
from .serialization import JsonCodec
from .service import TestRailService
from .url_builder import build_url, endpoint_template

__all__ = [
    'RequestsTransport',
    'basic_auth_header',
    'RetryPolicy',
    'JsonCodec',
    'TestRailService',
    'build_url',
    'endpoint_template',
]
