"""
Infrastructure layer - implementations of interfaces.

Contains:
- testrail: TestRail transport, retry policy, JSON codec and service
"""
from .testrail import (
    JsonCodec,
    RequestsTransport,
    RetryPolicy,
    TestRailService,
)

__all__ = [
    'JsonCodec',
    'RequestsTransport',
    'RetryPolicy',
    'TestRailService',
]
