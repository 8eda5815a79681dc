"""
Interfaces - abstract base classes for dependency inversion.
"""
from .service import ITestRailService
from .transport import HttpTransport, TransportResponse

__all__ = ['ITestRailService', 'HttpTransport', 'TransportResponse']
