"""
Custom exception types for the NetSuite REST client.

These exceptions allow callers to tell apart a bad configuration, a
failure to reach the server, an error status returned by the server
and a response body that could not be decoded.
"""

from typing import Optional


class NetSuiteError(Exception):
    """Base exception for all NetSuite client errors."""


class NetSuiteConfigError(NetSuiteError):
    """Raised when the connection configuration is unusable."""


class NetSuiteTransportError(NetSuiteError):
    """Raised when a request could not be sent or no response was received."""


class NetSuiteAPIError(NetSuiteError):
    """Raised when the NetSuite API returns a non-success status."""

    def __init__(self, message: str, status_code: int, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class NetSuiteDecodeError(NetSuiteError):
    """Raised when a success response does not match the expected record shape."""
