from __future__ import annotations


class TogglitClientError(Exception):
    """Base client error."""


class NetworkError(TogglitClientError):
    """Transport/network layer error."""


class ApiError(TogglitClientError):
    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class DecodeError(TogglitClientError):
    """Response body is not valid JSON."""
