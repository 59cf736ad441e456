# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Custom exceptions for the portal API client.

This module defines the exception hierarchy for portal requests:
- PortalError: Base exception for all portal-related errors
- PortalConnectionError: Server unreachable or request timed out
- PortalAPIError: Error response from the portal API
- CourseNotFoundError: Requested course does not exist
"""


class PortalError(Exception):
    """Base exception for all portal-related errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict | None = None):
        """Initialize portal error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class PortalConnectionError(PortalError):
    """The portal API could not be reached."""

    def __init__(
        self,
        message: str = "Failed to connect to server",
        details: dict | None = None,
    ):
        super().__init__(message, details)


class PortalAPIError(PortalError):
    """Error response from the portal API.

    Attributes:
        status_code: HTTP status code from API response.
        response_body: Raw response body if available.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
        details: dict | None = None,
    ):
        """Initialize portal API error.

        Args:
            message: Human-readable error description.
            status_code: HTTP status code from API response.
            response_body: Raw response body if available.
            details: Optional dictionary with additional error context.
        """
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message, details)

    def __str__(self) -> str:
        """Return string representation with status code."""
        base = f"{self.message}"
        if self.status_code:
            base = f"[{self.status_code}] {base}"
        if self.details:
            base = f"{base} - Details: {self.details}"
        return base


class CourseNotFoundError(PortalAPIError):
    """Requested course does not exist.

    Attributes:
        course_code: The code of the course that was not found.
    """

    def __init__(
        self,
        message: str,
        course_code: str | None = None,
        response_body: str | None = None,
    ):
        self.course_code = course_code
        super().__init__(message, status_code=404, response_body=response_body)
