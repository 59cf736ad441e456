# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Portal API service.

This package provides access to the course portal backend:
- PortalClient: Async HTTP client for the admin course endpoints
- Portal exceptions raised by the client

Usage:
    from src.services.portal import PortalClient

    async with PortalClient.from_settings() as client:
        course = await client.get_course("CST-4010")
"""

from src.services.portal.client import PortalClient, error_message
from src.services.portal.exceptions import (
    CourseNotFoundError,
    PortalAPIError,
    PortalConnectionError,
    PortalError,
)

__all__ = [
    "PortalClient",
    "error_message",
    "PortalError",
    "PortalAPIError",
    "PortalConnectionError",
    "CourseNotFoundError",
]
