# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Portal API client for course records.

This module provides an async HTTP client for the admin course endpoints
of the portal backend. Only the two calls the syllabus editor needs are
exposed:
- GET /api/v1/admin/courses/{course_code}
- PUT /api/v1/admin/courses/{course_code}

Example:
    async with PortalClient.from_settings() as client:
        course = await client.get_course("CST-4010")
        await client.update_course("CST-4010", {"syllabus": [...]})
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from src.core.config.settings import PortalSettings, get_settings
from src.services.portal.exceptions import (
    CourseNotFoundError,
    PortalAPIError,
    PortalConnectionError,
)

logger = logging.getLogger(__name__)

COURSES_PATH = "/api/v1/admin/courses"


def error_message(data: Any, status_code: int) -> str:
    """Pick the user-facing message out of an error response.

    Args:
        data: Decoded response body.
        status_code: HTTP status code.

    Returns:
        The body's `detail`, else its `message`, else a generic text.
    """
    if isinstance(data, dict):
        msg = data.get("detail") or data.get("message")
        if msg:
            return msg if isinstance(msg, str) else str(msg)
    return f"Request failed ({status_code})"


class PortalClient:
    """Async HTTP client for the portal course API.

    Attributes:
        base_url: Base URL of the portal API server.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the portal client.

        Args:
            base_url: Base URL of the portal API server.
            api_key: Optional API key sent as X-API-Key.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, mainly for tests.
        """
        self.base_url = base_url.rstrip("/")
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if api_key:
            headers["X-API-Key"] = api_key

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: PortalSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "PortalClient":
        """Create a client from portal settings.

        Args:
            settings: Portal settings; the application settings when omitted.
            transport: Optional httpx transport, mainly for tests.

        Returns:
            Configured PortalClient.
        """
        settings = settings or get_settings().portal
        return cls(
            base_url=settings.base_url,
            api_key=settings.api_key.get_secret_value() or None,
            timeout=settings.timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "PortalClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> httpx.Response:
        try:
            return await self._client.request(method, path, json=payload)
        except httpx.TimeoutException as e:
            logger.error("Portal API timeout: %s %s", method, path)
            raise PortalConnectionError(
                details={"error_type": type(e).__name__},
            ) from e
        except httpx.HTTPError as e:
            logger.error("Portal API connection error: %s", str(e))
            raise PortalConnectionError(
                details={"error_type": type(e).__name__},
            ) from e

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        text = response.text
        if not text:
            return None
        try:
            return response.json()
        except ValueError:
            return text

    def _course_path(self, course_code: str) -> str:
        return f"{COURSES_PATH}/{quote(course_code, safe='')}"

    async def _course_call(
        self,
        method: str,
        course_code: str,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        response = await self._request(method, self._course_path(course_code), payload)
        data = self._decode(response)

        if response.is_success:
            return data

        message = error_message(data, response.status_code)
        if response.status_code == 404:
            raise CourseNotFoundError(
                message=message,
                course_code=course_code,
                response_body=response.text,
            )

        raise PortalAPIError(
            message=message,
            status_code=response.status_code,
            response_body=response.text,
        )

    async def get_course(self, course_code: str) -> Any:
        """Fetch a course record.

        Args:
            course_code: Code of the course.

        Returns:
            Decoded JSON body (normally an object with a `syllabus` list).

        Raises:
            PortalConnectionError: If the server is unreachable.
            CourseNotFoundError: If the course does not exist.
            PortalAPIError: If the API returns another error.
        """
        logger.debug("Getting course: code=%s", course_code)
        return await self._course_call("GET", course_code)

    async def update_course(
        self,
        course_code: str,
        payload: dict[str, Any],
    ) -> Any:
        """Update fields of a course record.

        Fields present in the payload replace the stored ones wholesale.

        Args:
            course_code: Code of the course.
            payload: Fields to replace, e.g. {"syllabus": [...]}.

        Returns:
            Decoded JSON body of the updated course.

        Raises:
            PortalConnectionError: If the server is unreachable.
            CourseNotFoundError: If the course does not exist.
            PortalAPIError: If the API returns another error.
        """
        logger.debug(
            "Updating course: code=%s, fields=%s",
            course_code,
            sorted(payload),
        )
        data = await self._course_call("PUT", course_code, payload)
        logger.info("Updated course: code=%s", course_code)
        return data
