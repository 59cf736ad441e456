# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course persistence for the syllabus editor.

The editor talks to the backend only through CourseRepository: one call
to load a course and one to replace its syllabus. PortalCourseRepository
implements it on top of the portal HTTP client.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from src.domains.syllabus.models import SyllabusItem, syllabus_payload
from src.domains.syllabus.schemas import CourseRecord
from src.services.portal.client import PortalClient


class CourseRepository(ABC):
    """Abstract access to course records.

    Implementations may raise any exception on failure; the editor treats
    every failure the same way and leaves its local state untouched.
    """

    @abstractmethod
    async def load_course(self, course_id: str) -> CourseRecord:
        """Fetch the whole course record.

        Args:
            course_id: Code of the course.

        Returns:
            The course, with its syllabus normalized.
        """
        ...

    @abstractmethod
    async def save_course(
        self,
        course_id: str,
        syllabus: Sequence[SyllabusItem],
    ) -> CourseRecord:
        """Replace the course's syllabus wholesale.

        Args:
            course_id: Code of the course.
            syllabus: The complete, normalized syllabus. Never a delta.

        Returns:
            The updated course as reported by the backend.
        """
        ...


class PortalCourseRepository(CourseRepository):
    """CourseRepository backed by the portal API.

    Attributes:
        client: Portal HTTP client.
    """

    def __init__(self, client: PortalClient) -> None:
        """Initialize the repository.

        Args:
            client: Portal HTTP client; its lifecycle is owned by the caller.
        """
        self.client = client

    async def load_course(self, course_id: str) -> CourseRecord:
        data = await self.client.get_course(course_id)
        return CourseRecord.from_payload(data, course_code=course_id)

    async def save_course(
        self,
        course_id: str,
        syllabus: Sequence[SyllabusItem],
    ) -> CourseRecord:
        data = await self.client.update_course(
            course_id,
            {"syllabus": syllabus_payload(syllabus)},
        )
        return CourseRecord.from_payload(data, course_code=course_id)
