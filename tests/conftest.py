# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across the unit tests:
- Sample course payloads and syllabi
- A mocked course repository for editor tests
"""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from src.core.config.settings import clear_settings_cache
from src.domains.syllabus.models import SyllabusItem
from src.domains.syllabus.repository import CourseRepository
from src.domains.syllabus.schemas import CourseRecord


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture
def test_environment() -> dict[str, str]:
    """Provide test environment variables."""
    return {
        "ENVIRONMENT": "development",
        "DEBUG": "true",
        "LOG_LEVEL": "DEBUG",
        "PORTAL_BASE_URL": "http://portal.test",
        "PORTAL_API_KEY": "test-portal-key",
        "SYLLABUS_MAX_WEEKS": "16",
    }


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Make sure no test sees settings cached by another."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (requires services)"
    )


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def sample_course_code() -> str:
    """Provide a sample course code for testing."""
    return "CST-4010"


@pytest.fixture
def sample_syllabus() -> tuple[SyllabusItem, ...]:
    """Provide a normalized three-week syllabus."""
    return (
        SyllabusItem(week=1, topic="Amortized Analysis"),
        SyllabusItem(week=2, topic="Advanced Graph Algorithms"),
        SyllabusItem(week=3, topic="Network Flow"),
    )


@pytest.fixture
def sample_course_payload(sample_course_code: str) -> dict[str, Any]:
    """Provide a course body as returned by the portal API."""
    return {
        "course_code": sample_course_code,
        "title": "Advanced Algorithms",
        "instructor": "Dr. Ada Byron",
        "credits": 3,
        "schedule": "Mon/Wed 10:00 - 11:30",
        "room": "Bldg A, 302",
        "prerequisites": ["CST-3020 (Data Structures)"],
        "syllabus": [
            {"week": 1, "topic": "Amortized Analysis"},
            {"week": 2, "topic": "Advanced Graph Algorithms"},
            {"week": 3, "topic": "Network Flow"},
        ],
    }


@pytest.fixture
def sample_course(sample_course_payload: dict[str, Any]) -> CourseRecord:
    """Provide the sample course as a CourseRecord."""
    return CourseRecord.model_validate(sample_course_payload)


@pytest.fixture
def mock_repository(sample_course: CourseRecord) -> AsyncMock:
    """Create a course repository that loads the sample course.

    save_course echoes the saved syllabus back in the returned record.
    """
    repository = AsyncMock(spec=CourseRepository)
    repository.load_course.return_value = sample_course

    async def save_course(course_id, syllabus):
        return sample_course.model_copy(update={"syllabus": tuple(syllabus)})

    repository.save_course.side_effect = save_course
    return repository
