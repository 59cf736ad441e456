# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for course records and the portal-backed repository."""

import json
from unittest.mock import AsyncMock

import httpx
import pytest

from src.domains.syllabus.editor import EditorStatus, SyllabusEditor
from src.domains.syllabus.models import SyllabusItem
from src.domains.syllabus.repository import PortalCourseRepository
from src.domains.syllabus.schemas import CourseRecord, normalize_schedule
from src.services.portal import CourseNotFoundError, PortalClient


class TestNormalizeSchedule:
    """Tests for normalize_schedule."""

    def test_single_string(self) -> None:
        """Test a legacy one-line schedule."""
        assert normalize_schedule(" Mon/Wed 10:00 ") == ["Mon/Wed 10:00"]

    def test_list_drops_blank_and_non_strings(self) -> None:
        """Test list input cleanup."""
        assert normalize_schedule(["Mon 9:00", " ", 3, "Fri 9:00 "]) == ["Mon 9:00", "Fri 9:00"]

    @pytest.mark.parametrize("raw", [None, "", 12, {"day": "Mon"}])
    def test_other_values(self, raw) -> None:
        """Test values that carry no schedule."""
        assert normalize_schedule(raw) == []


class TestCourseRecord:
    """Tests for CourseRecord."""

    def test_from_api_payload(self, sample_course_payload, sample_syllabus) -> None:
        """Test validating a full course body."""
        record = CourseRecord.model_validate(sample_course_payload)

        assert record.course_code == "CST-4010"
        assert record.credits == 3
        assert record.schedule == ["Mon/Wed 10:00 - 11:30"]
        assert record.syllabus == sample_syllabus

    def test_syllabus_is_normalized(self) -> None:
        """Test that a malformed syllabus is cleaned instead of rejected."""
        record = CourseRecord.model_validate(
            {"syllabus": [{"week": "2", "topic": " X "}, {"week": 2, "topic": "Y"}, {"week": 0, "topic": "Z"}]}
        )

        assert record.syllabus == (SyllabusItem(week=2, topic="X"),)

    def test_missing_syllabus(self) -> None:
        """Test that a course without a syllabus has an empty one."""
        assert CourseRecord.model_validate({"syllabus": None}).syllabus == ()

    def test_unknown_fields_preserved(self) -> None:
        """Test that extra backend fields survive validation."""
        record = CourseRecord.model_validate({"semester": "Fall"})

        assert record.model_dump()["semester"] == "Fall"

    def test_from_payload_fills_course_code(self) -> None:
        """Test the fallback to the requested course code."""
        record = CourseRecord.from_payload({"title": "Algorithms"}, course_code="CST-4010")

        assert record.course_code == "CST-4010"
        assert record.title == "Algorithms"

    def test_from_payload_keeps_server_course_code(self) -> None:
        """Test that a code sent by the backend wins."""
        record = CourseRecord.from_payload({"course_code": "CST-4010A"}, course_code="CST-4010")

        assert record.course_code == "CST-4010A"

    @pytest.mark.parametrize("data", [None, "", [1, 2]])
    def test_from_payload_non_object(self, data) -> None:
        """Test bodies that are not JSON objects."""
        record = CourseRecord.from_payload(data, course_code="CST-4010")

        assert record.course_code == "CST-4010"
        assert record.syllabus == ()


class TestPortalCourseRepository:
    """Tests for PortalCourseRepository."""

    @pytest.fixture
    def mock_client(self, sample_course_payload) -> AsyncMock:
        """Create a mocked portal client."""
        client = AsyncMock(spec=PortalClient)
        client.get_course.return_value = sample_course_payload
        client.update_course.return_value = sample_course_payload
        return client

    @pytest.mark.asyncio
    async def test_load_course(self, mock_client, sample_syllabus) -> None:
        """Test loading a course through the client."""
        repository = PortalCourseRepository(mock_client)

        record = await repository.load_course("CST-4010")

        mock_client.get_course.assert_awaited_once_with("CST-4010")
        assert record.syllabus == sample_syllabus

    @pytest.mark.asyncio
    async def test_load_course_propagates_errors(self, mock_client) -> None:
        """Test that client errors reach the caller unchanged."""
        mock_client.get_course.side_effect = CourseNotFoundError("Course not found", course_code="X")
        repository = PortalCourseRepository(mock_client)

        with pytest.raises(CourseNotFoundError):
            await repository.load_course("X")

    @pytest.mark.asyncio
    async def test_save_course_sends_whole_syllabus(self, mock_client, sample_syllabus) -> None:
        """Test that save replaces only the syllabus field, as a full list."""
        repository = PortalCourseRepository(mock_client)

        record = await repository.save_course("CST-4010", sample_syllabus)

        mock_client.update_course.assert_awaited_once_with(
            "CST-4010",
            {
                "syllabus": [
                    {"week": 1, "topic": "Amortized Analysis"},
                    {"week": 2, "topic": "Advanced Graph Algorithms"},
                    {"week": 3, "topic": "Network Flow"},
                ]
            },
        )
        assert record.course_code == "CST-4010"

    @pytest.mark.asyncio
    async def test_save_course_with_empty_response(self, mock_client) -> None:
        """Test a backend that answers the update without a body."""
        mock_client.update_course.return_value = None
        repository = PortalCourseRepository(mock_client)

        record = await repository.save_course("CST-4010", ())

        assert record.course_code == "CST-4010"
        assert record.syllabus == ()


class TestCourseRecordDisplayFields:
    """Tests for lenient coercion of fields the editor only displays."""

    def test_structured_instructor_is_dropped(self) -> None:
        """Test that an object where a string is expected becomes None."""
        record = CourseRecord.model_validate(
            {"instructor": {"name": "Ada"}, "syllabus": [{"week": 1, "topic": "Intro"}]}
        )

        assert record.instructor is None
        assert record.syllabus == (SyllabusItem(week=1, topic="Intro"),)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(3, 3.0), ("4", 4.0), (" 2.5 ", 2.5), ("3-4", None), (True, None), ([3], None)],
    )
    def test_credits(self, raw, expected) -> None:
        """Test numeric credits and ranges the portal sometimes sends."""
        assert CourseRecord.model_validate({"credits": raw}).credits == expected

    def test_non_string_course_code_falls_back(self) -> None:
        """Test that an unusable course code is replaced by the requested one."""
        record = CourseRecord.from_payload({"course_code": {"id": 7}}, course_code="CST-4010")

        assert record.course_code == "CST-4010"

    def test_numeric_course_code_is_kept(self) -> None:
        """Test that a numeric course code is read as text."""
        assert CourseRecord.model_validate({"course_code": 4010}).course_code == "4010"


class TestEditorWithOddCoursePayloads:
    """Tests for load and save against a portal sending unexpected field shapes."""

    @pytest.mark.asyncio
    async def test_load_and_save_tolerate_display_fields(self) -> None:
        """Test that odd display fields break neither load nor save."""
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.method)
            if request.method == "GET":
                return httpx.Response(
                    200,
                    json={
                        "course_code": "CST-4010",
                        "instructor": {"name": "Ada"},
                        "syllabus": [{"week": 1, "topic": "Intro"}],
                    },
                )
            body = json.loads(request.content)
            return httpx.Response(
                200,
                json={"course_code": "CST-4010", "credits": "3-4", **body},
            )

        client = PortalClient(
            base_url="http://portal.test",
            transport=httpx.MockTransport(handler),
        )
        async with client:
            editor = SyllabusEditor(PortalCourseRepository(client))

            await editor.load("CST-4010")
            editor.open_add()
            editor.update_modal(topic="Graphs")
            editor.commit_modal()
            record = await editor.save()

        assert calls == ["GET", "PUT"]
        assert record.credits is None
        assert editor.status is EditorStatus.READY
        assert editor.dirty is False
        assert editor.error is None
        assert editor.baseline == (
            SyllabusItem(week=1, topic="Intro"),
            SyllabusItem(week=2, topic="Graphs"),
        )
