# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API schemas for the syllabus domain.

This module defines the Pydantic model for course records exchanged with
the portal API. The backend may send legacy or malformed shapes, so
fields are coerced leniently instead of rejected.
"""

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.domains.syllabus.models import Syllabus, normalize_syllabus


def normalize_schedule(raw: Any) -> list[str]:
    """Coerce a schedule value to a list of non-blank strings.

    Args:
        raw: A list of strings, a single string, or anything else.

    Returns:
        Trimmed, non-empty schedule lines.
    """
    if isinstance(raw, str):
        text = raw.strip()
        return [text] if text else []
    if isinstance(raw, (list, tuple)):
        return [x.strip() for x in raw if isinstance(x, str) and x.strip()]
    return []


class CourseRecord(BaseModel):
    """A course as returned by the portal API.

    The editor only relies on `course_code` and `syllabus`; the remaining
    fields are kept for display. Every field is coerced leniently: a value
    in an unexpected shape becomes None (or empty) instead of failing the
    whole record. Unknown fields are preserved.
    """

    model_config = {"extra": "allow"}

    course_code: str = Field(default="", description="Course code, e.g. CST-4010")
    title: str | None = None
    instructor: str | None = None
    instructor_email: str | None = None
    credits: float | None = None
    schedule: list[str] = Field(default_factory=list)
    room: str | None = None
    description: str | None = None
    prerequisites: list[str] = Field(default_factory=list)
    type: str | None = None
    department: str | None = None
    syllabus: Syllabus = Field(default=(), description="Normalized weekly syllabus")

    @field_validator(
        "title",
        "instructor",
        "instructor_email",
        "room",
        "description",
        "type",
        "department",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        # Display-only; a shape we cannot show is dropped
        return value if isinstance(value, str) else None

    @field_validator("course_code", mode="before")
    @classmethod
    def _coerce_course_code(cls, value: Any) -> str:
        if isinstance(value, str):
            return value.strip()
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return ""

    @field_validator("credits", mode="before")
    @classmethod
    def _coerce_credits(cls, value: Any) -> float | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                return None
        if isinstance(value, (int, float)) and math.isfinite(value):
            return float(value)
        return None

    @field_validator("schedule", mode="before")
    @classmethod
    def _coerce_schedule(cls, value: Any) -> list[str]:
        return normalize_schedule(value)

    @field_validator("prerequisites", mode="before")
    @classmethod
    def _coerce_prerequisites(cls, value: Any) -> list[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [x for x in value if isinstance(x, str)]

    @field_validator("syllabus", mode="before")
    @classmethod
    def _coerce_syllabus(cls, value: Any) -> Syllabus:
        return normalize_syllabus(value)

    @classmethod
    def from_payload(cls, data: Any, course_code: str) -> "CourseRecord":
        """Build a record from a raw API response.

        Args:
            data: Decoded JSON body; non-objects are treated as empty.
            course_code: Requested code, used when the body lacks one.

        Returns:
            Validated CourseRecord.
        """
        fields = dict(data) if isinstance(data, Mapping) else {}
        record = cls.model_validate(fields)
        if not record.course_code:
            record = record.model_copy(update={"course_code": course_code})
        return record
