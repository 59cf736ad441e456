# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Syllabus domain.

This domain provides the weekly syllabus editor of a course:
- SyllabusItem and the pure normalize/compare/search helpers
- DraftBuffer: baseline and draft snapshots with change detection
- Week allocation for new items
- SyllabusEditor: the load/edit/save session state machine
- CourseRepository: backend access used by the editor

Usage:
    from src.domains.syllabus import PortalCourseRepository, SyllabusEditor
    from src.services.portal import PortalClient

    async with PortalClient.from_settings() as client:
        editor = SyllabusEditor.from_settings(PortalCourseRepository(client))
        await editor.load("CST-4010")
"""

from src.domains.syllabus.allocator import (
    DEFAULT_MAX_WEEKS,
    next_available_week,
    week_options,
)
from src.domains.syllabus.draft import DraftBuffer
from src.domains.syllabus.editor import (
    ConfirmHandler,
    EditorStatus,
    ModalState,
    SyllabusEditor,
)
from src.domains.syllabus.exceptions import (
    EditorStateError,
    SyllabusError,
    SyllabusLoadError,
    SyllabusSaveError,
    SyllabusValidationError,
    ValidationCode,
)
from src.domains.syllabus.models import (
    ModalMode,
    MoveDirection,
    Syllabus,
    SyllabusItem,
    coerce_week,
    filter_syllabus,
    normalize_syllabus,
    syllabus_equal,
    syllabus_payload,
    used_weeks,
)
from src.domains.syllabus.repository import CourseRepository, PortalCourseRepository
from src.domains.syllabus.schemas import CourseRecord, normalize_schedule

__all__ = [
    # Models
    "SyllabusItem",
    "Syllabus",
    "ModalMode",
    "MoveDirection",
    "coerce_week",
    "normalize_syllabus",
    "syllabus_equal",
    "used_weeks",
    "filter_syllabus",
    "syllabus_payload",
    # Schemas
    "CourseRecord",
    "normalize_schedule",
    # Allocation
    "DEFAULT_MAX_WEEKS",
    "next_available_week",
    "week_options",
    # Draft / editor
    "DraftBuffer",
    "SyllabusEditor",
    "EditorStatus",
    "ModalState",
    "ConfirmHandler",
    # Persistence
    "CourseRepository",
    "PortalCourseRepository",
    # Exceptions
    "SyllabusError",
    "SyllabusValidationError",
    "SyllabusLoadError",
    "SyllabusSaveError",
    "EditorStateError",
    "ValidationCode",
]
