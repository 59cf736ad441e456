# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Custom exceptions for the syllabus editor.

This module defines the exception hierarchy for editor operations:
- SyllabusError: Base exception for all editor errors
- SyllabusValidationError: Local input errors, state unchanged
- SyllabusLoadError: Course could not be loaded, nothing to edit
- SyllabusSaveError: Save failed, the draft is kept for a retry
- EditorStateError: Operation not allowed in the current editor state
"""

from enum import Enum


class ValidationCode(str, Enum):
    """Rules checked before an edit touches the draft."""

    EMPTY_TOPIC = "empty_topic"
    INVALID_WEEK = "invalid_week"
    WEEK_TAKEN = "week_taken"
    ENTRY_NOT_FOUND = "entry_not_found"
    EMPTY_SYLLABUS = "empty_syllabus"


class SyllabusError(Exception):
    """Base exception for all syllabus editor errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict | None = None):
        """Initialize syllabus error.

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


class SyllabusValidationError(SyllabusError):
    """Invalid edit rejected before it reached the draft.

    Recoverable: the user corrects the input and retries.

    Attributes:
        code: The violated rule.
    """

    def __init__(
        self,
        code: ValidationCode,
        message: str,
        details: dict | None = None,
    ):
        """Initialize validation error.

        Args:
            code: The violated rule.
            message: Message shown next to the form or action.
            details: Optional dictionary with additional error context.
        """
        self.code = code
        super().__init__(message, details)

    def __str__(self) -> str:
        """Return string representation with the rule code."""
        return f"[{self.code.value}] {self.message}"


class SyllabusLoadError(SyllabusError):
    """Course could not be loaded.

    Attributes:
        course_id: The course that failed to load.
    """

    def __init__(
        self,
        message: str,
        course_id: str | None = None,
        details: dict | None = None,
    ):
        self.course_id = course_id
        super().__init__(message, details)


class SyllabusSaveError(SyllabusError):
    """Saving the syllabus failed; the unsaved draft is still intact.

    Attributes:
        course_id: The course whose save failed.
    """

    def __init__(
        self,
        message: str,
        course_id: str | None = None,
        details: dict | None = None,
    ):
        self.course_id = course_id
        super().__init__(message, details)


class EditorStateError(SyllabusError):
    """Raised when an operation is not permitted in the current state."""

    pass
