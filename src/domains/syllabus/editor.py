# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Syllabus editor controller.

SyllabusEditor coordinates the editing session of one course's weekly
syllabus:
1. Load - fetch the course and seed baseline and draft
2. Edit - add/edit through the item form, move, delete, clear
3. Save - send the whole normalized draft, or discard it

State machine:

    IDLE -> LOADING -> READY -> {ADDING, EDITING, SAVING} -> READY -> CLOSED
                    -> LOAD_FAILED -> LOADING (retry)

Mutating operations are only accepted in READY. The only suspension
points are load() and save(); while either is in flight the editor is
outside READY, which is what prevents re-entrant edits. A load that
completes after the editor was closed or switched to another course is
discarded.

Example:
    >>> editor = SyllabusEditor(PortalCourseRepository(client))
    >>> await editor.load("CST-4010")
    >>> editor.open_add()
    >>> editor.update_modal(topic="Network Flow")
    >>> editor.commit_modal()
    >>> await editor.save()
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any

from src.core.config.settings import SyllabusSettings, get_settings
from src.domains.syllabus.allocator import (
    DEFAULT_MAX_WEEKS,
    next_available_week,
    week_options,
)
from src.domains.syllabus.draft import DraftBuffer
from src.domains.syllabus.exceptions import (
    EditorStateError,
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
    syllabus_payload,
    used_weeks,
)
from src.domains.syllabus.repository import CourseRepository
from src.domains.syllabus.schemas import CourseRecord
from src.utils.datetime import format_iso, utc_now
from src.utils.logging import get_logger

logger = get_logger(__name__)

ConfirmHandler = Callable[[str], bool]

# Marks a form field left untouched by update_modal()
_UNCHANGED: Any = object()


class EditorStatus(str, Enum):
    """Lifecycle states of a syllabus editor."""

    IDLE = "idle"
    LOADING = "loading"
    LOAD_FAILED = "load_failed"
    READY = "ready"
    ADDING = "adding"
    EDITING = "editing"
    SAVING = "saving"
    CLOSED = "closed"


@dataclass(frozen=True)
class ModalState:
    """Pending input of the add/edit item form.

    Attributes:
        mode: Whether the form adds a new item or edits an existing one.
        week: Selected week, as entered (validated on commit).
        topic: Topic text, as entered (trimmed on commit).
        editing_week: Week of the item being edited; None when adding.
    """

    mode: ModalMode
    week: int | str | None
    topic: str
    editing_week: int | None = None


def _error_text(error: Exception, fallback: str) -> str:
    return getattr(error, "message", None) or str(error) or fallback


class SyllabusEditor:
    """Editing session for the syllabus of a single course.

    The editor exclusively owns its draft buffer. It is bound to one course
    at a time; loading another course or closing the editor drops all
    local state.

    Attributes:
        status: Current lifecycle state.
        course_id: Code of the loaded (or loading) course.
        course: Last course record received from the backend.
        modal: Pending item form input, while ADDING or EDITING.
        error: Last load/save failure message shown to the user.
        max_weeks: Upper bound of the week picker.
        loaded_at: When the course was last loaded.
        saved_at: When the syllabus was last saved.
    """

    def __init__(
        self,
        repository: CourseRepository,
        max_weeks: int = DEFAULT_MAX_WEEKS,
        confirm: ConfirmHandler | None = None,
    ) -> None:
        """Initialize the editor.

        Args:
            repository: Backend access for loading and saving the course.
            max_weeks: Upper bound of the week picker.
            confirm: Optional host callback asked before destructive actions
                (delete, discard, clear). When omitted the caller is
                responsible for confirming before invoking them.
        """
        if max_weeks < 1:
            raise ValueError(f"max_weeks must be at least 1, got {max_weeks}")

        self._repository = repository
        self._confirm = confirm
        self.max_weeks = max_weeks

        self.status = EditorStatus.IDLE
        self.course_id: str | None = None
        self.course: CourseRecord | None = None
        self.modal: ModalState | None = None
        self.error: str | None = None
        self.loaded_at: datetime | None = None
        self.saved_at: datetime | None = None

        self._buffer: DraftBuffer | None = None
        # Bumped by load() and close(); a load result from an older
        # generation is stale.
        self._generation = 0

    @classmethod
    def from_settings(
        cls,
        repository: CourseRepository,
        settings: SyllabusSettings | None = None,
        confirm: ConfirmHandler | None = None,
    ) -> "SyllabusEditor":
        """Create an editor configured from application settings."""
        settings = settings or get_settings().syllabus
        return cls(repository, max_weeks=settings.max_weeks, confirm=confirm)

    # =========================================================================
    # Derived state
    # =========================================================================

    @property
    def baseline(self) -> Syllabus:
        """Last server-confirmed syllabus (empty before a load)."""
        return self._buffer.baseline if self._buffer else ()

    @property
    def draft(self) -> Syllabus:
        """Working copy of the syllabus (empty before a load)."""
        return self._buffer.draft if self._buffer else ()

    @property
    def dirty(self) -> bool:
        """Whether the draft has unsaved changes."""
        return self._buffer.dirty if self._buffer else False

    @property
    def used_weeks(self) -> frozenset[int]:
        return used_weeks(self.draft)

    @property
    def next_available_week(self) -> int:
        return next_available_week(self.draft, self.max_weeks)

    @property
    def week_options(self) -> list[int]:
        return week_options(self.draft, self.max_weeks)

    def search(self, query: str = "") -> Syllabus:
        """Return draft items matching a week/topic search, sorted by week."""
        return filter_syllabus(self.draft, query)

    def to_dict(self) -> dict[str, Any]:
        """Convert the session to a dictionary for the host UI.

        Returns:
            Dictionary with editor state.
        """
        modal = None
        if self.modal is not None:
            modal = {
                "mode": self.modal.mode.value,
                "week": self.modal.week,
                "topic": self.modal.topic,
                "editing_week": self.modal.editing_week,
            }
        return {
            "course_id": self.course_id,
            "status": self.status.value,
            "dirty": self.dirty,
            "syllabus": syllabus_payload(self.draft),
            "next_available_week": self.next_available_week,
            "modal": modal,
            "error": self.error,
            "loaded_at": format_iso(self.loaded_at),
            "saved_at": format_iso(self.saved_at),
        }

    # =========================================================================
    # Guards
    # =========================================================================

    def _require(self, action: str, *allowed: EditorStatus) -> None:
        if self.status not in allowed:
            raise EditorStateError(
                f"Cannot {action} while the editor is {self.status.value}",
                details={"action": action, "status": self.status.value},
            )

    def _require_modal(self, action: str) -> ModalState:
        self._require(action, EditorStatus.ADDING, EditorStatus.EDITING)
        if self.modal is None:
            raise EditorStateError(f"Cannot {action}: no item form is open")
        return self.modal

    def _confirmed(self, prompt: str) -> bool:
        if self._confirm is None:
            return True
        return bool(self._confirm(prompt))

    def _find(self, week: int) -> SyllabusItem | None:
        return next((item for item in self.draft if item.week == week), None)

    def _loaded_buffer(self) -> DraftBuffer:
        if self._buffer is None:
            raise EditorStateError("No course is loaded")
        return self._buffer

    def _set_draft(self, items: Syllabus) -> None:
        self._loaded_buffer().replace(items)

    # =========================================================================
    # Load / close
    # =========================================================================

    async def load(self, course_id: str) -> CourseRecord | None:
        """Load a course and start a fresh editing session.

        Any previous session (including an in-flight load) is abandoned.

        Args:
            course_id: Code of the course to edit.

        Returns:
            The loaded course, or None if this load was superseded by a
            later load() or close() before it completed.

        Raises:
            EditorStateError: If a save is in flight or the editor is closed.
            SyllabusLoadError: If the course could not be fetched.
            asyncio.CancelledError: If the calling task was cancelled. The
                editor is left in LOAD_FAILED so the load can be retried.
        """
        self._require(
            "load a course",
            EditorStatus.IDLE,
            EditorStatus.LOADING,
            EditorStatus.LOAD_FAILED,
            EditorStatus.READY,
            EditorStatus.ADDING,
            EditorStatus.EDITING,
        )

        self._generation += 1
        generation = self._generation

        self.course_id = course_id
        self.course = None
        self.modal = None
        self.error = None
        self._buffer = None
        self.status = EditorStatus.LOADING

        log = logger.bind(course_id=course_id)
        log.debug("syllabus_load_started")

        try:
            record = await self._repository.load_course(course_id)
        except asyncio.CancelledError:
            if generation == self._generation:
                self.status = EditorStatus.LOAD_FAILED
                self.error = "Loading was cancelled"
            log.warning("syllabus_load_cancelled")
            raise
        except Exception as e:
            if generation != self._generation:
                log.debug("syllabus_load_discarded", reason="stale", error=str(e))
                return None
            self.status = EditorStatus.LOAD_FAILED
            self.error = _error_text(e, "Failed to load course")
            log.error("syllabus_load_failed", error=self.error)
            raise SyllabusLoadError(self.error, course_id=course_id) from e

        if generation != self._generation:
            log.debug("syllabus_load_discarded", reason="stale")
            return None

        syllabus = normalize_syllabus(record.syllabus)
        self.course = record
        self._buffer = DraftBuffer(syllabus)
        self.loaded_at = utc_now()
        self.status = EditorStatus.READY
        log.info("syllabus_loaded", items=len(syllabus))
        return record

    def close(self) -> None:
        """End the session and drop all local state.

        Unsaved changes are lost. A load still in flight is discarded when
        it completes; a save still in flight completes on the server but
        no longer updates the editor.
        """
        logger.info(
            "syllabus_editor_closed",
            course_id=self.course_id,
            unsaved_changes=self.dirty,
        )
        self._generation += 1
        self._buffer = None
        self.modal = None
        self.status = EditorStatus.CLOSED

    # =========================================================================
    # Item form
    # =========================================================================

    def open_add(self) -> ModalState:
        """Open the item form for a new item, prefilled with the first free week."""
        self._require("open the item form", EditorStatus.READY)
        self.modal = ModalState(
            mode=ModalMode.ADD,
            week=self.next_available_week,
            topic="",
        )
        self.status = EditorStatus.ADDING
        return self.modal

    def open_edit(self, week: int) -> ModalState:
        """Open the item form prefilled with an existing item.

        Args:
            week: Week of the item to edit.

        Raises:
            SyllabusValidationError: ENTRY_NOT_FOUND if no item has that week.
        """
        self._require("open the item form", EditorStatus.READY)
        item = self._find(week)
        if item is None:
            raise SyllabusValidationError(
                ValidationCode.ENTRY_NOT_FOUND,
                f"Week {week} not found",
                details={"week": week},
            )
        self.modal = ModalState(
            mode=ModalMode.EDIT,
            week=item.week,
            topic=item.topic,
            editing_week=item.week,
        )
        self.status = EditorStatus.EDITING
        return self.modal

    def update_modal(
        self,
        week: int | str | None = _UNCHANGED,
        topic: str = _UNCHANGED,
    ) -> ModalState:
        """Change the pending form input.

        Fields that are not passed keep their value. week=None clears the
        week picker, which validation then reports as INVALID_WEEK.
        """
        modal = self._require_modal("edit the item form")
        changes: dict[str, Any] = {}
        if week is not _UNCHANGED:
            changes["week"] = week
        if topic is not _UNCHANGED:
            changes["topic"] = topic
        self.modal = replace(modal, **changes)
        return self.modal

    def _modal_error(self, modal: ModalState) -> SyllabusValidationError | None:
        topic = modal.topic.strip() if isinstance(modal.topic, str) else ""
        if not topic:
            return SyllabusValidationError(
                ValidationCode.EMPTY_TOPIC,
                "Topic is required",
            )

        week = coerce_week(modal.week)
        if week is None:
            return SyllabusValidationError(
                ValidationCode.INVALID_WEEK,
                "Week must be a valid number",
                details={"week": modal.week},
            )

        # Keeping the edited item's own week is always allowed
        taken = self.used_weeks
        if modal.mode is ModalMode.EDIT and week == modal.editing_week:
            return None
        if week in taken:
            return SyllabusValidationError(
                ValidationCode.WEEK_TAKEN,
                f"Week {week} is already used",
                details={"week": week},
            )
        return None

    def validate_modal(self) -> ValidationCode | None:
        """Check the pending form input without changing anything.

        Returns:
            The first violated rule, or None if the input can be committed.
        """
        modal = self._require_modal("validate the item form")
        error = self._modal_error(modal)
        return error.code if error else None

    def commit_modal(self) -> SyllabusItem:
        """Apply the form input to the draft and close the form.

        Returns:
            The added or updated item.

        Raises:
            SyllabusValidationError: If the input is invalid. The draft and
                the open form are left unchanged.
        """
        modal = self._require_modal("save the item")
        error = self._modal_error(modal)
        if error is not None:
            logger.info(
                "syllabus_item_rejected",
                course_id=self.course_id,
                code=error.code.value,
            )
            raise error

        item = SyllabusItem(week=coerce_week(modal.week), topic=modal.topic.strip())
        if modal.mode is ModalMode.ADD:
            items = [*self.draft, item]
        else:
            items = [item if it.week == modal.editing_week else it for it in self.draft]
        self._set_draft(normalize_syllabus(items))

        self.modal = None
        self.status = EditorStatus.READY
        logger.info(
            "syllabus_item_added" if modal.mode is ModalMode.ADD else "syllabus_item_updated",
            course_id=self.course_id,
            week=item.week,
            previous_week=modal.editing_week,
        )
        return item

    def cancel_modal(self) -> None:
        """Close the item form without touching the draft."""
        self._require_modal("close the item form")
        self.modal = None
        self.status = EditorStatus.READY

    # =========================================================================
    # Draft actions
    # =========================================================================

    def move(self, week: int, direction: MoveDirection | str) -> int | None:
        """Move an item one position up or down.

        The item swaps week numbers with its neighbour in week order; topics
        stay with their items and no other week is renumbered.

        Args:
            week: Week of the item to move.
            direction: "up" (earlier) or "down" (later).

        Returns:
            The week the item occupies afterwards, or None when nothing
            moved (first item up, last item down, unknown week).
        """
        self._require("reorder the syllabus", EditorStatus.READY)
        direction = MoveDirection(direction)

        ordered = sorted(self.draft, key=lambda it: it.week)
        index = next((i for i, it in enumerate(ordered) if it.week == week), None)
        if index is None:
            return None

        target = index - 1 if direction is MoveDirection.UP else index + 1
        if not 0 <= target < len(ordered):
            return None

        current, neighbour = ordered[index], ordered[target]
        ordered[index] = SyllabusItem(week=neighbour.week, topic=current.topic)
        ordered[target] = SyllabusItem(week=current.week, topic=neighbour.topic)
        self._set_draft(normalize_syllabus(ordered))

        logger.debug(
            "syllabus_item_moved",
            course_id=self.course_id,
            week=week,
            direction=direction.value,
            new_week=neighbour.week,
        )
        return neighbour.week

    def delete(self, week: int) -> bool:
        """Remove an item from the draft.

        Destructive: asks the confirm callback first, if one is configured.

        Returns:
            True if removed, False if the user declined.

        Raises:
            SyllabusValidationError: ENTRY_NOT_FOUND if no item has that week.
        """
        self._require("delete an item", EditorStatus.READY)
        if self._find(week) is None:
            raise SyllabusValidationError(
                ValidationCode.ENTRY_NOT_FOUND,
                f"Week {week} not found",
                details={"week": week},
            )
        if not self._confirmed(f"Delete Week {week}?"):
            return False

        self._set_draft(tuple(it for it in self.draft if it.week != week))
        logger.info("syllabus_item_deleted", course_id=self.course_id, week=week)
        return True

    def discard(self) -> bool:
        """Restore the draft to the last saved syllabus.

        Destructive: asks the confirm callback first, if one is configured.

        Returns:
            True if discarded, False if the user declined.
        """
        self._require("discard changes", EditorStatus.READY)
        if not self._confirmed("Discard all unsaved syllabus changes?"):
            return False

        self._loaded_buffer().reset()
        logger.info("syllabus_changes_discarded", course_id=self.course_id)
        return True

    def clear(self) -> bool:
        """Remove every item from the draft.

        Destructive: asks the confirm callback first, if one is configured.

        Returns:
            True if cleared, False if the user declined.

        Raises:
            SyllabusValidationError: EMPTY_SYLLABUS if there is nothing to clear.
        """
        self._require("clear the syllabus", EditorStatus.READY)
        if not self.draft:
            raise SyllabusValidationError(
                ValidationCode.EMPTY_SYLLABUS,
                "No syllabus items to clear",
            )
        if not self._confirmed("Clear ALL syllabus items?"):
            return False

        self._set_draft(())
        logger.info("syllabus_cleared", course_id=self.course_id)
        return True

    def normalize_draft(self) -> Syllabus:
        """Sort and clean the draft in place of the current one."""
        self._require("normalize the syllabus", EditorStatus.READY)
        self._set_draft(normalize_syllabus(self.draft))
        return self.draft

    # =========================================================================
    # Save
    # =========================================================================

    async def save(self) -> CourseRecord:
        """Persist the draft as a full replacement of the course syllabus.

        Returns:
            The updated course as reported by the backend.

        Raises:
            EditorStateError: If the editor is not READY (including while
                another save is in flight).
            SyllabusSaveError: If the backend call failed. The editor is
                READY again and the draft is unchanged.
            asyncio.CancelledError: If the calling task was cancelled. The
                editor is READY again and the draft is unchanged.
        """
        self._require("save", EditorStatus.READY)
        buffer = self._loaded_buffer()

        course_id = self.course_id
        payload = normalize_syllabus(self.draft)
        log = logger.bind(course_id=course_id)

        self.status = EditorStatus.SAVING
        self.error = None
        log.debug("syllabus_save_started", items=len(payload))

        try:
            record = await self._repository.save_course(course_id, payload)
        except asyncio.CancelledError:
            # The PUT may still land server-side; the draft is kept
            if self.status is EditorStatus.SAVING:
                self.status = EditorStatus.READY
            log.warning("syllabus_save_cancelled")
            raise
        except Exception as e:
            self.error = _error_text(e, "Failed to save syllabus")
            if self.status is EditorStatus.SAVING:
                self.status = EditorStatus.READY
            log.error("syllabus_save_failed", error=self.error)
            raise SyllabusSaveError(self.error, course_id=course_id) from e

        if self.status is not EditorStatus.SAVING:
            log.info("syllabus_saved_after_close", items=len(payload))
            return record

        buffer.commit(payload)
        self.course = record.model_copy(update={"syllabus": payload})
        self.saved_at = utc_now()
        self.status = EditorStatus.READY
        log.info("syllabus_saved", items=len(payload))
        return record
