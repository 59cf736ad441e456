# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Draft buffer holding the saved and the edited syllabus side by side."""

from collections.abc import Iterable

from src.domains.syllabus.models import Syllabus, SyllabusItem, syllabus_equal


class DraftBuffer:
    """Two snapshots of one syllabus: the server-confirmed baseline and the draft.

    Snapshots are immutable tuples, so replacing one never affects the
    other. Unsaved changes are detected by comparing them structurally.

    Attributes:
        baseline: Last server-confirmed syllabus.
        draft: Working copy edited by the user.
    """

    def __init__(self, baseline: Iterable[SyllabusItem] = ()) -> None:
        """Initialize both snapshots from the same syllabus.

        Args:
            baseline: Normalized syllabus as loaded from the server.
        """
        self._baseline: Syllabus = tuple(baseline)
        self._draft: Syllabus = self._baseline

    @property
    def baseline(self) -> Syllabus:
        return self._baseline

    @property
    def draft(self) -> Syllabus:
        return self._draft

    @property
    def dirty(self) -> bool:
        """True when the draft differs from the baseline."""
        return not syllabus_equal(self._baseline, self._draft)

    def replace(self, items: Iterable[SyllabusItem]) -> None:
        """Swap in a new draft."""
        self._draft = tuple(items)

    def reset(self) -> None:
        """Drop all unsaved changes (draft := baseline).

        Destructive; only call after the user confirmed the discard.
        """
        self._draft = self._baseline

    def commit(self, new_baseline: Iterable[SyllabusItem]) -> None:
        """Adopt a successfully saved syllabus as both baseline and draft.

        Args:
            new_baseline: The syllabus exactly as it was sent to the server.
        """
        self._baseline = tuple(new_baseline)
        self._draft = self._baseline
