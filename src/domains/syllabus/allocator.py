# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Week slot allocation.

Computes the lowest free week of a syllabus and the list of weeks offered
by the item form. Both are recomputed from the current draft on every call;
a syllabus is small enough that nothing is cached.
"""

from collections.abc import Iterable

from src.domains.syllabus.models import SyllabusItem, used_weeks

DEFAULT_MAX_WEEKS = 20


def next_available_week(
    items: Iterable[SyllabusItem],
    max_weeks: int = DEFAULT_MAX_WEEKS,
) -> int:
    """Return the lowest week not used by the syllabus.

    When every week in 1..max_weeks is taken the result lies above the cap
    (max_weeks + 1 unless that week is taken too). Callers must still offer
    that overflow week as a choice.

    Args:
        items: Current syllabus.
        max_weeks: Realistic number of course weeks.

    Returns:
        A week number that is never in used_weeks(items).

    Raises:
        ValueError: If max_weeks is smaller than 1.
    """
    if max_weeks < 1:
        raise ValueError(f"max_weeks must be at least 1, got {max_weeks}")

    taken = used_weeks(items)
    week = 1
    while week in taken:
        week += 1
    return week


def week_options(
    items: Iterable[SyllabusItem],
    max_weeks: int = DEFAULT_MAX_WEEKS,
) -> list[int]:
    """Return the weeks selectable in the item form.

    Args:
        items: Current syllabus.
        max_weeks: Realistic number of course weeks.

    Returns:
        1..max_weeks, followed by the overflow week when the syllabus
        already fills every week up to the cap.
    """
    options = list(range(1, max_weeks + 1))
    overflow = next_available_week(items, max_weeks)
    if overflow > max_weeks:
        options.append(overflow)
    return options
