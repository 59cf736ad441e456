# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Data models for the syllabus domain.

This module defines the weekly syllabus value types and the pure
functions that keep a syllabus canonical:
- SyllabusItem: one (week, topic) slot
- normalize_syllabus: coerce, sort and deduplicate arbitrary input
- syllabus_equal: structural comparison used for unsaved-change detection
- used_weeks: occupied week numbers
- filter_syllabus: week/topic search over a syllabus

A syllabus is always handled as a tuple of frozen items. Every edit
builds a new tuple, so a baseline and a draft can share items safely.
"""

import math
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ModalMode(str, Enum):
    """Mode of the add/edit item form."""

    ADD = "add"
    EDIT = "edit"


class MoveDirection(str, Enum):
    """Direction for swap-based reordering."""

    UP = "up"
    DOWN = "down"


class SyllabusItem(BaseModel):
    """One weekly slot of a course syllabus.

    Attributes:
        week: Positive week number, unique within a syllabus.
        topic: Trimmed, non-empty topic label.
    """

    model_config = {"frozen": True}

    week: int = Field(ge=1, description="Week number (1-based)")
    topic: str = Field(min_length=1, description="Topic covered that week")


Syllabus = tuple[SyllabusItem, ...]


def coerce_week(value: Any) -> int | None:
    """Coerce a raw week value to a positive integer.

    Numeric strings are accepted ("2", " 3 ", "4.0"). Booleans, fractions,
    non-finite numbers and values below 1 are rejected.

    Args:
        value: Raw week value from user input or a server payload.

    Returns:
        The week number, or None if the value is not a valid week.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        value = int(value)
    if not isinstance(value, int):
        return None
    return value if value >= 1 else None


def _read(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def normalize_syllabus(raw: Any) -> Syllabus:
    """Build the canonical form of a syllabus.

    Entries without a valid week or with a blank topic are dropped, topics
    are trimmed, the result is sorted by week and only the first entry
    (in input order) is kept for each week. Non-list input yields an
    empty syllabus.

    Args:
        raw: Anything; typically the `syllabus` field of a course payload
            or a sequence of SyllabusItem.

    Returns:
        Sorted, duplicate-free tuple of SyllabusItem.
    """
    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Iterable):
        return ()

    cleaned: list[SyllabusItem] = []
    for entry in raw:
        week = coerce_week(_read(entry, "week"))
        topic = _read(entry, "topic")
        if week is None or not isinstance(topic, str):
            continue
        topic = topic.strip()
        if not topic:
            continue
        cleaned.append(SyllabusItem(week=week, topic=topic))

    # sorted() is stable, so the first occurrence of a week stays first
    seen: set[int] = set()
    unique: list[SyllabusItem] = []
    for item in sorted(cleaned, key=lambda it: it.week):
        if item.week in seen:
            continue
        seen.add(item.week)
        unique.append(item)
    return tuple(unique)


def syllabus_equal(a: Iterable[SyllabusItem], b: Iterable[SyllabusItem]) -> bool:
    """Compare two syllabi item by item.

    Both sides are expected to be normalized already; order matters.

    Args:
        a: First syllabus.
        b: Second syllabus.

    Returns:
        True if both have the same length and identical week/topic pairs.
    """
    left = tuple(a)
    right = tuple(b)
    if len(left) != len(right):
        return False
    return all(
        x.week == y.week and x.topic == y.topic for x, y in zip(left, right)
    )


def used_weeks(items: Iterable[SyllabusItem]) -> frozenset[int]:
    """Return the set of week numbers occupied by a syllabus."""
    return frozenset(item.week for item in items)


def filter_syllabus(items: Iterable[SyllabusItem], query: str = "") -> Syllabus:
    """Search a syllabus by week number or topic text.

    Args:
        items: Syllabus to search.
        query: Case-insensitive search text. Matches when it is contained in
            the week number's digits or in the topic.

    Returns:
        Matching items sorted by week; all items when the query is blank.
    """
    ordered = sorted(items, key=lambda it: it.week)
    q = query.strip().lower()
    if not q:
        return tuple(ordered)
    return tuple(
        item for item in ordered
        if q in str(item.week) or q in item.topic.lower()
    )


def syllabus_payload(items: Iterable[SyllabusItem]) -> list[dict[str, Any]]:
    """Serialize a syllabus to the wire shape `[{"week": .., "topic": ..}]`."""
    return [item.model_dump() for item in items]
