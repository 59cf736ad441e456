# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities.

All timestamps recorded by the editor (loaded_at, saved_at) are
timezone-aware UTC datetimes.

Usage:
------
    from src.utils.datetime import utc_now

    saved_at = utc_now()
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.

    Example:
        >>> now = utc_now()
        >>> now.tzinfo
        datetime.timezone.utc
    """
    return datetime.now(timezone.utc)


def format_iso(dt: datetime | None) -> str | None:
    """Format datetime as ISO 8601 string.

    Args:
        dt: Datetime to format, or None.

    Returns:
        ISO format string, or None if input is None.
    """
    if dt is None:
        return None
    return dt.isoformat()
