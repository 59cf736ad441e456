"""Course Portal Syllabus Editor.

Editing core for the weekly syllabus of a university course: a locally
buffered draft of week/topic slots, validated edits, swap-based
reordering and full-replace saves against the course portal API.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
