# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for the syllabus editor.

This package provides centralized configuration management:
- Settings: Pydantic-based settings loaded from environment variables
- PortalSettings: Course portal API connection
- SyllabusSettings: Editor limits such as the week picker bound

Example:
    >>> from src.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.portal.base_url)
    'http://127.0.0.1:8000'
"""

from src.core.config.settings import (
    PortalSettings,
    Settings,
    SyllabusSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "PortalSettings",
    "SyllabusSettings",
]
