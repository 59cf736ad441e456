# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer.

This package contains domain services that encapsulate business logic.

Domains:
    syllabus: Weekly syllabus editing for a course (draft, allocation,
        validation, save/discard).
"""
