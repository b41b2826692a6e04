"""
core/errors.py
────────────────────────────────────────────────────────────────────────
Exceptions raised by the planning core.

Only *caller bugs* are exceptions. Not being able to build a meal is a
normal outcome and is returned as data (None / a short list).
"""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Malformed profile or inventory; raised before any work is done."""
