"""
NoteShelf Backend — Slug Encoder
==================================

What:  Maps an arbitrary title to a filesystem- and URL-safe identifier.
How:   Lowercase, trim, collapse every run of characters outside [a-z0-9]
       into a single hyphen, then strip hyphens from both ends.

Examples:
    "Hello, World!!"   → "hello-world"
    "  Daily  Plan "   → "daily-plan"
    "Café ☕ notes"     → "caf-notes"
    "!!!"              → ""   (callers substitute FALLBACK_SLUG)
"""

import re

FALLBACK_SLUG = "untitled-note"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(value) -> str:
    """
    Convert text to a slug. Pure and total; idempotent on its own output.

    Returns an empty string when nothing alphanumeric survives.
    """
    text = str(value).strip().lower()
    return _NON_ALNUM_RE.sub("-", text).strip("-")
