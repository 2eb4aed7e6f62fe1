"""
Prefix filtering of JVM argument lists.

Prefixes are fixed strings chosen when a workaround is written; matching is an
exact, case-sensitive ``str.startswith``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence


@dataclass
class SanitizeResult:
    """Filtered entries plus how many were dropped."""
    entries: List[Any]
    removed: int


def has_prefix(arg: str, prefixes: Sequence[str]) -> bool:
    """Return True if ``arg`` starts with any of ``prefixes``."""
    return any(arg.startswith(p) for p in prefixes)


def strip_prefixed(entries: Optional[Iterable[str]], prefixes: Sequence[str]) -> SanitizeResult:
    """Drop every plain argument that starts with one of ``prefixes``.

    Returns the input list itself when nothing matched, so a second pass with
    the same prefixes is a no-op.
    """
    if not entries:
        return SanitizeResult(entries=[], removed=0)

    original = entries if isinstance(entries, list) else list(entries)
    kept = [arg for arg in original if not has_prefix(arg, prefixes)]
    removed = len(original) - len(kept)
    if removed == 0:
        return SanitizeResult(entries=original, removed=0)
    return SanitizeResult(entries=kept, removed=removed)


def strip_prefixed_structured(entries: Optional[Iterable[Any]], prefixes: Sequence[str]) -> SanitizeResult:
    """Same as ``strip_prefixed`` for a profile's mixed JVM argument list.

    Only ``str`` entries are tested; rule-gated entries are kept untouched.
    """
    if not entries:
        return SanitizeResult(entries=[], removed=0)

    original = entries if isinstance(entries, list) else list(entries)
    kept = [
        arg for arg in original
        if not isinstance(arg, str) or not has_prefix(arg, prefixes)
    ]
    removed = len(original) - len(kept)
    if removed == 0:
        return SanitizeResult(entries=original, removed=0)
    return SanitizeResult(entries=kept, removed=removed)
