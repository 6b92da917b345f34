"""Comma-separated selector parsing for organizations, projects, and users."""

from __future__ import annotations

from typing import Collection, List, Optional, Set


def split_selector(raw: Optional[str]) -> List[str]:
    """Split on commas, trim each token, and drop empties; keeps first-seen order."""
    if not raw:
        return []
    tokens = (token.strip() for token in raw.split(","))
    return list(dict.fromkeys(token for token in tokens if token))


def parse_selector(raw: Optional[str]) -> Set[str]:
    """Return the selector as a set; an empty set means no filtering."""
    return set(split_selector(raw))


def is_selected(value: Optional[str], selector: Collection[str]) -> bool:
    """True when the selector is empty or contains `value`."""
    if not selector:
        return True
    return value in selector


__all__ = ["split_selector", "parse_selector", "is_selected"]
