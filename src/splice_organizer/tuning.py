"""Centralized constants for sample placement.

Engine defaults live here and are referenced by the placer and the
configuration layer (single source of truth).
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

# ---------------------------------------------------------------------------
# Eligibility
AUDIO_EXTENSIONS: Tuple[str, ...] = (".wav", ".mp3")

# ---------------------------------------------------------------------------
# Collision handling
# Upper bound for the "<stem>_<n><ext>" search in the destination root.
COLLISION_LIMIT = 999999

# ---------------------------------------------------------------------------
# Defaults merged under user configuration
DEFAULT_CONFIG: Dict[str, Any] = {
    "verbose": False,
    "collision_limit": COLLISION_LIMIT,
    "ignore": [],
}


def resolve_config(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``DEFAULT_CONFIG`` overlaid with known keys from ``data``."""
    merged: Dict[str, Any] = {key: (list(v) if isinstance(v, list) else v) for key, v in DEFAULT_CONFIG.items()}
    if not isinstance(data, dict):
        return merged
    for key, value in data.items():
        merged[key] = value
    return merged
