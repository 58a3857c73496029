"""Filename classifier.

Classification is plain substring containment on the lowercased filename,
extension included. Rules are evaluated top to bottom and the first rule
with a matching pattern wins, so ``"kick_loop.wav"`` lands in
``Drums/Kick`` and never in ``Other/Loop``.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .categories import (
    DRUMS_808,
    DRUMS_CLAP,
    DRUMS_HAT,
    DRUMS_KICK,
    DRUMS_OTHER,
    DRUMS_SNARE,
    OTHER_LOOP,
    OTHER_OTHER,
    Category,
)

# Order matters: categories overlap.
CLASSIFICATION_RULES: Tuple[Tuple[Sequence[str], Category], ...] = (
    (("808",), DRUMS_808),
    (("snare", "_snr", "snr_"), DRUMS_SNARE),
    (("kick", "_kck", "kck_"), DRUMS_KICK),
    (("clap", "_clp", "clp_"), DRUMS_CLAP),
    (("hat", "ht_", "_ht"), DRUMS_HAT),
    (("drum", "_drm", "drm_"), DRUMS_OTHER),
    (("loop",), OTHER_LOOP),
)

DEFAULT_CATEGORY = OTHER_OTHER


def explain(filename: str) -> Tuple[Category, Optional[str]]:
    """Return ``(category, matched_pattern)`` for ``filename``.

    ``matched_pattern`` is ``None`` when no rule matched and the default
    category was used.
    """
    name = filename.lower()
    for patterns, category in CLASSIFICATION_RULES:
        for pattern in patterns:
            if pattern in name:
                return category, pattern
    return DEFAULT_CATEGORY, None


def classify(filename: str) -> Category:
    """Return the destination category for ``filename``."""
    return explain(filename)[0]
