"""Splice Organizer package

Sorts audio samples (``.wav`` / ``.mp3``) from a source folder tree into a
fixed set of drum and loop folders, based only on the filename. Files are
copied, never moved.

Public classes and functions are re-exported here for convenience.
"""

from .categories import ALL_CATEGORIES, Category  # noqa: F401
from .classifier import classify  # noqa: F401
from .config_service import ConfigService  # noqa: F401
from .errors import CollisionExhaustedError, OrganizerError, SourceMissingError  # noqa: F401
from .placer import SampleOrganizer, place  # noqa: F401
from .registry import ProcessedRegistry  # noqa: F401

__all__ = [
    "ALL_CATEGORIES",
    "Category",
    "classify",
    "ConfigService",
    "CollisionExhaustedError",
    "OrganizerError",
    "SourceMissingError",
    "SampleOrganizer",
    "place",
    "ProcessedRegistry",
]
