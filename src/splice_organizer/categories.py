"""Destination taxonomy for Splice Organizer.

Every sample ends up in one of eight fixed folders below the destination
root::

    Drums/808  Drums/Snare  Drums/Kick  Drums/Clap  Drums/Hat  Drums/Other
    Other/Loop  Other/Other

The folder names are not configurable.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple


@dataclass(frozen=True)
class Category:
    """A ``(group, subgroup)`` pair naming a destination folder."""

    group: str
    subgroup: str

    @property
    def path_parts(self) -> Tuple[str, str]:
        return (self.group, self.subgroup)

    def folder(self, root: Path) -> Path:
        """Return the folder for this category under ``root``."""
        return Path(root) / self.group / self.subgroup

    def __str__(self) -> str:
        return f"{self.group}/{self.subgroup}"


DRUMS_808 = Category("Drums", "808")
DRUMS_SNARE = Category("Drums", "Snare")
DRUMS_KICK = Category("Drums", "Kick")
DRUMS_CLAP = Category("Drums", "Clap")
DRUMS_HAT = Category("Drums", "Hat")
DRUMS_OTHER = Category("Drums", "Other")
OTHER_LOOP = Category("Other", "Loop")
OTHER_OTHER = Category("Other", "Other")

ALL_CATEGORIES: Tuple[Category, ...] = (
    DRUMS_808,
    DRUMS_SNARE,
    DRUMS_KICK,
    DRUMS_CLAP,
    DRUMS_HAT,
    DRUMS_OTHER,
    OTHER_LOOP,
    OTHER_OTHER,
)


def ensure_category_tree(destination: Path) -> List[Path]:
    """Create the destination root and all category folders.

    Existing folders are left alone. Returns the folder paths in
    :data:`ALL_CATEGORIES` order.
    """
    folders: List[Path] = []
    for category in ALL_CATEGORIES:
        folder = category.folder(destination)
        folder.mkdir(parents=True, exist_ok=True)
        folders.append(folder)
    return folders
