"""Exception hierarchy for Splice Organizer."""

from __future__ import annotations

from pathlib import Path
from typing import Union


class OrganizerError(Exception):
    """Base class for all application-specific errors."""


class ConfigurationError(OrganizerError):
    """Raised when configuration data fails validation on save."""


class SourceMissingError(OrganizerError):
    """Raised before any work when the source root is not a directory."""

    def __init__(self, source: Union[str, Path]):
        self.source = Path(source)
        super().__init__(f"Source folder does not exist: {self.source}")


class CollisionExhaustedError(OrganizerError):
    """Raised when no free indexed filename was found within the limit."""

    def __init__(self, source: Union[str, Path], limit: int):
        self.source = Path(source)
        self.limit = limit
        super().__init__(
            f"No free indexed name for {self.source.name} after {limit} attempts"
        )
