from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Iterator, Set, Union


@dataclass
class ProcessedRegistry:
    """Base filenames already placed during one run (case-insensitive).

    A fresh registry is created for every run and never persisted. Names
    are only ever added.
    """

    _names: Set[str] = field(default_factory=set, init=False, repr=False)

    @staticmethod
    def _key(name: Union[str, PurePath]) -> str:
        if isinstance(name, PurePath):
            name = name.name
        return name.lower()

    def add(self, name: Union[str, PurePath]) -> None:
        self._names.add(self._key(name))

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, (str, PurePath)):
            return False
        return self._key(name) in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._names))
