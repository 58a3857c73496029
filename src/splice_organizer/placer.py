"""Placement engine for Splice Organizer.

The :class:`SampleOrganizer` walks a source tree, picks out audio files,
asks :mod:`splice_organizer.classifier` for a category and copies each file
into ``<destination>/<group>/<subgroup>``.

Collision policy, in order:

1. Candidate path is free: copy.
2. Candidate path is taken but no file with this base name was placed in
   the current run: the existing file is stale (earlier run or put there
   by hand), so it is deleted and replaced.
3. Candidate path is taken by a file placed in this run: the copy goes to
   ``<destination>/<stem>_<n><ext>`` for the first free ``n``. Indexed
   copies land in the destination root, not in the category folder.

A source file that already is its candidate path (source tree inside the
destination tree) is reported as ``IN_PLACE`` and left alone.

Sources are never modified. Failures are reported per file (or per
directory when listing fails) and the run carries on.
"""

from __future__ import annotations

import datetime
import os
import shutil
import sys
import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional, Set, TextIO, Tuple, TypedDict

from . import classifier, tuning
from .categories import ensure_category_tree
from .errors import CollisionExhaustedError, SourceMissingError
from .registry import ProcessedRegistry


class Outcome(str, Enum):
    """Terminal state of a single discovered file."""

    COPIED = "COPIED"
    OVERWRITTEN = "OVERWRITTEN"
    INDEXED = "INDEXED"
    IN_PLACE = "IN_PLACE"
    SKIPPED_NON_AUDIO = "SKIPPED_NON_AUDIO"
    FAILED = "FAILED"
    PLANNED = "PLANNED"


class PlacementEntry(TypedDict, total=False):
    source: str
    dest: str
    category: str
    matched: Optional[str]
    action: str
    reason: str


class RunError(TypedDict):
    kind: str
    path: str
    message: str


MODES = ("copy", "analyze")


def is_audio_file(path: Path) -> bool:
    """Return True for ``.wav`` / ``.mp3`` files (case-insensitive)."""
    return path.suffix.lower() in tuning.AUDIO_EXTENSIONS


def indexed_filename(filename: str, index: int) -> str:
    """``"one_kick.wav", 0`` -> ``"one_kick_0.wav"``."""
    path = Path(filename)
    return f"{path.stem}_{index}{path.suffix}"


@dataclass
class SampleOrganizer:
    """Copy audio samples from ``source_dir`` into the category tree."""

    source_dir: Path
    destination_dir: Path
    collision_limit: int = tuning.COLLISION_LIMIT
    ignore_rules: Iterable[str] = field(default_factory=tuple)

    # Per-run state
    registry: ProcessedRegistry = field(init=False, default_factory=ProcessedRegistry)
    current_mode: str = field(init=False, default="copy")
    _verbose: bool = field(init=False, default=False)
    _visited_dirs: Set[Tuple[int, int]] = field(init=False, default_factory=set)
    _destination_id: Optional[Tuple[int, int]] = field(init=False, default=None)
    _report: Dict[str, Any] = field(init=False, default_factory=dict)
    _log_callback: Optional[Callable[[str], None]] = field(init=False, default=None, repr=False)
    _log_to_console: bool = field(init=False, default=True)
    _log_handle: Optional[TextIO] = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        self.source_dir = Path(self.source_dir)
        self.destination_dir = Path(self.destination_dir)
        self.collision_limit = max(1, int(self.collision_limit))
        self.ignore_rules = tuple(self.ignore_rules or ())

    # ------------------------------------------------------------------
    # Logging
    def _emit(self, msg: str, stream: Optional[TextIO] = None) -> None:
        # Diagnostics on stderr are printed even when console logging is off.
        if self._log_to_console or stream is sys.stderr:
            print(msg, file=stream or sys.stdout)
        if self._log_handle is not None:
            self._log_handle.write(msg + "\n")
            self._log_handle.flush()
        if self._log_callback is not None:
            try:
                self._log_callback(msg)
            except Exception:
                pass

    def _emit_log(self, msg: str) -> None:
        self._emit(msg)

    def _emit_error(self, kind: str, path: Path, message: str) -> None:
        if kind == "traversal":
            self._emit(f"Error processing file system: {path}: {message}", stream=sys.stderr)
        else:
            self._emit(f"Error copying file: {path}: {message}", stream=sys.stderr)
        error: RunError = {"kind": kind, "path": str(path), "message": message}
        self._report["errors"].append(error)

    # ------------------------------------------------------------------
    # Discovery
    def _should_ignore(self, name: str) -> bool:
        for rule in self.ignore_rules:
            if name == rule or name.startswith(rule):
                return True
        return False

    @staticmethod
    def _dir_identity(path: Path) -> Optional[Tuple[int, int]]:
        try:
            st = os.stat(path)
        except OSError:
            return None
        # Some filesystems report no inode numbers.
        if not st.st_ino:
            return None
        return (st.st_dev, st.st_ino)

    def _walk(self, directory: Path) -> None:
        """Depth-first visit of ``directory``; listing errors skip the subtree."""
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as exc:
            self._report["traversal_errors"] += 1
            self._emit_error("traversal", directory, exc.strerror or str(exc))
            return

        for entry in entries:
            if self._should_ignore(entry.name):
                continue
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir()
            except OSError:
                is_dir = False
            if not is_dir:
                self._process_file(path)
                continue

            identity = self._dir_identity(path)
            if identity is not None:
                # Symlink loops and a destination nested inside the source.
                if identity in self._visited_dirs or identity == self._destination_id:
                    continue
                self._visited_dirs.add(identity)
            self._walk(path)

    # ------------------------------------------------------------------
    # Placement
    def _next_indexed_path(self, source: Path) -> Path:
        for index in range(self.collision_limit):
            candidate = self.destination_dir / indexed_filename(source.name, index)
            if not candidate.exists():
                return candidate
        raise CollisionExhaustedError(source, self.collision_limit)

    def _copy(self, src: Path, dst: Path) -> None:
        """Copy ``src`` to ``dst``; on failure no ``dst`` is left behind."""
        try:
            shutil.copy2(str(src), str(dst))
        except OSError:
            try:
                dst.unlink()
            except FileNotFoundError:
                pass
            raise

    def _process_file(self, source: Path) -> None:
        report = self._report
        if not is_audio_file(source):
            report["skipped_non_audio"] += 1
            return

        category, matched = classifier.explain(source.name)
        candidate = category.folder(self.destination_dir) / source.name
        if matched is None:
            reason = "no pattern matched"
        else:
            reason = f"matched '{matched}'"
        entry: PlacementEntry = {
            "source": str(source),
            "dest": str(candidate),
            "category": str(category),
            "matched": matched,
            "action": Outcome.PLANNED.value,
            "reason": reason,
        }
        report["files"].append(entry)
        report["files_processed"] += 1

        if self.current_mode == "analyze":
            return

        try:
            candidate.parent.mkdir(parents=True, exist_ok=True)
            if candidate.exists() and os.path.samefile(source, candidate):
                # The source already sits at its destination (source inside
                # the destination tree). Never delete it.
                self.registry.add(source.name)
                entry["action"] = Outcome.IN_PLACE.value
                entry["reason"] = reason + "; already in place"
                report["already_in_place"] += 1
                return

            if self._verbose:
                self._emit_log("Request:")
                self._emit_log(f"  Source:      {source}")
                self._emit_log(f"  Destination: {candidate}")

            if not candidate.exists():
                dest, outcome = candidate, Outcome.COPIED
            elif source.name not in self.registry:
                candidate.unlink()
                dest, outcome = candidate, Outcome.OVERWRITTEN
                reason += "; replaced file from an earlier run"
            else:
                dest, outcome = self._next_indexed_path(source), Outcome.INDEXED
                reason += "; name already placed this run"

            self._copy(source, dest)
        except CollisionExhaustedError as exc:
            self._fail(entry, source, reason, str(exc))
            return
        except OSError as exc:
            self._fail(entry, source, reason, exc.strerror or str(exc))
            return

        self.registry.add(source.name)
        entry["dest"] = str(dest)
        entry["action"] = outcome.value
        entry["reason"] = reason
        counter = {
            Outcome.COPIED: "files_copied",
            Outcome.OVERWRITTEN: "files_overwritten",
            Outcome.INDEXED: "files_indexed",
        }[outcome]
        report[counter] += 1

        if self._verbose:
            self._emit_log("Copied:")
            self._emit_log(f"  From: {source}")
            self._emit_log(f"  To:   {dest}")

    def _fail(self, entry: PlacementEntry, source: Path, reason: str, message: str) -> None:
        entry["action"] = Outcome.FAILED.value
        entry["reason"] = f"{reason}; copy failed: {message}"
        self._report["failed"] += 1
        self._emit_error("copy", source, message)

    # ------------------------------------------------------------------
    def run(
        self,
        mode: str = "copy",
        verbose: bool = False,
        log_callback: Optional[Callable[[str], None]] = None,
        log_to_console: bool = True,
        log_path: Optional[Path] = None,
    ) -> Dict[str, Any]:
        """Execute a run and return its report.

        - copy: create the category tree, then place every audio file.
        - analyze: classify and report candidate destinations only; no
          directories are created and nothing is copied.

        Raises :class:`SourceMissingError` before doing anything when the
        source root is not a directory.
        """
        mode = (mode or "copy").lower().strip()
        if mode not in MODES:
            raise ValueError(f"Unknown mode: {mode}")
        if not self.source_dir.is_dir():
            raise SourceMissingError(self.source_dir)

        self.current_mode = mode
        self._verbose = bool(verbose)
        self._log_callback = log_callback
        self._log_to_console = log_to_console
        self.registry = ProcessedRegistry()
        self._visited_dirs = set()

        run_id = datetime.datetime.now().strftime("%Y%m%d_%H%M%S_") + uuid.uuid4().hex[:8]
        self._report = {
            "run_id": run_id,
            "mode": mode,
            "timestamp": datetime.datetime.now().isoformat(),
            "source": str(self.source_dir.resolve()),
            "destination": str(self.destination_dir.resolve()),
            "files_processed": 0,
            "files_copied": 0,
            "files_overwritten": 0,
            "files_indexed": 0,
            "already_in_place": 0,
            "skipped_non_audio": 0,
            "failed": 0,
            "traversal_errors": 0,
            "files": [],
            "errors": [],
        }
        report = self._report

        if mode == "copy":
            ensure_category_tree(self.destination_dir)
        self._destination_id = self._dir_identity(self.destination_dir)

        if log_path is not None:
            log_path = Path(log_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            self._log_handle = open(log_path, "w", encoding="utf-8", buffering=1)

        try:
            self._emit_log(f"Splice Organizer run_id={run_id} mode={mode}")
            self._emit_log(f"Source: {self.source_dir}")
            self._emit_log(f"Destination: {self.destination_dir}")

            source_id = self._dir_identity(self.source_dir)
            if source_id is not None:
                self._visited_dirs.add(source_id)
            self._walk(self.source_dir)

            self._emit_log(
                f"Done. processed={report['files_processed']} "
                f"copied={report['files_copied']} overwritten={report['files_overwritten']} "
                f"indexed={report['files_indexed']} "
                f"in_place={report['already_in_place']} failed={report['failed']} "
                f"skipped_non_audio={report['skipped_non_audio']}"
            )
        finally:
            if self._log_handle is not None:
                self._log_handle.close()
                self._log_handle = None

        return report


def place(source: Path, destination: Path, verbose: bool = False, **kwargs: Any) -> Dict[str, Any]:
    """Copy every audio file under ``source`` into ``destination``; returns the report."""
    return SampleOrganizer(Path(source), Path(destination), **kwargs).run(mode="copy", verbose=verbose)
