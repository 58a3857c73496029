import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from splice_organizer.registry import ProcessedRegistry


def test_registry_starts_empty():
    registry = ProcessedRegistry()
    assert len(registry) == 0
    assert "kick.wav" not in registry


def test_registry_is_case_insensitive():
    registry = ProcessedRegistry()
    registry.add("One_Kick.WAV")
    assert "one_kick.wav" in registry
    assert "ONE_KICK.wav" in registry
    assert list(registry) == ["one_kick.wav"]


def test_registry_uses_base_name_of_paths():
    registry = ProcessedRegistry()
    registry.add(Path("a") / "b" / "Snare.wav")
    assert Path("other") / "snare.wav" in registry
    assert "snare.wav" in registry
    assert 42 not in registry


def test_registries_are_independent():
    first = ProcessedRegistry()
    first.add("kick.wav")
    assert "kick.wav" not in ProcessedRegistry()
