import json
import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from splice_organizer import cli
from splice_organizer import config_service as config_module


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch):
    """Keep the CLI away from the real user configuration."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setattr(config_module.platform, "system", lambda: "Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    return workdir


@pytest.fixture
def samples(tmp_path: Path) -> Path:
    src = tmp_path / "samples"
    (src / "pack").mkdir(parents=True)
    (src / "pack" / "Big_Kick.wav").write_bytes(b"kick")
    (src / "pack" / "808_glide.mp3").write_bytes(b"808")
    (src / "pack" / "notes.txt").write_text("x", encoding="utf-8")
    return src


def answers(monkeypatch, *values):
    replies = iter(values)
    prompts = []

    def fake_input(prompt=""):
        prompts.append(prompt)
        return next(replies)

    monkeypatch.setattr("builtins.input", fake_input)
    return prompts


def test_classify_command(capsys):
    assert cli.main(["classify", "Trap_Kick_01.wav", "hat_loop.mp3", "pad.wav"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Trap_Kick_01.wav -> Drums/Kick",
        "hat_loop.mp3 -> Drums/Hat",
        "pad.wav -> Other/Other",
    ]


def test_categories_command(capsys):
    assert cli.main(["categories"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Drums/808"
    assert out[-1] == "Other/Other"
    assert len(out) == 8


def test_organize_with_arguments(samples: Path, tmp_path: Path, capsys):
    dest = tmp_path / "sorted"
    assert cli.main(["organize", str(samples), str(dest)]) == 0
    assert (dest / "Drums" / "Kick" / "Big_Kick.wav").read_bytes() == b"kick"
    assert (dest / "Drums" / "808" / "808_glide.mp3").exists()
    out = capsys.readouterr().out
    assert "Splice Files organized successfully." in out
    assert "Request:" not in out


def test_organize_missing_source(tmp_path: Path, capsys):
    dest = tmp_path / "sorted"
    assert cli.main(["organize", str(tmp_path / "missing"), str(dest)]) == 1
    assert "Source folder does not exist. Exiting." in capsys.readouterr().out
    assert not dest.exists()


def test_organize_interactive(samples: Path, tmp_path: Path, monkeypatch, capsys):
    dest = tmp_path / "sorted"
    prompts = answers(monkeypatch, str(samples), str(dest), "1")
    assert cli.main(["organize"]) == 0
    assert len(prompts) == 3
    assert "Splice Samples folder" in prompts[0]
    out = capsys.readouterr().out
    assert "Splice File Organizer" in out
    assert "Request:" in out
    assert (dest / "Drums" / "Kick" / "Big_Kick.wav").exists()


def test_interactive_missing_source_stops_before_destination_prompt(tmp_path: Path, monkeypatch, capsys):
    prompts = answers(monkeypatch, str(tmp_path / "missing"))
    assert cli.main(["organize"]) == 1
    assert len(prompts) == 1
    assert "Source folder does not exist" in capsys.readouterr().out


def test_organize_analyze_writes_report_only(samples: Path, tmp_path: Path, capsys):
    dest = tmp_path / "sorted"
    report_path = tmp_path / "reports" / "plan.json"
    assert cli.main(["organize", str(samples), str(dest), "--analyze", "--report", str(report_path)]) == 0
    assert not dest.exists()
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["mode"] == "analyze"
    assert report["files_processed"] == 2
    assert cli.ANALYZE_MESSAGE in capsys.readouterr().out


def test_organize_json_output(samples: Path, tmp_path: Path, capsys):
    dest = tmp_path / "sorted"
    assert cli.main(["organize", str(samples), str(dest), "--json"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["files_copied"] == 2
    assert report["skipped_non_audio"] == 1


def test_organize_log_file(samples: Path, tmp_path: Path):
    dest = tmp_path / "sorted"
    log_file = tmp_path / "run_log.txt"
    assert cli.main(["organize", str(samples), str(dest), "--verbose", "--log-file", str(log_file)]) == 0
    text = log_file.read_text(encoding="utf-8")
    assert "Copied:" in text
    assert "Done. processed=2" in text


def test_organize_remember_saves_paths(samples: Path, tmp_path: Path, isolated_config: Path):
    dest = tmp_path / "sorted"
    assert cli.main(["organize", str(samples), str(dest), "--portable", "--remember"]) == 0
    saved = json.loads((isolated_config / "config.json").read_text(encoding="utf-8"))
    assert saved["source_dir"] == str(samples.resolve())
    assert saved["destination_dir"] == str(dest.resolve())


def test_config_verbose_used_when_not_interactive(samples: Path, tmp_path: Path, isolated_config: Path, capsys):
    (isolated_config / "config.json").write_text(json.dumps({"verbose": True}), encoding="utf-8")
    dest = tmp_path / "sorted"
    assert cli.main(["organize", str(samples), str(dest), "--portable"]) == 0
    assert "Request:" in capsys.readouterr().out


def test_wait_prompts_for_enter(samples: Path, tmp_path: Path, monkeypatch):
    prompts = answers(monkeypatch, "")
    assert cli.main(["organize", str(samples), str(tmp_path / "sorted"), "--wait"]) == 0
    assert prompts == ["Press Enter to exit..."]


def test_remembered_folders_are_prompt_defaults(samples: Path, tmp_path: Path, monkeypatch, capsys):
    dest = tmp_path / "sorted"
    assert cli.main(["organize", str(samples), str(dest), "--portable", "--remember"]) == 0
    (dest / "Drums" / "Kick" / "Big_Kick.wav").unlink()

    prompts = answers(monkeypatch, "", "", "0")
    assert cli.main(["organize", "--portable"]) == 0

    assert str(samples.resolve()) in prompts[0]
    assert str(dest.resolve()) in prompts[1]
    assert (dest / "Drums" / "Kick" / "Big_Kick.wav").read_bytes() == b"kick"
    assert "Source folder does not exist" not in capsys.readouterr().out


def test_json_output_stays_clean_when_prompting(samples: Path, tmp_path: Path, monkeypatch, capsys):
    dest = tmp_path / "sorted"
    answers(monkeypatch, str(samples), str(dest), "1")
    assert cli.main(["organize", "--json"]) == 0
    captured = capsys.readouterr()
    report = json.loads(captured.out)
    assert report["files_copied"] == 2
    assert "Splice File Organizer" in captured.err
    assert "Enter Splice Samples folder name" in captured.err
