from __future__ import annotations

import argparse
import json
import math
import wave
from pathlib import Path

SAMPLE_RATE = 22050

# Relative path -> tone frequency. Names cover every category, overlapping
# patterns, mixed case, duplicate base names and non-audio files.
CORPUS: dict[str, float] = {
    "Pack_A/808_Sub_Long.wav": 45.0,
    "Pack_A/Trap_Kick_01.wav": 60.0,
    "Pack_A/kick_loop_90bpm.wav": 60.0,
    "Pack_A/SNARE_Crack.wav": 220.0,
    "Pack_A/tight_snr_02.wav": 220.0,
    "Pack_A/one_kick.wav": 55.0,
    "Pack_B/Clap_Wide.mp3": 900.0,
    "Pack_B/open_hat.wav": 6000.0,
    "Pack_B/perc_ht_03.wav": 5000.0,
    "Pack_B/drum_fill.wav": 300.0,
    "Pack_B/one_kick.wav": 65.0,
    "Pack_B/Nested/Deeper/one_kick.wav": 70.0,
    "Pack_C/Melody_Loop_Cm.wav": 440.0,
    "Pack_C/pad_texture.mp3": 330.0,
    "Pack_C/vox_chop.WAV": 520.0,
}

NON_AUDIO = [
    "Pack_A/readme.md",
    "Pack_B/kick.txt",
    "Pack_C/artwork.png",
]


def _clamp(v: float) -> float:
    return max(-1.0, min(1.0, v))


def write_wav(path: Path, samples: list[float], sample_rate: int = SAMPLE_RATE) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        pcm = bytearray()
        for s in samples:
            x = int(_clamp(s) * 32767)
            pcm += int(x).to_bytes(2, byteorder="little", signed=True)
        wf.writeframes(pcm)


def sine_tone(freq: float, duration_s: float, amp: float = 0.6) -> list[float]:
    n = int(duration_s * SAMPLE_RATE)
    return [amp * math.sin(2.0 * math.pi * freq * (i / SAMPLE_RATE)) for i in range(n)]


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a synthetic sample tree for manual organizer runs")
    parser.add_argument("out_dir", help="Output folder (created if missing)")
    parser.add_argument("--duration", type=float, default=0.1, help="Length of each tone in seconds")
    args = parser.parse_args()

    out_dir = Path(args.out_dir).expanduser().resolve()
    manifest: list[dict[str, str]] = []
    for rel, freq in CORPUS.items():
        path = out_dir / rel
        if path.suffix.lower() == ".mp3":
            # Placeholder bytes; only the name matters for sorting.
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"ID3" + rel.encode("utf-8"))
        else:
            write_wav(path, sine_tone(freq, args.duration))
        manifest.append({"path": rel, "kind": "audio"})
    for rel in NON_AUDIO:
        path = out_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("not audio\n", encoding="utf-8")
        manifest.append({"path": rel, "kind": "other"})

    (out_dir / "corpus_manifest.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    print(f"Wrote {len(manifest)} files to {out_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
