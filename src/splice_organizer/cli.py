"""Command-line interface for Splice Organizer.

Subcommands:

- ``organize``: copy samples from a source tree into the category tree
  (or only report what would happen with ``--analyze``).
- ``classify``: show the category for one or more filenames.
- ``categories``: list the destination folders.

Run ``python -m splice_organizer --help`` for usage. When ``organize`` is
called without folders it asks for them interactively.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from .categories import ALL_CATEGORIES
from .classifier import explain
from .config_service import ConfigService
from .errors import ConfigurationError, SourceMissingError
from .placer import SampleOrganizer

BANNER = "-" * 78 + "\nSplice File Organizer\n"
SUCCESS_MESSAGE = "Splice Files organized successfully."
ANALYZE_MESSAGE = "Analysis complete. Nothing was copied."


def _parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="splice-organizer",
        description="Splice Organizer - sort audio samples into drum and loop folders by filename",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # organize
    sp = subparsers.add_parser("organize", help="Copy samples into the destination category folders")
    sp.add_argument("source", nargs="?", help="Source samples folder (prompted when omitted)")
    sp.add_argument("destination", nargs="?", help="Destination folder (prompted when omitted)")
    sp.add_argument("--verbose", "-v", action="store_true", help="Print source and destination for every copy")
    sp.add_argument(
        "--analyze",
        action="store_true",
        help="Classify and report destinations without creating or copying anything",
    )
    sp.add_argument("--report", metavar="PATH", help="Write the run report as JSON to PATH")
    sp.add_argument("--json", action="store_true", help="Print the run report as JSON instead of log lines")
    sp.add_argument("--log-file", metavar="PATH", help="Also write every log line to PATH")
    sp.add_argument(
        "--portable",
        "-p",
        action="store_true",
        help="Force portable mode (ignored if portable.flag is present)",
    )
    sp.add_argument("--remember", action="store_true", help="Save the folders used into the configuration")
    sp.add_argument("--wait", action="store_true", help="Wait for Enter before exiting")

    # classify
    sp = subparsers.add_parser("classify", help="Show the category a filename would be sorted into")
    sp.add_argument("names", nargs="+", help="Filenames to classify")

    # categories
    subparsers.add_parser("categories", help="List the destination category folders")

    return parser.parse_args(argv)


def _prompt(message: str, default: Optional[str] = None, stream: Optional[TextIO] = None) -> str:
    """Ask for a line of input; an empty reply returns ``default``.

    With ``stream`` the prompt text is written there instead of stdout.
    """
    if default:
        message = f"{message.rstrip(': ')} [{default}]: "
    try:
        if stream is None:
            reply = input(message).strip()
        else:
            stream.write(message)
            stream.flush()
            reply = input().strip()
    except EOFError:
        reply = ""
    return reply or (default or "")


def _prompt_yes_no(message: str, stream: Optional[TextIO] = None) -> bool:
    return _prompt(message, stream=stream).lower() in {"1", "y", "yes", "true"}


def _write_report(report: Dict[str, Any], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report, indent=2), encoding="utf-8")


def _run_organize(args: argparse.Namespace) -> int:
    config_service = ConfigService(app_dir=Path.cwd())
    config = config_service.load_config(cli_portable=args.portable)

    # Keep stdout clean for the JSON report.
    console = sys.stderr if args.json else sys.stdout
    prompt_stream = sys.stderr if args.json else None

    interactive = not (args.source and args.destination)
    if interactive:
        print(BANNER, file=console)

    source_text = args.source or _prompt(
        "Enter Splice Samples folder name: ", default=config.get("source_dir"), stream=prompt_stream
    )
    source = Path(source_text).expanduser() if source_text else None
    # The source is checked before asking for the destination.
    if source is None or not source.is_dir():
        print("Source folder does not exist. Exiting.", file=console)
        return 1

    destination_text = args.destination or _prompt(
        "Enter destination folder name: ", default=config.get("destination_dir"), stream=prompt_stream
    )
    if not destination_text:
        print("Error: destination folder is required", file=console)
        return 1
    destination = Path(destination_text).expanduser()

    if args.verbose:
        verbose = True
    elif interactive:
        verbose = _prompt_yes_no(
            "Print the source and destination info: Enter 1 for YES, 0 for NO: ", stream=prompt_stream
        )
    else:
        verbose = bool(config.get("verbose", False))

    engine = SampleOrganizer(
        source_dir=source,
        destination_dir=destination,
        collision_limit=int(config["collision_limit"]),
        ignore_rules=config.get("ignore") or (),
    )
    mode = "analyze" if args.analyze else "copy"
    try:
        report = engine.run(
            mode=mode,
            verbose=verbose,
            log_to_console=not args.json,
            log_path=Path(args.log_file) if args.log_file else None,
        )
    except SourceMissingError:
        print("Source folder does not exist. Exiting.", file=console)
        return 1
    except OSError as exc:
        print(f"Error: could not prepare destination {destination}: {exc}", file=sys.stderr)
        return 1

    if args.report:
        _write_report(report, Path(args.report))
    if args.json:
        print(json.dumps(report, indent=2))
    else:
        print(ANALYZE_MESSAGE if mode == "analyze" else SUCCESS_MESSAGE)

    if args.remember:
        updated = {key: config[key] for key in ("verbose", "collision_limit", "ignore") if key in config}
        updated["source_dir"] = str(source.resolve())
        updated["destination_dir"] = str(destination.resolve())
        try:
            config_service.save_config(updated, cli_portable=args.portable)
        except ConfigurationError as exc:
            print(f"Warning: {exc}. Configuration not saved.", file=console)

    if args.wait:
        _prompt("Press Enter to exit...", stream=prompt_stream)
    return 0


def _run_classify(names: List[str]) -> int:
    for name in names:
        category, _ = explain(name)
        print(f"{name} -> {category}")
    return 0


def _run_categories() -> int:
    for category in ALL_CATEGORIES:
        print(category)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_arguments(argv)
    command = args.command
    if command == "organize":
        return _run_organize(args)
    if command == "classify":
        return _run_classify(args.names)
    if command == "categories":
        return _run_categories()
    print(f"Error: unrecognized command {command}")
    return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
