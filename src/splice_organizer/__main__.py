# src/splice_organizer/__main__.py
from __future__ import annotations


def _run_cli() -> int:
    """Run the CLI entrypoint."""
    from splice_organizer.cli import main as cli_main

    # Let the CLI parse sys.argv itself.
    return int(cli_main())


def main() -> int:
    """
    Module entrypoint:
      - python -m splice_organizer                 -> CLI help
      - python -m splice_organizer organize A B    -> copy run
      - python -m splice_organizer classify NAME   -> show category
    """
    return _run_cli()


if __name__ == "__main__":
    raise SystemExit(main())
