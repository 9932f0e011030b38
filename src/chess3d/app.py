"""Application entry point."""

from __future__ import annotations

import argparse
import logging
import sys

from chess3d.ui.i18n import LANGUAGES

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chess3d", description="Two-player chess on a rotatable 3D board."
    )
    parser.add_argument(
        "--language",
        choices=[code for code, _ in LANGUAGES],
        help="UI language (overrides the saved preference)",
    )
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default="WARNING",
        type=str.upper,
        help="logging verbosity (default: %(default)s)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Launch the Chess3D application."""
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from chess3d.ui.bootstrap import run_application

    sys.exit(run_application([sys.argv[0]], language=args.language))


if __name__ == "__main__":
    main()
