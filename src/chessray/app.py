"""Application entry point."""

from __future__ import annotations

import argparse
import sys

from chessray.core.fen import board_from_fen


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessray",
        description="Two-player chess board with full move legality.",
    )
    parser.add_argument(
        "--fen",
        default=None,
        help="start from this position instead of the standard setup",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        type=str.upper,
        help="logging verbosity (default: WARNING)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse and validate command-line options."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.fen is not None:
        try:
            board_from_fen(args.fen)
        except ValueError as exc:
            parser.error(str(exc))
    return args


def main(argv: list[str] | None = None) -> None:
    """Launch the Chessray application."""
    args = parse_args(sys.argv[1:] if argv is None else argv)

    from chessray.ui.bootstrap import configure_logging, run_application

    configure_logging(args.log_level)
    sys.exit(run_application([sys.argv[0]], fen=args.fen))


if __name__ == "__main__":
    main()
