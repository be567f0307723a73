"""CLI entrypoints for proofreader commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .formatters import render_json, render_text
from .logging import configure_logging
from .orchestrator import check_directory

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_USAGE = 2


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="proofreader",
        description="Check that relative JavaScript imports match what their modules export.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Analyze a project directory and report unresolved imports.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    check_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    check_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format for diagnostics.",
    )
    check_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of threads used to parse files (overrides .proofreader.yml).",
    )
    check_parser.add_argument(
        "--parser",
        dest="parsers",
        action="append",
        default=None,
        metavar="ID",
        help="Parser backend to try, in order; repeat to build a chain.",
    )
    check_parser.add_argument(
        "--show-parsers",
        action="store_true",
        help="List the parser that succeeded for every file.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing the checker.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for proofreader commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "check":
        try:
            result = check_directory(args.path, workers=args.workers, parsers=args.parsers)
        except (FileNotFoundError, NotADirectoryError, ConfigError, ValueError) as exc:
            parser.exit(EXIT_USAGE, f"proofreader check failed: {exc}\n")
        if args.format == "json":
            sys.stdout.write(render_json(result))
        else:
            sys.stdout.write(render_text(result, show_parsers=bool(args.show_parsers)))
        return EXIT_FINDINGS if result.has_errors else EXIT_OK

    if args.command == "serve":
        from .service.app import run_service

        run_service(host=args.host, port=args.port)
        return EXIT_OK

    parser.exit(EXIT_USAGE, "Unknown command\n")  # pragma: no cover - argparse enforces choices
    return EXIT_USAGE  # pragma: no cover


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
