"""CLI entrypoint for tsmodel commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .extractor import ModelExtractor
from .logging import configure_logging
from .source_loader import SourceLoadError
from .writer import model_to_json, write_model


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    """Accept the logging flags both before and after the subcommand."""
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write DEBUG-level logs to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsmodel",
        description="Extract a structural model from TypeScript declaration sources.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract",
        help="Parse sources and print or write the model as JSON.",
    )
    _add_logging_options(extract_parser, suppress_default=True)
    extract_parser.add_argument(
        "paths",
        nargs="*",
        help="Files or directories to scan (defaults to source_dirs from the config).",
    )
    extract_parser.add_argument(
        "--config",
        default=".",
        help="Path to .tsmodel.yml or the directory holding it (defaults to current directory).",
    )
    extract_parser.add_argument(
        "--output",
        help="Write the model JSON to this file instead of stdout.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for tsmodel commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    if args.command == "extract":
        try:
            config = load_config(Path(args.config))
            model = ModelExtractor(config).extract(args.paths or None)
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except SourceLoadError as exc:
            parser.exit(1, f"tsmodel extract failed: {exc}\n")

        output = Path(args.output) if args.output else config.output
        if output is None:
            sys.stdout.write(model_to_json(model))
        else:
            write_model(model, output)
            print(f"Model written to {_relativize(output)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
