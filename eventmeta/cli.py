"""CLI entrypoints for eventmeta commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .errors import EventMetaError, OutputError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .validators import UnresolvedArgumentError


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


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eventmeta",
        description="Extract @EventTrigger metadata from Java sources into a JSON descriptor.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Scan a source tree and write the event metadata document.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    generate_parser.add_argument(
        "--config",
        dest="config_path",
        help="Explicit configuration file (defaults to <path>/.eventmeta.yml).",
    )
    generate_parser.add_argument(
        "--source-dir",
        help="Directory to scan, relative to the project root (default: src/main/java).",
    )
    generate_parser.add_argument(
        "--output",
        dest="output_file",
        help="Output JSON file (default: target/event-metadata.json).",
    )
    generate_parser.add_argument(
        "--annotation-name",
        help="Simple name of the trigger annotation (default: EventTrigger).",
    )
    generate_parser.add_argument(
        "--annotation-fqn",
        help="Fully-qualified name of the trigger annotation.",
    )
    generate_parser.add_argument(
        "--container-name",
        help="Simple name of the repeatable container annotation (default: <annotation-name>s).",
    )
    generate_parser.add_argument(
        "--fail-on-missing",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fail when a trigger lacks a resolvable topic or eventType instead of skipping it.",
    )
    generate_parser.add_argument(
        "--include",
        dest="includes",
        action="append",
        metavar="GLOB",
        help="Glob (relative to the source dir) of files to scan. Repeatable.",
    )
    generate_parser.add_argument(
        "--exclude",
        dest="excludes",
        action="append",
        metavar="GLOB",
        help="Glob (relative to the source dir) of files to skip. Repeatable.",
    )
    generate_parser.add_argument(
        "--workers",
        type=_positive_int,
        help="Number of worker threads used to parse files (default: 1).",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the document to stdout instead of writing the output file.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing scans.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for eventmeta commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "generate":
        _run_generate(parser, args)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_generate(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    orchestrator = Orchestrator()
    dry_run = bool(getattr(args, "dry_run", False))
    try:
        outcome = orchestrator.run_generate(
            args.path,
            config_path=args.config_path,
            source_dir=args.source_dir,
            output_file=args.output_file,
            annotation_name=args.annotation_name,
            annotation_fqn=args.annotation_fqn,
            container_name=args.container_name,
            fail_on_missing=args.fail_on_missing,
            includes=args.includes,
            excludes=args.excludes,
            workers=args.workers,
            dry_run=dry_run,
        )
    except (UnresolvedArgumentError, ConfigError, OutputError) as exc:
        parser.exit(1, f"eventmeta generate failed: {exc}\n")
    except EventMetaError as exc:
        parser.exit(1, f"eventmeta generate failed: {exc}\nRun with --verbose for more details.\n")

    if outcome is None:
        print("Source directory not found, nothing to scan")
        return
    if dry_run:
        sys.stdout.write(outcome.document)
        return
    rel_path = _relativize(outcome.output_file)
    print(f"Wrote {len(outcome.metadata.triggers)} triggers to {rel_path}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
