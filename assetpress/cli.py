"""CLI entrypoints for assetpress commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import DEFAULT_OUTPUT, ConfigError, InputConfig, load_config
from .logging import configure_logging
from .manifest import ManifestError
from .orchestrator import Orchestrator


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


def _add_log_file_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assetpress",
        description="Minify, merge and register built JS/CSS assets in a manifest.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser(
        "run",
        help="Process every configured input and update the asset manifest.",
    )
    _add_verbose_option(run_parser, suppress_default=True)
    _add_log_file_option(run_parser)
    run_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    run_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file to use instead of <path>/.assetpress.yml.",
    )
    run_parser.add_argument(
        "--manifest",
        default=None,
        help="Manifest path relative to the project root (overrides the config).",
    )

    minify_parser = subparsers.add_parser(
        "minify",
        help="Minify a single directory or file without updating the manifest.",
    )
    _add_verbose_option(minify_parser, suppress_default=True)
    _add_log_file_option(minify_parser)
    minify_parser.add_argument("src", help="Source directory or file, relative to --root.")
    minify_parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT,
        help=f"Destination directory (defaults to {DEFAULT_OUTPUT}).",
    )
    minify_parser.add_argument(
        "--merge",
        nargs="?",
        const=True,
        default=False,
        metavar="NAME",
        help="Merge JS and CSS into single bundles, optionally named NAME.",
    )
    minify_parser.add_argument(
        "--flatten",
        action="store_true",
        help="Only emit merged bundles at the top level instead of per directory.",
    )
    minify_parser.add_argument(
        "--root",
        default=".",
        help="Project root that paths are resolved against (defaults to current directory).",
    )
    minify_parser.add_argument(
        "--keep-bang-comments",
        action="store_true",
        help="Preserve /*! ... */ license comments.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for assetpress commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=getattr(args, "log_file", None))

    orchestrator = Orchestrator()

    if args.command == "run":
        if args.config is not None and not args.config.is_file():
            parser.exit(1, f"Configuration file not found: {args.config}\n")
        try:
            config_path = args.config if args.config is not None else Path(args.path)
            config = load_config(config_path, root=Path(args.path))
            summary = orchestrator.run(config=config, manifest_path=args.manifest)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except (ConfigError, ManifestError) as exc:
            parser.exit(1, f"assetpress run failed: {exc}\n")
        message = f"Updated {_relativize(summary.manifest_path)} with {summary.entries_written} entries"
        if summary.skipped:
            message += f" ({len(summary.skipped)} input(s) skipped)"
        print(message)
    elif args.command == "minify":
        item = InputConfig(
            src=args.src,
            output=args.output,
            keep_structure=not args.flatten,
            merge_result=args.merge,
        )
        try:
            result = orchestrator.minify(
                Path(args.root),
                item,
                keep_bang_comments=bool(args.keep_bang_comments),
            )
        except OSError as exc:
            parser.exit(1, f"{exc}\n")
        for processed in result.written:
            print(_relativize(processed.output))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
