"""CLI with subcommands: rename, preview, catalog."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .core.catalog import DEFAULT_LOCALE, ExclusionCatalog, NoiseCatalog
from .core.config import RenamerSettings
from .core.errors import CatalogLoadError, ConfigurationError
from .logging.rich_logger import QuietProgressReporter, RichProgressReporter, configure_logging


EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


def _add_catalog_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--catalog-dir",
        dest="catalog_dirs",
        type=Path,
        action="append",
        default=[],
        help="Extra directory holding exclusions.xml / noise*.xml (repeatable)",
    )
    parser.add_argument(
        "--locale",
        type=str,
        default=DEFAULT_LOCALE,
        help=f"Locale for noise catalog variants (default: {DEFAULT_LOCALE})",
    )
    parser.add_argument(
        "--no-default-catalogs",
        action="store_true",
        help="Do not load the catalogs shipped with tidyname",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="tidyname",
        description="Normalize media filenames and keep audio tags in sync.",
    )

    # Global options
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-essential output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ============ RENAME command ============
    rename_parser = subparsers.add_parser(
        "rename",
        help="Normalize the filenames in one or more directories",
    )
    rename_parser.add_argument(
        "directories",
        nargs="+",
        type=Path,
        help="Directories to process",
    )
    rename_parser.add_argument(
        "-r", "--recursive",
        action="store_true",
        help="Also process subdirectories",
    )
    rename_parser.add_argument(
        "-e", "--extension",
        dest="extensions",
        action="append",
        default=[],
        help="Only rename files with this extension (repeatable, default: all supported)",
    )
    rename_parser.add_argument(
        "-w", "--workers",
        type=int,
        default=1,
        help="Directories processed concurrently (default: 1)",
    )
    _add_catalog_options(rename_parser)

    # ============ PREVIEW command ============
    preview_parser = subparsers.add_parser(
        "preview",
        help="Show the normalized form of filenames without touching any file",
    )
    preview_parser.add_argument(
        "names",
        nargs="+",
        help="Filenames to normalize",
    )
    _add_catalog_options(preview_parser)

    # ============ CATALOG command ============
    catalog_parser = subparsers.add_parser(
        "catalog",
        help="List the merged exclusion and noise entries",
    )
    _add_catalog_options(catalog_parser)

    return parser


def build_settings(args: argparse.Namespace) -> RenamerSettings:
    """Translate parsed arguments into validated settings.

    Raises:
        ConfigurationError: an option value is invalid.
    """
    try:
        return RenamerSettings(
            catalog_dirs=args.catalog_dirs,
            include_default_catalogs=not args.no_default_catalogs,
            locale=args.locale,
            include_subdirectories=getattr(args, "recursive", False),
            extensions=getattr(args, "extensions", []),
            workers=getattr(args, "workers", 1),
        )
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e


# ============ Command Handlers ============

def cmd_rename(args: argparse.Namespace, reporter) -> int:
    """Handle the rename command."""
    from .services.renamer import create_engine
    from .services.runner import BatchRunner

    settings = build_settings(args)
    engine = create_engine(settings)

    reporter.print_header("tidyname")
    reporter.print_config({
        "Directories": ", ".join(str(d) for d in args.directories),
        "Recursive": settings.include_subdirectories,
        "Filter": settings.build_filter(),
        "Locale": settings.locale,
        "Workers": settings.workers,
    })

    runner = BatchRunner(engine, workers=settings.workers, progress=reporter)
    results = runner.run_targets(args.directories, settings)

    for target in sorted(results):
        reporter.print_result(results[target])
    for target, reason in runner.failed.items():
        reporter.error(f"{target}: {reason}")

    return EXIT_CONFIG_ERROR if runner.failed else 0


def cmd_preview(args: argparse.Namespace, reporter) -> int:
    """Handle the preview command."""
    from .services.renamer import create_engine

    engine = create_engine(build_settings(args))
    for name in args.names:
        proposed = engine.propose_name(name)
        if proposed is None:
            reporter.output(f"{name} -> (skipped)")
        elif proposed == name:
            reporter.output(f"{name} (unchanged)")
        else:
            reporter.output(f"{name} -> {proposed}")
    return 0


def cmd_catalog(args: argparse.Namespace, reporter) -> int:
    """Handle the catalog command."""
    settings = build_settings(args)
    exclusions = ExclusionCatalog.load(settings.catalog_dirs, settings.include_default_catalogs)
    noise = NoiseCatalog.load(settings.catalog_dirs, settings.locale, settings.include_default_catalogs)

    reporter.output(f"Exclusions ({len(exclusions)}):")
    for entry in exclusions:
        reporter.output(f"  {entry}")
    reporter.output(f"Noise, locale {noise.locale or '-'} ({len(noise)}):")
    for entry in noise:
        reporter.output(f"  {entry}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    verbose = getattr(args, 'verbose', False)
    quiet = getattr(args, 'quiet', False)
    configure_logging(verbose=verbose, quiet=quiet)

    # Create reporter
    if quiet:
        reporter = QuietProgressReporter()
    else:
        reporter = RichProgressReporter(verbose=verbose)

    # No command specified - show help
    if not args.command:
        parser.print_help()
        return 0

    # Dispatch to command handler
    try:
        with reporter:
            if args.command == "rename":
                return cmd_rename(args, reporter)
            elif args.command == "preview":
                return cmd_preview(args, reporter)
            elif args.command == "catalog":
                return cmd_catalog(args, reporter)
            else:
                reporter.error(f"Unknown command: {args.command}")
                return 1

    except KeyboardInterrupt:
        # Clean exit on Ctrl+C - no stack trace
        return EXIT_INTERRUPTED
    except (ConfigurationError, CatalogLoadError) as e:
        reporter.error(str(e))
        return EXIT_CONFIG_ERROR
    except Exception as e:
        reporter.error(f"Error: {e}")
        if verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
