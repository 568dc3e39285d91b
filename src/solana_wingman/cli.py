"""CLI entrypoints for solana-wingman commands."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .models import SetupResult
from .project import init_project, setup_cursor
from .project.anchor import DEFAULT_PROJECT_NAME
from .report import render_json, render_text
from .scanner import scan_directory

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr so stdout stays the report."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _use_color(no_color: bool) -> bool:
    if no_color or os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


def _add_verbose_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )


def _add_scan_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to scan (defaults to current directory).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the scan report as JSON.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any potential issue is found.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output (also honoured via NO_COLOR).",
    )
    _add_verbose_option(parser)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solana-wingman",
        description="Solana/Anchor development helpers: gotcha scanning and project setup.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    gotchas_parser = subparsers.add_parser(
        "gotchas",
        help="Scan Rust sources for common Solana program gotchas.",
    )
    _add_scan_arguments(gotchas_parser)

    cursor_parser = subparsers.add_parser(
        "cursor",
        help="Configure Cursor IDE for Solana Wingman.",
    )
    cursor_parser.add_argument(
        "project_dir",
        nargs="?",
        default=".",
        help="Project directory to configure (defaults to current directory).",
    )
    cursor_parser.add_argument(
        "--skill-root",
        default=None,
        help="Solana Wingman checkout to copy .cursorrules and commands from.",
    )
    cursor_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the planned steps without writing files.",
    )
    _add_verbose_option(cursor_parser)

    init_parser = subparsers.add_parser(
        "init",
        help="Create a new Anchor project with Solana Wingman defaults.",
    )
    init_parser.add_argument(
        "project_name",
        nargs="?",
        default=DEFAULT_PROJECT_NAME,
        help=f"Name of the project to create (defaults to {DEFAULT_PROJECT_NAME}).",
    )
    init_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Check prerequisites and show the planned steps without running them.",
    )
    _add_verbose_option(init_parser)

    return parser


def _build_gotchas_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solana-gotchas",
        description="Scan for common Solana program gotchas.",
    )
    _add_scan_arguments(parser)
    return parser


def _run_gotchas(args: argparse.Namespace) -> int:
    try:
        report = scan_directory(args.directory)
    except ValueError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return EXIT_USAGE

    if args.json:
        print(render_json(report))
    else:
        sys.stdout.write(render_text(report, color=_use_color(args.no_color)))

    if args.strict and report.issues:
        return EXIT_FAILED
    return EXIT_OK


def _print_setup_result(result: SetupResult, done_message: str) -> int:
    if not result.success:
        print(f"❌ {result.error}", file=sys.stderr)
        return EXIT_FAILED

    for action in result.actions:
        if action.skipped:
            print(f"ℹ️  {action.description}")
        elif result.dry_run:
            print(f"•  Would: {action.description}")
        else:
            print(f"✅ {action.description}")
    print("")
    print("ℹ️  Dry run - no changes made" if result.dry_run else done_message)
    if result.next_steps:
        print("")
        print("Next steps:")
        for step in result.next_steps:
            print(f"  {step}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for solana-wingman commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.command == "gotchas":
        return _run_gotchas(args)
    if args.command == "cursor":
        print("🚀 Setting up Solana Wingman for Cursor IDE...")
        print("")
        result = setup_cursor(args.project_dir, skill_root=args.skill_root, dry_run=args.dry_run)
        return _print_setup_result(result, "✅ Cursor setup complete!")
    if args.command == "init":
        print(f"🚀 Creating Solana project: {args.project_name}")
        result = init_project(args.project_name, dry_run=args.dry_run)
        return _print_setup_result(result, "✅ Project created successfully!")

    parser.exit(EXIT_FAILED, "Unknown command\n")  # pragma: no cover - argparse enforces choices
    return EXIT_FAILED  # pragma: no cover


def gotchas_main(argv: list[str] | None = None) -> int:
    """Entrypoint for ``solana-gotchas [directory]``."""
    args = _build_gotchas_parser().parse_args(argv)
    configure_logging(verbose=bool(args.verbose))
    return _run_gotchas(args)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
