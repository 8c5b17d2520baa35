"""Command-line interface for diurne."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

from diurne.errors import ConfigError, StorageError


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    config_file: Path | None
    expression: str | None


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="diurne",
        description="Tag financial transfers and keep them in a report database",
    )
    p.add_argument("-V", "--version", action="version", version="%(prog)s 0.1.0")
    p.add_argument("-c", "--config", metavar="CONFIG", help="Config file (required unless --tokens is given)")
    p.add_argument(
        "--tokens",
        metavar="EXPR",
        help="Print the token stream of a filter expression and exit",
    )
    return p


def resolve_options(args: argparse.Namespace) -> CliOptions:
    return CliOptions(
        config_file=Path(args.config) if args.config else None,
        expression=args.tokens,
    )


def show_tokens(expression: str) -> None:
    from diurne.debug import dump_tokens
    from diurne.lexer import Lexer

    dump_tokens(Lexer(expression), file=sys.stdout)


def run(options: CliOptions) -> int:
    """Load and print the config, open the report database and register the config's tags."""
    from diurne.config import load_config
    from diurne.debug import dump_config
    from diurne.storage import ReportDatabase

    assert options.config_file is not None
    config = load_config(options.config_file)
    dump_config(config, file=sys.stdout)

    with ReportDatabase.with_config(config) as db:
        added = db.sync_tags(config.tags)

    print(
        f"{len(config.tags)} tags, {len(config.aliases)} aliases, "
        f"{added} new in {config.database_path}"
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)
    options = resolve_options(args)

    if options.expression is not None:
        show_tokens(options.expression)
        return 0

    if options.config_file is None:
        parser.print_usage(sys.stderr)
        print("error: the following arguments are required: -c/--config", file=sys.stderr)
        return 2

    try:
        return run(options)
    except ConfigError as exc:
        print(exc.format(), file=sys.stderr)
        return 1
    except StorageError as exc:
        print(exc.format(), file=sys.stderr)
        return 2
