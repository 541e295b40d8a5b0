"""Command-line interface for afrafmt."""

from __future__ import annotations

import argparse
import sys
import tomllib
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from afrafmt.dialect import DIALECTS, Dialect, dialect_for_path, get_dialect
from afrafmt.errors import ConfigError, RegionError
from afrafmt.indent import NEWLINES, parse_indent, parse_newline

CONFIG_NAME = "afrafmt.toml"
STDIN = Path("-")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_files: list[Path]
    output_file: Path | None
    in_place: bool
    check: bool
    dialect: Dialect | None
    indent: str | None
    newline: str | None
    region: tuple[int, int] | None
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="afrafmt",
        description="Formatter for Rebeca (.rebeca) and property (.property) files",
    )
    p.add_argument("inputs", nargs="+", metavar="FILE", help="Input file(s); '-' reads stdin")
    p.add_argument("-o", "--output", help="Output file (default: stdout; single input only)")
    p.add_argument("-i", "--in-place", action="store_true", help="Rewrite input files")
    p.add_argument(
        "--check",
        action="store_true",
        help="Report files that would be reformatted and exit 1; write nothing",
    )
    p.add_argument(
        "--dialect",
        choices=sorted(DIALECTS),
        help="Force the dialect (default: by file extension)",
    )
    p.add_argument(
        "--indent",
        metavar="UNIT",
        help="Indent unit: 'tab' or a number of spaces (default: detect)",
    )
    p.add_argument(
        "--newline",
        choices=["auto", *sorted(NEWLINES)],
        help="Line terminator to emit (default: auto, reuse the input's)",
    )
    p.add_argument(
        "--region",
        metavar="OFFSET:LENGTH",
        help="Format only this character span of a single input",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    return p


def parse_region_arg(s: str) -> tuple[int, int]:
    """Parse an OFFSET:LENGTH string into (offset, length)."""
    offset, sep, length = s.partition(":")
    if not sep or not offset.isdigit() or not length.isdigit():
        raise argparse.ArgumentTypeError(f"invalid region format (expected OFFSET:LENGTH): {s}")
    return int(offset), int(length)


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML: {exc}", str(path)) from exc


def _config_setting(config: dict[str, Any], key: str, origin: str) -> Any:
    section = config.get("format")
    if section is None:
        return None
    if not isinstance(section, dict):
        raise ConfigError("[format] must be a table", origin)
    return section.get(key)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_files = [Path(name) for name in args.inputs]

    if args.output and len(input_files) > 1:
        raise argparse.ArgumentTypeError("--output needs exactly one input file")
    if args.region and len(input_files) > 1:
        raise argparse.ArgumentTypeError("--region needs exactly one input file")
    if args.in_place and STDIN in input_files:
        raise argparse.ArgumentTypeError("--in-place cannot rewrite stdin")

    first = input_files[0]
    input_dir = Path(".") if first == STDIN or not first.parent.parts else first.parent

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)
    origin = str(config_path if config_path is not None else input_dir / CONFIG_NAME)

    # Dialect: extension < config < CLI
    dialect: Dialect | None = None
    cfg_dialect = _config_setting(config, "dialect", origin)
    if cfg_dialect is not None:
        if not isinstance(cfg_dialect, str):
            raise ConfigError(f"dialect must be a string, got {cfg_dialect!r}", origin)
        dialect = _with_origin(get_dialect, cfg_dialect, origin)
    if args.dialect:
        dialect = get_dialect(args.dialect)

    # Indent: detect < config < CLI
    indent: str | None = None
    cfg_indent = _config_setting(config, "indent", origin)
    if cfg_indent is not None:
        indent = _with_origin(parse_indent, cfg_indent, origin)
    if args.indent is not None:
        indent = parse_indent(args.indent)

    # Newline: auto < config < CLI
    newline: str | None = None
    cfg_newline = _config_setting(config, "newline", origin)
    if cfg_newline is not None:
        newline = _with_origin(parse_newline, cfg_newline, origin)
    if args.newline is not None:
        newline = parse_newline(args.newline)

    region = parse_region_arg(args.region) if args.region else None
    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_files=input_files,
        output_file=output_file,
        in_place=args.in_place,
        check=args.check,
        dialect=dialect,
        indent=indent,
        newline=newline,
        region=region,
        debug=args.debug,
    )


def _with_origin(parse: Callable[[Any], Any], value: Any, origin: str) -> Any:
    """Run a setting parser, tagging any ConfigError with the config file it came from."""
    try:
        return parse(value)
    except ConfigError as exc:
        raise ConfigError(exc.message, origin) from None


def read_source(path: Path) -> str:
    """Read a source file (or stdin) without translating line endings."""
    if path == STDIN:
        return sys.stdin.read()
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def format_file(options: CliOptions, path: Path) -> tuple[str, str]:
    """Read and format one input, returning (original, formatted) text."""
    from afrafmt.debug import dump_tokens
    from afrafmt.formatter import format_region, format_source
    from afrafmt.lexer import tokenize

    source = read_source(path)
    dialect = options.dialect or dialect_for_path(path)

    if options.debug:
        title = f"{path} ({dialect.name})"
        dump_tokens(tokenize(source, dialect), title=title, file=sys.stderr)

    if options.region is not None:
        offset, length = options.region
        replacement = format_region(
            source, offset, length, dialect, options.indent, options.newline
        )
        formatted = source[:offset] + replacement + source[offset + length :]
    else:
        formatted = format_source(source, dialect, options.indent, options.newline)
    return source, formatted


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    status = 0
    for path in options.input_files:
        try:
            source, formatted = format_file(options, path)
        except OSError as exc:
            print(f"error: cannot read {path}: {exc.strerror or exc}", file=sys.stderr)
            status = 1
            continue
        except RegionError as exc:
            print(str(exc), file=sys.stderr)
            return 2

        if options.check:
            if formatted != source:
                print(f"would reformat {path}", file=sys.stderr)
                status = 1
        elif options.in_place:
            if formatted != source:
                write_text(path, formatted)
                print(f"reformatted {path}", file=sys.stderr)
        elif options.output_file:
            write_text(options.output_file, formatted)
        else:
            sys.stdout.write(formatted)

    return status
