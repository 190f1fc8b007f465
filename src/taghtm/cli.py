"""Command-line interface for taghtm."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from taghtm.errors import BindError, MarkupError, TemplateError


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    values: dict[str, Any]
    strict: bool
    doctype: bool
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="taghtm",
        description="Render ${name} markup templates to HTML",
    )
    p.add_argument("input", help="Input template file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-v",
        "--value",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Set a placeholder value (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover taghtm.toml)",
    )
    p.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Reject malformed markup instead of building a partial tree",
    )
    p.add_argument(
        "--doctype",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Prefix the output with <!DOCTYPE html>",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and re-render")
    p.add_argument("--debug", action="store_true", help="Dump the node tree to stderr")
    return p


def parse_value_arg(s: str) -> tuple[str, str]:
    """Parse a NAME=VALUE string into (name, value)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"invalid value format (expected NAME=VALUE): {s}")
    name, _, value = s.partition("=")
    return name, value


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "taghtm.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    # Placeholder values: config < CLI
    values: dict[str, Any] = {}
    cfg_values = config.get("values")
    if isinstance(cfg_values, dict):
        for k, v in cfg_values.items():
            values[str(k)] = v
    for raw in args.value:
        name, value = parse_value_arg(raw)
        values[name] = value

    # Switches: config < CLI
    strict = False
    doctype = False
    cfg_options = config.get("options")
    if isinstance(cfg_options, dict):
        if isinstance(cfg_options.get("strict"), bool):
            strict = cfg_options["strict"]
        if isinstance(cfg_options.get("doctype"), bool):
            doctype = cfg_options["doctype"]
    if args.strict is not None:
        strict = args.strict
    if args.doctype is not None:
        doctype = args.doctype

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        values=values,
        strict=strict,
        doctype=doctype,
        watch=args.watch,
        debug=args.debug,
    )


def compile_file(options: CliOptions) -> str:
    """Read, split, bind, parse, and render a template file to HTML."""
    from taghtm.debug import dump_tree
    from taghtm.parser import parse
    from taghtm.render import render
    from taghtm.source import split_source

    source = options.input_file.read_text(encoding="utf-8")
    template = split_source(source)
    values = template.bind(options.values)

    try:
        tree = parse(template.strings, values, strict=options.strict)
    except MarkupError as exc:
        raise TemplateError(exc.message, template.position(exc.cursor), source) from exc

    if options.debug:
        dump_tree(tree, file=sys.stderr)

    return render(tree, doctype=options.doctype)


def _report(exc: TemplateError | BindError, options: CliOptions) -> None:
    print(exc.format(str(options.input_file)), file=sys.stderr)


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, re-render on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    html = compile_file(options)
                    if options.output_file:
                        options.output_file.write_text(html, encoding="utf-8")
                    else:
                        sys.stdout.write(html)
                        sys.stdout.flush()
                    print(f"Rendered {options.input_file}", file=sys.stderr)
                except (TemplateError, BindError) as exc:
                    _report(exc, options)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        html = compile_file(options)
    except TemplateError as exc:
        _report(exc, options)
        return 1
    except BindError as exc:
        _report(exc, options)
        return 2

    if options.output_file:
        options.output_file.write_text(html, encoding="utf-8")
    else:
        sys.stdout.write(html)

    return 0
