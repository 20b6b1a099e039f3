"""CLI entry point for tablegen.

Subcommands:
    generate   Render templates for every configured table.
    info       Show generator configuration.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


def _load_config(args: argparse.Namespace):
    """Load generator config, handling errors."""
    from tablegen.config import load_config
    from tablegen.errors import InvalidConfigError

    config_path = getattr(args, "config", None)
    try:
        return load_config(config_path, override=getattr(args, "override", False))
    except FileNotFoundError:
        path = config_path or "tablegen.toml"
        print(f"Error: config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except InvalidConfigError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)


def _write_multi_file_output(file_dict, output_dir, override: bool, args) -> int:
    """Write generated files under output_dir.

    Files that already exist are left alone unless override is set.
    Returns the number of files written.
    """
    if args.stdout:
        for rel_path, content in sorted(file_dict.items()):
            print(f"# === {rel_path} ===")
            print(content)
        return len(file_dict)

    base = Path(output_dir).resolve()
    written = 0
    skipped = 0
    total_bytes = 0
    for rel_path, content in sorted(file_dict.items()):
        file_path = (base / rel_path).resolve()
        if not file_path.is_relative_to(base):
            print(f"  skipping path traversal: {rel_path}", file=sys.stderr)
            continue
        if file_path.exists() and not override:
            print(f"  {rel_path}: exists, not overwriting", file=sys.stderr)
            skipped += 1
            continue
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        written += 1
        total_bytes += len(content)
    print(f"  wrote {written} files to {output_dir}/ ({total_bytes} bytes)")
    if skipped:
        print(f"  skipped {skipped} existing file(s); use --override to replace them")
    return written


# ---------------------------------------------------------------------------
# Subcommand: generate
# ---------------------------------------------------------------------------

def cmd_generate(args: argparse.Namespace) -> int:
    """Render templates for every configured table."""
    config = _load_config(args)

    from tablegen.generators.templates import generate_tables

    if not config.tables:
        print("Error: no tables configured.", file=sys.stderr)
        return 1

    template_names = args.templates or None
    files = generate_tables(
        config.tables,
        config.injection,
        package=config.output.package,
        template_names=template_names,
    )
    written = _write_multi_file_output(
        files, config.output.directory, config.injection.override_enabled, args
    )

    if not args.stdout:
        print(f"\nGenerated {written} file(s) for {len(config.tables)} table(s).")
    return 0


# ---------------------------------------------------------------------------
# Subcommand: info
# ---------------------------------------------------------------------------

def _hook_name(hook) -> str:
    """Display name for an output hook; callable objects fall back to repr()."""
    if hook is None:
        return "(none)"
    return getattr(hook, "__name__", None) or repr(hook)


def cmd_info(args: argparse.Namespace) -> int:
    """Show generator configuration info."""
    config = _load_config(args)
    injection = config.injection

    print(f"Output:   {config.output.directory}")
    print(f"Package:  {config.output.package or '(none)'}")
    print(f"Override: {'enabled' if injection.override_enabled else 'disabled'}")
    print(f"Hook:     {_hook_name(injection.output_hook)}")
    print()

    print("Static context:")
    for key in sorted(injection.static_context):
        print(f"  {key}")
    print()

    print("Template files:")
    for name, path in sorted(injection.template_files.items()):
        print(f"  {name}: {path}")
    print()

    print("Tables:")
    for table in config.tables:
        print(f"  {table.name} -> {table.entity_name} ({len(table.fields)} fields)")

    return 0


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="tablegen",
        description="Generate source files from table metadata.",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to tablegen.toml (default: ./tablegen.toml)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # generate
    gen_parser = subparsers.add_parser("generate", help="Generate source files")
    gen_parser.add_argument(
        "templates", nargs="*",
        help="Template names to render (default: built-in and registered templates)",
    )
    gen_parser.add_argument(
        "--stdout", action="store_true",
        help="Print output to stdout instead of writing files",
    )
    gen_parser.add_argument(
        "--override", action="store_true",
        help="Overwrite existing output files",
    )

    # info
    subparsers.add_parser("info", help="Show generator configuration")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "generate": cmd_generate,
        "info": cmd_info,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
