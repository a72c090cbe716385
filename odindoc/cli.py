"""CLI entrypoint for odindoc."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from . import __version__
from .aggregator import Aggregator
from .config import ConfigError, OdinDocConfig, load_config
from .discovery import parse_package_ref
from .logging import close_logging, configure_logging, get_logger
from .render import ReportRenderer
from .roots import CORE_DIR, candidate_roots, resolve_library_root, root_env_var

LOGGER = get_logger("cli")

_EPILOG = """
Examples:
  odindoc ./mypkg              # Document every public declaration in a directory
  odindoc core:strings         # Document a package from the core collection
  odindoc core:strings.Builder # Document a single exported symbol
  odindoc --root               # Show which installation root is used
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="odindoc",
        description="Show signatures and doc comments for Odin packages.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_EPILOG,
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Package directory, collection reference (core:<name>) or <package>.<symbol>.",
    )
    parser.add_argument(
        "-r",
        "--root",
        action="store_true",
        help="Print the resolved Odin installation root and exit.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="store_true",
        help="Print the odindoc version and exit.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .odindoc.yml (defaults to the current directory).",
    )
    return parser


def split_target(target: str) -> Tuple[str, Optional[str]]:
    """Split ``<package>.<symbol>`` on the last dot; other forms are whole packages."""
    if Path(target).is_dir() or target.count(".") != 1:
        return target, None
    package, _, symbol = target.rpartition(".")
    if not package or not symbol.isidentifier():
        return target, None
    return package, symbol


def describe_root(config: OdinDocConfig | None = None) -> str:
    """Render the --root diagnostic."""
    root, found = resolve_library_root(config)
    if found:
        return f"Odin root: {root}\nCore library: {Path(root) / CORE_DIR} (found)"

    env_var = root_env_var(config)
    lines: List[str] = ["Odin root not found.", "", "Searched:"]
    candidates = candidate_roots(config)
    if not any(candidate.origin == f"${env_var}" for candidate in candidates):
        lines.append(f"  ${env_var} (not set)")
    for candidate in candidates:
        status = f"no {CORE_DIR}/" if candidate.path.is_dir() else "missing"
        lines.append(f"  {candidate.path} [{candidate.origin}] ({status})")
    lines.append("")
    lines.append(
        f"Set the {env_var} environment variable to the directory that contains '{CORE_DIR}/'."
    )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for odindoc."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    try:
        return _run(parser, args)
    finally:
        close_logging()


def _run(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    if args.version:
        print(f"odindoc {__version__}")
        return 0

    try:
        config = load_config(args.config or Path.cwd())
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.root:
        print(describe_root(config))
        return 0

    if not args.target:
        parser.print_help()
        return 0

    package, symbol = split_target(args.target)

    library_root: str | None = None
    if parse_package_ref(package).is_collection:
        root, found = resolve_library_root(config)
        if found:
            library_root = root

    aggregator = Aggregator(config, library_root=library_root)
    renderer = ReportRenderer()

    if symbol is None:
        docs, listing = aggregator.listing(package)
        output = renderer.render_package(docs, listing)
    else:
        docs, lookup = aggregator.lookup(package, symbol)
        LOGGER.debug("Lookup of %s in %s: %s", symbol, package, lookup.status.value)
        output = renderer.render_symbol(docs, lookup)

    if not docs.root_resolved:
        output = f"{output}\n\n{describe_root(config)}"
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
