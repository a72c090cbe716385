"""Source file discovery for package references."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .config import DEFAULT_EXTENSIONS, OdinDocConfig
from .logging import get_logger
from .roots import resolve_library_root

LOGGER = get_logger("discovery")

COLLECTIONS = ("core", "base", "vendor", "shared")


@dataclass(frozen=True)
class PackageRef:
    """A parsed package reference: a directory or a ``collection:name`` pair."""

    raw: str
    collection: Optional[str] = None
    name: str = ""

    @property
    def is_collection(self) -> bool:
        return self.collection is not None

    @property
    def display_name(self) -> str:
        """Short package name used in report headers and messages."""
        if self.is_collection:
            return self.name.rstrip("/").split("/")[-1] or self.raw
        return Path(self.raw).resolve().name or self.raw


def parse_package_ref(raw: str) -> PackageRef:
    """Recognise ``core:fmt``-style references; anything else is a path."""
    prefix, sep, rest = raw.partition(":")
    if sep and prefix in COLLECTIONS and rest:
        return PackageRef(raw=raw, collection=prefix, name=rest.strip("/"))
    return PackageRef(raw=raw)


def _iter_source_files(directory: Path, extensions: Sequence[str]) -> List[Path]:
    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        LOGGER.debug("Skipping unreadable directory %s: %s", directory, exc)
        return []

    files: List[Path] = []
    for entry in entries:
        if entry.suffix.lower() not in extensions:
            continue
        if not entry.is_file():
            continue
        if not os.access(entry, os.R_OK):
            LOGGER.debug("Skipping unreadable file %s", entry)
            continue
        files.append(entry)
    return files


def list_source_files(
    ref: str,
    library_root: Optional[str] = None,
    config: Optional[OdinDocConfig] = None,
) -> Tuple[List[str], bool]:
    """Return ``(paths, root_resolved)`` for a directory or collection reference.

    Directories are listed without recursion. Collection references are
    resolved against ``library_root`` when given, otherwise the root is
    looked up; an unresolvable root yields ``([], False)``.
    """
    extensions = tuple(config.extensions) if config is not None else DEFAULT_EXTENSIONS
    package = parse_package_ref(ref)

    if package.is_collection:
        if library_root is None:
            library_root, found = resolve_library_root(config)
            if not found:
                return [], False
        directory = Path(library_root) / package.collection / package.name  # type: ignore[operator]
    else:
        directory = Path(ref).expanduser()

    if not directory.is_dir():
        LOGGER.debug("Package directory %s does not exist", directory)
        return [], True

    paths = [str(path) for path in _iter_source_files(directory, extensions)]
    LOGGER.debug("Found %d source files in %s", len(paths), directory)
    return paths, True


__all__ = ["COLLECTIONS", "PackageRef", "list_source_files", "parse_package_ref"]
