"""Combines per-file declarations into package listings and symbol lookups."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .config import OdinDocConfig
from .discovery import list_source_files, parse_package_ref
from .logging import get_logger
from .models import DocEntry
from .scanner import DeclarationScanner

LOGGER = get_logger("aggregator")

GROUP_ORDER = ("constants", "types", "procedures")


class LookupStatus(Enum):
    FOUND = "found"
    PRIVATE = "private"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class SymbolLookup:
    """Outcome of looking up one name in a package."""

    status: LookupStatus
    name: str
    entry: Optional[DocEntry] = None


@dataclass
class PackageListing:
    """Public declarations of a package, bucketed for display."""

    constants: List[DocEntry] = field(default_factory=list)
    types: List[DocEntry] = field(default_factory=list)
    procedures: List[DocEntry] = field(default_factory=list)

    def groups(self) -> List[tuple[str, List[DocEntry]]]:
        return [(name, getattr(self, name)) for name in GROUP_ORDER]

    @property
    def is_empty(self) -> bool:
        return not (self.constants or self.types or self.procedures)


@dataclass
class PackageDocs:
    """Everything gathered for one package reference."""

    ref: str
    name: str
    files: List[str]
    entries: List[DocEntry]
    root_resolved: bool = True


def read_entries(
    paths: Iterable[str], scanner: DeclarationScanner | None = None
) -> List[DocEntry]:
    """Scan every readable file in order and concatenate the results."""
    scanner = scanner or DeclarationScanner()
    entries: List[DocEntry] = []
    for path in paths:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.debug("Skipping %s: %s", path, exc)
            continue
        entries.extend(scanner.scan(text, path))
    return entries


def dedupe(entries: Iterable[DocEntry]) -> List[DocEntry]:
    """Keep the first entry seen for each name."""
    seen: set[str] = set()
    unique: List[DocEntry] = []
    for entry in entries:
        if entry.name in seen:
            continue
        seen.add(entry.name)
        unique.append(entry)
    return unique


def lookup_symbol(entries: Sequence[DocEntry], name: str) -> SymbolLookup:
    for entry in dedupe(entries):
        if entry.name != name:
            continue
        if entry.is_private:
            return SymbolLookup(LookupStatus.PRIVATE, name, entry)
        return SymbolLookup(LookupStatus.FOUND, name, entry)
    return SymbolLookup(LookupStatus.NOT_FOUND, name)


def group_public(entries: Sequence[DocEntry]) -> PackageListing:
    """Drop private entries and bucket the rest by kind, sorted by name."""
    buckets: Dict[str, List[DocEntry]] = {name: [] for name in GROUP_ORDER}
    for entry in dedupe(entries):
        if entry.is_private:
            continue
        buckets[entry.kind.group].append(entry)
    for bucket in buckets.values():
        bucket.sort(key=lambda entry: entry.name)
    return PackageListing(**buckets)


class Aggregator:
    """Collects declarations for a package reference."""

    def __init__(
        self,
        config: OdinDocConfig | None = None,
        *,
        library_root: str | None = None,
        scanner: DeclarationScanner | None = None,
    ) -> None:
        self._config = config
        self._library_root = library_root
        self._scanner = scanner or DeclarationScanner()

    def collect(self, ref: str) -> PackageDocs:
        paths, root_resolved = list_source_files(ref, self._library_root, self._config)
        name = parse_package_ref(ref).display_name
        if not root_resolved:
            return PackageDocs(ref=ref, name=name, files=[], entries=[], root_resolved=False)
        entries = dedupe(read_entries(paths, self._scanner))
        LOGGER.debug("Collected %d declarations from %d files for %s", len(entries), len(paths), ref)
        return PackageDocs(ref=ref, name=name, files=paths, entries=entries)

    def listing(self, ref: str) -> tuple[PackageDocs, PackageListing]:
        docs = self.collect(ref)
        return docs, group_public(docs.entries)

    def lookup(self, ref: str, symbol: str) -> tuple[PackageDocs, SymbolLookup]:
        docs = self.collect(ref)
        return docs, lookup_symbol(docs.entries, symbol)


__all__ = [
    "Aggregator",
    "LookupStatus",
    "PackageDocs",
    "PackageListing",
    "SymbolLookup",
    "dedupe",
    "group_public",
    "lookup_symbol",
    "read_entries",
]
