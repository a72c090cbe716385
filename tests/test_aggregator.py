"""Tests for odindoc.aggregator."""

from __future__ import annotations

from pathlib import Path

from odindoc.aggregator import (
    Aggregator,
    LookupStatus,
    dedupe,
    group_public,
    lookup_symbol,
    read_entries,
)
from odindoc.scanner import scan_source
from tests._fixtures.package_builder import PackageBuilder, make_library_root


def test_duplicate_names_keep_first_file(package_builder: PackageBuilder) -> None:
    package_builder.write(
        {
            "a.odin": 'Version :: "1.0"\n',
            "b.odin": 'Version :: "2.0"\n',
        }
    )

    docs = Aggregator().collect(str(package_builder.path()))

    versions = [entry for entry in docs.entries if entry.name == "Version"]
    assert len(versions) == 1
    assert versions[0].signature == '"1.0"'
    assert versions[0].source_file.endswith("a.odin")


def test_dedupe_preserves_encounter_order() -> None:
    entries = scan_source("B :: 1\nA :: 2\nB :: 3\n", "x.odin")
    assert [(entry.name, entry.source_line) for entry in dedupe(entries)] == [("B", 1), ("A", 2)]


def test_group_public_orders_buckets_and_names() -> None:
    entries = scan_source(
        "\n".join(
            [
                "Zeta :: proc() {}",
                "alpha :: proc() {}",
                "Max :: 10",
                "Point :: struct {",
                "Color :: enum {",
                "Alpha :: proc() {}",
                "Flags :: bit_set[Color]",
                "_Hidden :: 3",
                "Any :: union {",
            ]
        ),
        "x.odin",
    )

    listing = group_public(entries)

    assert [entry.name for entry in listing.constants] == ["Max"]
    assert [entry.name for entry in listing.types] == ["Any", "Color", "Flags", "Point"]
    assert [entry.name for entry in listing.procedures] == ["Alpha", "Zeta"]
    assert [name for name, _ in listing.groups()] == ["constants", "types", "procedures"]


def test_group_public_uses_ordinal_comparison() -> None:
    entries = scan_source("Beta :: 1\nALPHA :: 2\nAlpha :: 3\n", "x.odin")
    assert [entry.name for entry in group_public(entries).constants] == ["ALPHA", "Alpha", "Beta"]


def test_lookup_outcomes() -> None:
    entries = scan_source("@(private)\nHelper :: proc() {}\nAdd :: proc() {}\n", "x.odin")

    found = lookup_symbol(entries, "Add")
    private = lookup_symbol(entries, "Helper")
    missing = lookup_symbol(entries, "Nope")

    assert found.status is LookupStatus.FOUND
    assert found.entry is not None and found.entry.name == "Add"
    assert private.status is LookupStatus.PRIVATE
    assert missing.status is LookupStatus.NOT_FOUND
    assert missing.entry is None


def test_private_entries_are_hidden_from_listing_but_found_by_lookup(
    package_builder: PackageBuilder,
) -> None:
    package_builder.write(
        {
            "main.odin": """
                @(private)
                Helper :: proc() {}
                helper2 :: proc() {}
                Public :: proc() {}
            """
        }
    )

    aggregator = Aggregator()
    _, listing = aggregator.listing(str(package_builder.path()))
    _, lookup = aggregator.lookup(str(package_builder.path()), "helper2")

    assert [entry.name for entry in listing.procedures] == ["Public"]
    assert lookup.status is LookupStatus.PRIVATE


def test_read_entries_skips_unreadable_files(tmp_path: Path) -> None:
    good = tmp_path / "good.odin"
    good.write_text("Good :: 1\n", encoding="utf-8")
    binary = tmp_path / "binary.odin"
    binary.write_bytes(b"\xff\xfe\x00Bad :: 1\n")

    entries = read_entries([str(tmp_path / "missing.odin"), str(binary), str(good)])

    assert [entry.name for entry in entries] == ["Good"]


def test_collection_reference_resolves_against_passed_root(tmp_path: Path) -> None:
    root = make_library_root(tmp_path, {"strings": {"builder.odin": "Builder :: struct {\n"}})

    docs = Aggregator(library_root=str(root)).collect("core:strings")

    assert docs.root_resolved is True
    assert docs.name == "strings"
    assert [entry.name for entry in docs.entries] == ["Builder"]


def test_collection_reference_without_root(isolated_roots: None) -> None:
    docs, listing = Aggregator().listing("core:strings")

    assert docs.root_resolved is False
    assert listing.is_empty
