"""Text report rendering for package listings and symbol lookups."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from .aggregator import LookupStatus, PackageDocs, PackageListing, SymbolLookup

DOC_INDENT = "    "

NO_DECLARATIONS = "No declarations found in package '{package}'"
SYMBOL_NOT_FOUND = "Symbol '{symbol}' not found in package '{package}'"
SYMBOL_PRIVATE = "Symbol '{symbol}' in package '{package}' is private"
ROOT_NOT_FOUND = "Could not resolve '{ref}': Odin installation root not found."


def indent_doc(line: str) -> str:
    """Indent one doc comment line; blank lines stay blank."""
    return f"{DOC_INDENT}{line}" if line else ""


class ReportRenderer:
    """Renders aggregator output through the bundled Jinja2 templates."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters["indent_doc"] = indent_doc

    def render_package(self, docs: PackageDocs, listing: PackageListing) -> str:
        if not docs.root_resolved:
            return ROOT_NOT_FOUND.format(ref=docs.ref)
        if listing.is_empty:
            return NO_DECLARATIONS.format(package=docs.name)
        groups = [(title.upper(), entries) for title, entries in listing.groups() if entries]
        template = self._env.get_template("package.j2")
        return template.render(package_name=docs.name, ref=docs.ref, groups=groups).rstrip()

    def render_symbol(self, docs: PackageDocs, lookup: SymbolLookup) -> str:
        if not docs.root_resolved:
            return ROOT_NOT_FOUND.format(ref=docs.ref)
        if lookup.status is LookupStatus.PRIVATE:
            return SYMBOL_PRIVATE.format(symbol=lookup.name, package=docs.name)
        if lookup.status is LookupStatus.NOT_FOUND or lookup.entry is None:
            return SYMBOL_NOT_FOUND.format(symbol=lookup.name, package=docs.name)
        template = self._env.get_template("symbol.j2")
        return template.render(entry=lookup.entry).rstrip()


__all__ = ["ReportRenderer", "indent_doc"]
