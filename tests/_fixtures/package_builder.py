"""Helper utilities for writing throwaway Odin packages in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import List, Mapping

from odindoc.discovery import list_source_files


class PackageBuilder:
    """Utility for writing source files into a temporary package directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "mypkg"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the package."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def files(self) -> List[str]:
        """Return the source files discovery reports for the package."""
        paths, _ = list_source_files(str(self.root))
        return paths

    def path(self) -> Path:
        """Return the package directory."""
        return self.root


def make_library_root(base: Path, packages: Mapping[str, Mapping[str, str]]) -> Path:
    """Create a fake installation root with `core/<package>/<file>` sources."""
    root = base / "odin"
    (root / "core").mkdir(parents=True)
    for package, files in packages.items():
        package_dir = root / "core" / package
        package_dir.mkdir(parents=True, exist_ok=True)
        for name, content in files.items():
            normalised = textwrap.dedent(content).lstrip("\n")
            (package_dir / name).write_text(normalised, encoding="utf-8")
    return root


__all__ = ["PackageBuilder", "make_library_root"]
