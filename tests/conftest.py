from __future__ import annotations

from pathlib import Path

import pytest

from odindoc import roots
from tests._fixtures.package_builder import PackageBuilder


@pytest.fixture
def package_builder(tmp_path: Path) -> PackageBuilder:
    """Provide a reusable package builder rooted at the pytest tmp_path."""
    return PackageBuilder(tmp_path)


@pytest.fixture
def isolated_roots(monkeypatch: pytest.MonkeyPatch) -> None:
    """Hide any real installation from root resolution."""
    monkeypatch.delenv("ODIN_ROOT", raising=False)
    monkeypatch.setattr(roots, "platform_candidates", lambda platform=None: [])
    monkeypatch.setattr(roots, "binary_candidates", lambda: [])
