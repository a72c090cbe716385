"""Locating the Odin installation root on disk."""

from __future__ import annotations

import os
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from .config import OdinDocConfig, RootConfig
from .logging import get_logger

LOGGER = get_logger("roots")

CORE_DIR = "core"
COMPILER_BINARY = "odin"

_LINUX_CANDIDATES = (
    "/usr/lib/odin",
    "/usr/local/lib/odin",
    "/usr/share/odin",
    "/usr/local/share/odin",
    "/opt/odin",
    "~/odin",
    "~/.odin",
    "~/.local/share/odin",
)

_DARWIN_CANDIDATES = (
    "/opt/homebrew/opt/odin/libexec",
    "/usr/local/opt/odin/libexec",
    "/opt/odin",
    "~/odin",
    "~/.odin",
)

_WINDOWS_CANDIDATES = (
    "C:\\odin",
    "C:\\Program Files\\odin",
    "~\\odin",
)


@dataclass(frozen=True)
class RootCandidate:
    """A directory probed while searching for the installation root."""

    path: Path
    origin: str

    @property
    def has_core(self) -> bool:
        return (self.path / CORE_DIR).is_dir()


def platform_candidates(platform: str | None = None) -> List[Path]:
    """Return the fixed candidate directories for a platform."""
    platform = platform or sys.platform
    if platform.startswith("win"):
        raw = _WINDOWS_CANDIDATES
    elif platform == "darwin":
        raw = _DARWIN_CANDIDATES
    else:
        raw = _LINUX_CANDIDATES
    return [Path(item).expanduser() for item in raw]


def binary_candidates() -> List[Path]:
    """Directories inferred from the compiler binary found on PATH."""
    found = shutil.which(COMPILER_BINARY)
    if not found:
        return []
    binary = Path(found)
    candidates = [binary.parent]
    try:
        resolved = binary.resolve()
    except OSError:
        resolved = binary
    if resolved.parent != binary.parent:
        candidates.append(resolved.parent)
    prefix = resolved.parent.parent
    candidates.extend([prefix / "share" / "odin", prefix / "lib" / "odin", prefix])
    return candidates


def candidate_roots(config: OdinDocConfig | None = None) -> List[RootCandidate]:
    """Return every directory probed for the installation root, in search order."""
    library = config.library if config is not None else RootConfig()
    candidates: List[RootCandidate] = []

    env_value = os.environ.get(library.env_var)
    if env_value:
        candidates.append(RootCandidate(Path(env_value).expanduser(), f"${library.env_var}"))
    if library.path is not None:
        candidates.append(RootCandidate(library.path, "config"))
    for path in library.search_paths:
        candidates.append(RootCandidate(path, "config"))
    for path in platform_candidates():
        candidates.append(RootCandidate(path, "platform"))
    for path in binary_candidates():
        candidates.append(RootCandidate(path, "PATH"))

    seen: set[Path] = set()
    ordered: List[RootCandidate] = []
    for candidate in candidates:
        if candidate.path in seen:
            continue
        seen.add(candidate.path)
        ordered.append(candidate)
    return ordered


def resolve_library_root(config: OdinDocConfig | None = None) -> Tuple[str, bool]:
    """Return ``(path, found)`` for the first candidate holding a core directory."""
    for candidate in candidate_roots(config):
        if candidate.has_core:
            LOGGER.debug("Using library root %s (%s)", candidate.path, candidate.origin)
            return str(candidate.path), True
        LOGGER.debug("No %s directory under %s", CORE_DIR, candidate.path)
    return "", False


def root_env_var(config: Optional[OdinDocConfig] = None) -> str:
    return config.library.env_var if config is not None else RootConfig().env_var


__all__ = [
    "RootCandidate",
    "candidate_roots",
    "platform_candidates",
    "resolve_library_root",
    "root_env_var",
]
