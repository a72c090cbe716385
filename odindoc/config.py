"""Configuration loading for odindoc (.odindoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".odindoc.yml"
DEFAULT_ROOT_ENV = "ODIN_ROOT"
DEFAULT_EXTENSIONS = (".odin",)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class RootConfig:
    """Installation root hints from .odindoc.yml."""

    env_var: str = DEFAULT_ROOT_ENV
    path: Optional[Path] = None
    search_paths: List[Path] = field(default_factory=list)


@dataclass
class OdinDocConfig:
    """Represents the settings defined in .odindoc.yml."""

    root: Path
    library: RootConfig = field(default_factory=RootConfig)
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))


def load_config(config_path: Path) -> OdinDocConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return OdinDocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    library = RootConfig()
    library_data = _as_dict(data.get("library"))
    if library_data:
        library.env_var = _as_str(library_data.get("env_var")) or DEFAULT_ROOT_ENV
        root_str = _as_str(library_data.get("root"))
        library.path = _as_path(root, root_str) if root_str else None
        library.search_paths = [
            _as_path(root, item) for item in _as_str_list(library_data.get("search_paths"))
        ]

    extensions = [_normalise_extension(ext) for ext in _as_str_list(data.get("extensions"))]

    return OdinDocConfig(
        root=root,
        library=library,
        extensions=extensions or list(DEFAULT_EXTENSIONS),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _normalise_extension(value: str) -> str:
    value = value.strip().lower()
    return value if value.startswith(".") else f".{value}"


def _as_path(base: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else base / path


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["ConfigError", "OdinDocConfig", "RootConfig", "load_config"]
