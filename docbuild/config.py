"""Configuration loading for docbuild (.docbuild.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

import yaml

from .utils import normalise_identifier

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from enum import Enum

    from .models import Entity

CONFIG_FILENAME = ".docbuild.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class DocBuildConfig:
    """Read-only settings for one documentation run."""

    root: Path
    locale: Optional[str] = None
    enabled_kinds: List[str] = field(default_factory=list)
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    documented_packages: List[str] = field(default_factory=list)
    writer_options: Dict[str, Any] = field(default_factory=dict)
    strict_writers: bool = False
    layout_file: Optional[Path] = None
    layout: Dict[str, Any] = field(default_factory=dict)
    max_workers: int = 1
    verbose: bool = False
    log_file: Optional[Path] = None

    def is_kind_enabled(self, kind: Union[str, "Enum"]) -> bool:
        """Return True when output for the page kind is enabled (all kinds by default).

        Only page kinds are gated. Sections nested in an enabled page are always built.
        """
        if not self.enabled_kinds:
            return True
        return normalise_identifier(kind) in {normalise_identifier(name) for name in self.enabled_kinds}

    def is_included(self, entity: "Entity") -> bool:
        """Apply include/exclude glob filters to an entity's qualified name."""
        name = entity.qualified_name
        if self.include and not any(fnmatchcase(name, pattern) for pattern in self.include):
            return False
        return not any(fnmatchcase(name, pattern) for pattern in self.exclude)

    def is_package_documented(self, package: Optional[str]) -> bool:
        return package is not None and package in self.documented_packages


def load_config(config_path: Path) -> DocBuildConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocBuildConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_data = _as_dict(data.get("output"))
    filter_data = _as_dict(data.get("filters"))

    layout_file: Optional[Path] = None
    layout_inline: Dict[str, Any] = {}
    layout_value = data.get("layout")
    if isinstance(layout_value, str):
        layout_file = root / layout_value
    elif isinstance(layout_value, dict):
        layout_inline = layout_value
    elif layout_value is not None:
        raise ConfigError("layout must be a file path or a mapping of page kinds to steps")

    logging_data = _as_dict(data.get("logging"))
    log_file_value = _as_str(logging_data.get("file"))

    max_workers = _as_int(data.get("workers"))
    if max_workers is not None and max_workers < 1:
        raise ConfigError("workers must be a positive integer")

    return DocBuildConfig(
        root=root,
        locale=_as_str(data.get("locale")),
        enabled_kinds=[normalise_identifier(kind) for kind in _as_str_list(output_data.get("enabled"))],
        include=_as_str_list(filter_data.get("include")),
        exclude=_as_str_list(filter_data.get("exclude")),
        documented_packages=_as_str_list(data.get("packages")),
        writer_options=_as_dict(output_data.get("options")),
        strict_writers=_as_bool(output_data.get("strict_writers")) or False,
        layout_file=layout_file,
        layout=layout_inline,
        max_workers=max_workers or 1,
        verbose=_as_bool(logging_data.get("verbose")) or False,
        log_file=root / log_file_value if log_file_value else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "DocBuildConfig", "load_config"]
