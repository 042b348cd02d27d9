"""TOML config loading for sheeppig.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "sheeppig.toml"
SOURCE_SUFFIX = ".sp"


@dataclass
class PackageConfig:
    name: str = "untitled"
    version: str = "0.0.0"


@dataclass
class SourceConfig:
    dir: str = "src"


@dataclass
class DiagnosticsConfig:
    color: bool = True


@dataclass
class SheepPigConfig:
    package: PackageConfig = field(default_factory=PackageConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)

    def source_files(self, root: Path) -> list[Path]:
        """All .sp files under the source dir, or under *root* if that dir is missing."""
        src_dir = root / self.source.dir
        if not src_dir.is_dir():
            src_dir = root
        return sorted(src_dir.rglob(f"*{SOURCE_SUFFIX}"))


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find sheeppig.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    for directory in (path, *path.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    raise FileNotFoundError(f"No {CONFIG_FILENAME} found in any parent directory")


def _section(data: dict[str, Any], name: str, cls: type) -> Any:
    """Build the dataclass for table *name*; unknown keys are ignored.

    Raises ValueError when a key holds a value of the wrong TOML type.
    """
    table = data.get(name, {})
    if not isinstance(table, dict):
        raise ValueError(f"[{name}] must be a table")
    defaults = cls()
    values = {}
    for f in fields(cls):
        if f.name not in table:
            continue
        value = table[f.name]
        expected = type(getattr(defaults, f.name))
        if type(value) is not expected:
            raise ValueError(
                f"{name}.{f.name} must be a {expected.__name__}, got {type(value).__name__}"
            )
        values[f.name] = value
    return cls(**values)


def load_config(path: Path) -> SheepPigConfig:
    """Parse a sheeppig.toml file into a SheepPigConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    return SheepPigConfig(
        package=_section(data, "package", PackageConfig),
        source=_section(data, "source", SourceConfig),
        diagnostics=_section(data, "diagnostics", DiagnosticsConfig),
    )
