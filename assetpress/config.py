"""Configuration loading for assetpress (.assetpress.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

CONFIG_FILENAME = ".assetpress.yml"

DEFAULT_OUTPUT = "public/build/assets"
DEFAULT_MANIFEST_PATH = "public/build/manifest.json"
DEFAULT_BUILD_ROOT = "public/build"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class InputConfig:
    """One source directory (or file) to minify into an output directory."""

    src: str
    output: str = DEFAULT_OUTPUT
    keep_structure: bool = True
    merge_result: Union[bool, str] = False

    @property
    def merge(self) -> bool:
        return self.merge_result is not False

    @property
    def merge_name(self) -> Optional[str]:
        return self.merge_result if isinstance(self.merge_result, str) else None


@dataclass
class AssetPressConfig:
    """Represents the settings defined in .assetpress.yml."""

    root: Path
    inputs: List[InputConfig] = field(default_factory=list)
    manifest_path: str = DEFAULT_MANIFEST_PATH
    build_root: str = DEFAULT_BUILD_ROOT
    keep_bang_comments: bool = False


def load_config(config_path: Path, *, root: Path | None = None) -> AssetPressConfig:
    """Load configuration from disk.

    Paths in the file are relative to ``root`` when given, otherwise to the
    directory holding the configuration file.
    """
    config_file = _resolve_config_path(config_path)
    root = root.expanduser().resolve() if root is not None else config_file.parent.resolve()

    if not config_file.exists():
        return AssetPressConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    raw_inputs = data.get("input", [])
    if raw_inputs is None:
        raw_inputs = []
    if isinstance(raw_inputs, dict):
        raw_inputs = [raw_inputs]
    if not isinstance(raw_inputs, list):
        raise ConfigError("`input` must be a list of source entries")

    inputs = [_parse_input(item, index) for index, item in enumerate(raw_inputs)]

    return AssetPressConfig(
        root=root,
        inputs=inputs,
        manifest_path=_as_str(data.get("manifest_path")) or DEFAULT_MANIFEST_PATH,
        build_root=_as_str(data.get("build_root")) or DEFAULT_BUILD_ROOT,
        keep_bang_comments=_as_bool(data.get("keep_bang_comments")) or False,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_input(item: Any, index: int) -> InputConfig:
    if isinstance(item, str):
        item = {"src": item}
    if not isinstance(item, dict):
        raise ConfigError(f"input[{index}] must be a mapping or a path string")

    src = _as_str(item.get("src"))
    if not src:
        raise ConfigError(f"input[{index}] is missing `src`")

    keep_structure = _as_bool(item.get("keep_structure"))
    return InputConfig(
        src=src,
        output=_as_str(item.get("output")) or DEFAULT_OUTPUT,
        keep_structure=True if keep_structure is None else keep_structure,
        merge_result=_as_merge_result(item.get("merge_result"), index),
    )


def _as_merge_result(value: Any, index: int) -> Union[bool, str]:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        value = str(value)
    if isinstance(value, str):
        flag = _as_bool(value)
        if flag is not None:
            return flag
        name = value.strip()
        if not name:
            raise ConfigError(f"input[{index}].merge_result must not be empty")
        return name
    raise ConfigError(f"input[{index}].merge_result must be a boolean or a name")


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


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
