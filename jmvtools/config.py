"""Configuration loading for jmvtools (.jmvtools.yml)."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".jmvtools.yml"

ENV_HOME = "JAMOVI_HOME"
ENV_NODE = "JMVTOOLS_NODE"
ENV_COMPILER = "JAMOVI_COMPILER"
ENV_TIMEOUT = "JMVTOOLS_TIMEOUT"


def default_compiler_path() -> Path:
    """Location of the jamovi compiler bundled alongside the package."""
    return Path(__file__).with_name("node_modules") / "jamovi-compiler" / "index.js"


def default_node_executable() -> str:
    return shutil.which("node") or "node"


@dataclass
class ToolsConfig:
    """Settings shared by every call into the jamovi compiler.

    ``home`` points at a local jamovi installation; it is used whenever a
    command is not given one explicitly. ``timeout`` bounds how long a
    compiler run may take in seconds; ``None`` waits until it exits.
    """

    root: Path
    home: Optional[str] = None
    node: Optional[str] = None
    compiler: Optional[Path] = None
    runtime_bin: Optional[str] = None
    timeout: Optional[float] = None
    gitignore: bool = True

    @property
    def node_executable(self) -> str:
        return self.node or default_node_executable()

    @property
    def compiler_path(self) -> Path:
        return self.compiler or default_compiler_path()


def load_config(
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ToolsConfig:
    """Load configuration from disk, then apply environment overrides."""
    env = os.environ if environ is None else environ
    config_file = _resolve_config_path(config_path or Path.cwd())
    root = config_file.parent.resolve()

    data: Dict[str, Any] = {}
    if config_file.exists():
        data = _read_config(config_file)

    compiler_str = _as_str(data.get("compiler"))
    config = ToolsConfig(
        root=root,
        home=_as_str(data.get("home")),
        node=_as_str(data.get("node")),
        compiler=_as_path(root, compiler_str),
        runtime_bin=_as_str(data.get("runtime_bin")),
        timeout=_as_float(data.get("timeout")),
        gitignore=_as_bool(data.get("gitignore"), default=True),
    )

    if env.get(ENV_HOME):
        config.home = env[ENV_HOME]
    if env.get(ENV_NODE):
        config.node = env[ENV_NODE]
    if env.get(ENV_COMPILER):
        config.compiler = Path(env[ENV_COMPILER]).expanduser()
    if env.get(ENV_TIMEOUT):
        timeout = _as_float(env[ENV_TIMEOUT])
        if timeout is None:
            raise ConfigError(f"{ENV_TIMEOUT} must be a number of seconds")
        config.timeout = timeout

    if config.timeout is not None and config.timeout <= 0:
        raise ConfigError("timeout must be a positive number of seconds")
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_path(root: Path, value: Optional[str]) -> Optional[Path]:
    if not value:
        return None
    path = Path(value).expanduser()
    return path if path.is_absolute() else root / path


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any, *, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return default


__all__ = ["CONFIG_FILENAME", "ToolsConfig", "load_config"]
