"""Tests for jmvtools.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from jmvtools.config import ToolsConfig, default_compiler_path, load_config
from jmvtools.errors import ConfigError


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={})

    assert isinstance(config, ToolsConfig)
    assert config.root == tmp_path.resolve()
    assert config.home is None
    assert config.node is None
    assert config.compiler is None
    assert config.runtime_bin is None
    assert config.timeout is None
    assert config.gitignore is True
    assert config.compiler_path == default_compiler_path()
    assert config.compiler_path.name == "index.js"


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".jmvtools.yml").write_text(
        """
home: "/opt/jamovi"
node: "/usr/local/bin/node"
compiler: "vendor/jamovi-compiler/index.js"
runtime_bin: "/usr/lib/R/bin"
timeout: 300
gitignore: false
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path, environ={})

    assert config.home == "/opt/jamovi"
    assert config.node == "/usr/local/bin/node"
    assert config.node_executable == "/usr/local/bin/node"
    assert config.compiler == tmp_path.resolve() / "vendor" / "jamovi-compiler" / "index.js"
    assert config.runtime_bin == "/usr/lib/R/bin"
    assert config.timeout == 300.0
    assert config.gitignore is False


def test_load_config_accepts_explicit_file(tmp_path: Path) -> None:
    config_file = tmp_path / "custom.yml"
    config_file.write_text("home: flatpak\n", encoding="utf-8")

    config = load_config(config_file, environ={})

    assert config.home == "flatpak"


def test_environment_overrides_file(tmp_path: Path) -> None:
    (tmp_path / ".jmvtools.yml").write_text("home: /from/file\ntimeout: 10\n", encoding="utf-8")

    config = load_config(
        tmp_path,
        environ={
            "JAMOVI_HOME": "/from/env",
            "JMVTOOLS_NODE": "nodejs",
            "JAMOVI_COMPILER": "/env/index.js",
            "JMVTOOLS_TIMEOUT": "30",
        },
    )

    assert config.home == "/from/env"
    assert config.node == "nodejs"
    assert config.compiler == Path("/env/index.js")
    assert config.timeout == 30.0


def test_empty_config_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / ".jmvtools.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path, environ={}).home is None


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    (tmp_path / ".jmvtools.yml").write_text("home: [broken\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path, environ={})


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    (tmp_path / ".jmvtools.yml").write_text("- home\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path, environ={})


@pytest.mark.parametrize("value", ["soon", "0", "-5"])
def test_invalid_timeout_from_environment(tmp_path: Path, value: str) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path, environ={"JMVTOOLS_TIMEOUT": value})


def test_node_executable_defaults_to_path_lookup(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr("jmvtools.config.shutil.which", lambda name: "/usr/bin/node")
    assert load_config(tmp_path, environ={}).node_executable == "/usr/bin/node"

    monkeypatch.setattr("jmvtools.config.shutil.which", lambda name: None)
    assert load_config(tmp_path, environ={}).node_executable == "node"
