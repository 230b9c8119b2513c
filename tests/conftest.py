from __future__ import annotations

from pathlib import Path

import pytest

from jmvtools.config import ToolsConfig
from jmvtools.invoker import CompilerInvoker
from jmvtools.platform import OSFamily
from jmvtools.toolkit import ModuleTools
from tests._fixtures.fake_compiler import FakeCompiler


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    """Provide a runner that records compiler invocations."""
    return FakeCompiler()


@pytest.fixture
def tools_config(tmp_path: Path) -> ToolsConfig:
    return ToolsConfig(
        root=tmp_path,
        node="node",
        compiler=Path("/opt/jmvtools/index.js"),
        runtime_bin="/usr/lib/R/bin",
    )


@pytest.fixture
def linux_tools(tools_config: ToolsConfig, fake_compiler: FakeCompiler) -> ModuleTools:
    """ModuleTools wired for Linux with the fake compiler."""
    invoker = CompilerInvoker("node", os_family=OSFamily.LINUX, runner=fake_compiler)
    return ModuleTools(tools_config, invoker=invoker, os_family=OSFamily.LINUX)
