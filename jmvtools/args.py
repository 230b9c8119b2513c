"""Argument construction for jamovi compiler invocations."""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from .platform import OSFamily

# Linux builds of jamovi are distributed through flatpak; the compiler
# understands this sentinel in place of an installation directory.
LINUX_DEFAULT_HOME = "flatpak"


def quote(value: str) -> str:
    return f'"{value}"'


def home_args(
    home: Optional[str] = None,
    *,
    config_home: Optional[str] = None,
    os_family: OSFamily,
) -> List[str]:
    """Return the ``--home`` pair for the compiler, or nothing if unresolved."""
    if home is None:
        home = config_home
    if home is None and os_family is OSFamily.LINUX:
        home = LINUX_DEFAULT_HOME
    if home is None:
        return []
    if os_family is OSFamily.WINDOWS:
        home = quote(home)
    return ["--home", home]


def runtime_home_args(runtime_bin: str, *, os_family: OSFamily) -> List[str]:
    """Return the ``--rpath`` pair; the compiler locates R itself on Windows."""
    if os_family is OSFamily.WINDOWS:
        return []
    return ["--rpath", quote(runtime_bin)]


def resolve_runtime_bin(
    configured: Optional[str] = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Locate the directory holding the R binaries modules are built against."""
    if configured:
        return configured
    env = os.environ if environ is None else environ
    r_home = env.get("R_HOME")
    if r_home:
        return str(Path(r_home) / "bin")
    r_executable = shutil.which("R")
    if r_executable:
        return str(Path(r_executable).parent)
    return str(Path(sys.executable).parent)


def compiler_args(
    compiler: Path | str,
    command: str,
    module_path: Path | str | None = None,
    *,
    extra: Sequence[str] = (),
    debug: bool = False,
) -> List[str]:
    """Assemble the full argument vector passed to the node executable."""
    args = [quote(str(compiler)), f"--{command}"]
    if module_path is not None:
        args.append(quote(str(module_path)))
    args.extend(extra)
    if debug:
        args.append("--debug")
    return args


__all__ = [
    "LINUX_DEFAULT_HOME",
    "compiler_args",
    "home_args",
    "quote",
    "resolve_runtime_bin",
    "runtime_home_args",
]
