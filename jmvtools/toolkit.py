"""Command facade binding configuration, argument building and the compiler."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import List, Optional

from .args import compiler_args, home_args, resolve_runtime_bin, runtime_home_args
from .config import ToolsConfig, load_config
from .invoker import CompilerInvoker
from .logging import get_logger
from .platform import OSFamily, detect_os
from .scaffold import add_analysis as scaffold_analysis
from .scaffold import create_module, normalise_path
from .versions import check_min_version, parse_compiler_output

DISTRIBUTION_NAME = "jmvtools"


def version() -> str:
    """Return the installed version of jmvtools."""
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        from . import __version__

        return __version__


class ModuleTools:
    """Runs jamovi compiler commands for modules on disk.

    Every method re-resolves its arguments from the configuration it was
    built with and spawns a fresh compiler process, blocking until it exits.
    Methods that run the compiler interactively return its exit status.
    """

    def __init__(
        self,
        config: ToolsConfig | None = None,
        *,
        invoker: CompilerInvoker | None = None,
        os_family: OSFamily | None = None,
    ) -> None:
        self.config = config or load_config()
        self.os_family = os_family or detect_os()
        self.invoker = invoker or CompilerInvoker(
            self.config.node_executable,
            os_family=self.os_family,
            timeout=self.config.timeout,
        )
        self.logger = get_logger("toolkit")

    def check(self, home: Optional[str] = None) -> int:
        """Check that the jamovi compiler can find a jamovi installation."""
        args = compiler_args(self.config.compiler_path, "check", extra=self._home(home))
        return self.invoker.passthrough(args)

    def jmc_version(self, home: Optional[str] = None) -> str:
        """Return the jamovi version the compiler reports.

        Falls back to the version of jmvtools when the compiler or jamovi
        cannot be found.
        """
        args = compiler_args(self.config.compiler_path, "check", extra=self._home(home))
        found = parse_compiler_output(self.invoker.capture(args))
        if found is None:
            fallback = version()
            self.logger.debug("jamovi version not reported; using %s", fallback)
            return fallback
        return str(found)

    def install(
        self, path: Path | str = ".", home: Optional[str] = None, debug: bool = False
    ) -> int:
        """Build the module at ``path`` and install it into jamovi."""
        check_min_version(path, lambda: self.jmc_version(home))
        self.logger.info("Installing module at %s", path)
        args = compiler_args(
            self.config.compiler_path,
            "install",
            path,
            extra=self._home(home) + self._runtime(),
            debug=debug,
        )
        return self.invoker.passthrough(args)

    def prepare(self, path: Path | str = ".", home: Optional[str] = None) -> int:
        """Regenerate the derived sources of the module at ``path``."""
        args = compiler_args(
            self.config.compiler_path,
            "prepare",
            path,
            extra=self._home(home) + self._runtime(),
        )
        return self.invoker.passthrough(args)

    def create(
        self,
        path: Path | str = ".",
        home: Optional[str] = None,
        gitignore: Optional[bool] = None,
    ) -> int:
        """Create an empty module at ``path`` and prepare it."""
        include_gitignore = self.config.gitignore if gitignore is None else gitignore
        module_path = create_module(path, include_gitignore=include_gitignore)
        return self.prepare(module_path.as_posix(), home)

    def add_analysis(
        self,
        name: str,
        title: Optional[str] = None,
        path: Path | str = ".",
        home: Optional[str] = None,
    ) -> int:
        """Add analysis ``name`` to the module at ``path`` and prepare it."""
        scaffold_analysis(name, title=title, path=path)
        return self.prepare(normalise_path(path).as_posix(), home)

    def _home(self, home: Optional[str]) -> List[str]:
        return home_args(home, config_home=self.config.home, os_family=self.os_family)

    def _runtime(self) -> List[str]:
        runtime_bin = resolve_runtime_bin(self.config.runtime_bin)
        return runtime_home_args(runtime_bin, os_family=self.os_family)


__all__ = ["ModuleTools", "version"]
