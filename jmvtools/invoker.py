"""Synchronous execution of the jamovi compiler through node."""

from __future__ import annotations

import subprocess
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .errors import SubprocessFailure
from .logging import get_logger
from .platform import OSFamily

Command = Union[str, List[str]]
Runner = Callable[..., Tuple[int, str]]

# Exit status shells report when a command cannot be found.
_NOT_FOUND_STATUS = 127


class CompilerInvoker:
    """Runs ``node`` with a compiler argument vector and waits for it to exit.

    Arguments arrive shell-style, with paths wrapped in double quotes. On
    Windows they are joined into a single command line, which
    ``CreateProcess`` splits itself; elsewhere each argument is passed as
    its own list entry with the surrounding quotes removed.
    """

    def __init__(
        self,
        node: str,
        *,
        os_family: OSFamily,
        timeout: Optional[float] = None,
        runner: Runner | None = None,
    ) -> None:
        self.node = node
        self.os_family = os_family
        self.timeout = timeout
        self._runner = runner or self._default_runner
        self.logger = get_logger("invoker")

    def capture(self, args: Sequence[str]) -> List[str]:
        """Run the compiler and return its standard output as lines.

        Failures are not errors here: a missing executable, a timeout or a
        non-zero exit just yield whatever output was produced.
        """
        command = self.build_command(args)
        self.logger.debug("Capturing output of %s", command)
        try:
            returncode, stdout = self._runner(
                command, capture_output=True, timeout=self.timeout
            )
        except FileNotFoundError:
            self.logger.debug("Executable '%s' not found", self.node)
            return []
        except subprocess.TimeoutExpired as exc:
            self.logger.debug("Compiler timed out after %s seconds", exc.timeout)
            return _decode(exc.output).splitlines()
        if returncode != 0:
            self.logger.debug("Compiler exited with status %d", returncode)
        return stdout.splitlines()

    def passthrough(self, args: Sequence[str]) -> int:
        """Run the compiler attached to this process' streams; return its exit status."""
        command = self.build_command(args)
        self.logger.debug("Running %s", command)
        try:
            returncode, _ = self._runner(
                command, capture_output=False, timeout=self.timeout
            )
        except FileNotFoundError as exc:
            raise SubprocessFailure(
                _NOT_FOUND_STATUS,
                f"Unable to locate '{self.node}'. Install node or set JMVTOOLS_NODE.",
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise SubprocessFailure(
                -1, f"jamovi compiler did not finish within {exc.timeout} seconds"
            ) from exc
        if returncode != 0:
            self.logger.debug("Compiler exited with status %d", returncode)
        return returncode

    def build_command(self, args: Sequence[str]) -> Command:
        if self.os_family is OSFamily.WINDOWS:
            return " ".join([_quote_if_spaced(self.node), *args])
        return [self.node, *(_unquote(arg) for arg in args)]

    @staticmethod
    def _default_runner(
        command: Command,
        *,
        capture_output: bool = False,
        timeout: Optional[float] = None,
    ) -> Tuple[int, str]:
        completed = subprocess.run(
            command,
            check=False,
            text=True,
            capture_output=capture_output,
            timeout=timeout,
        )
        return completed.returncode, completed.stdout or ""


def _quote_if_spaced(value: str) -> str:
    if " " in value and not value.startswith('"'):
        return f'"{value}"'
    return value


def _unquote(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def _decode(output: bytes | str | None) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


__all__ = ["CompilerInvoker"]
