"""Error types raised by jmvtools."""

from __future__ import annotations


class JmvToolsError(RuntimeError):
    """Base class for every error raised by jmvtools."""


class ConfigError(JmvToolsError):
    """Raised when the configuration file cannot be parsed."""


class InvalidName(JmvToolsError):
    """Raised when a module or analysis name is not a valid identifier."""


class MissingParent(JmvToolsError):
    """Raised when the parent directory of a new module does not exist."""


class DirectoryNotEmpty(JmvToolsError):
    """Raised when the target module directory already has content."""


class NotAModule(JmvToolsError):
    """Raised when a path does not contain a module DESCRIPTION file."""


class AlreadyExists(JmvToolsError):
    """Raised when an analysis with the same name is already defined."""


class TemplateError(JmvToolsError):
    """Raised when a template references a placeholder without a value."""


class ManifestError(JmvToolsError):
    """Raised when the module manifest cannot be read."""


class IncompatibleToolchainVersion(JmvToolsError):
    """Raised when a module requires a newer jamovi compiler than is installed."""

    def __init__(self, required: str, installed: str) -> None:
        self.required = required
        self.installed = installed
        super().__init__(
            f"The module requires jamovi {required} (minApp in jamovi/0000.yaml), "
            f"but the jamovi compiler found is version {installed}."
        )


class SubprocessFailure(JmvToolsError):
    """Raised when the jamovi compiler could not be run to completion."""

    def __init__(self, returncode: int, message: str) -> None:
        self.returncode = returncode
        super().__init__(message)


__all__ = [
    "AlreadyExists",
    "ConfigError",
    "DirectoryNotEmpty",
    "IncompatibleToolchainVersion",
    "InvalidName",
    "JmvToolsError",
    "ManifestError",
    "MissingParent",
    "NotAModule",
    "SubprocessFailure",
    "TemplateError",
]
