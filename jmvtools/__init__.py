"""Tools for creating, preparing and installing jamovi modules."""

__version__ = "2.5.0"

from .toolkit import ModuleTools, version  # noqa: E402

__all__ = ["ModuleTools", "__version__", "version"]
