"""Host operating system detection."""

from __future__ import annotations

import enum
import platform as _platform


class OSFamily(enum.Enum):
    """Operating system families that change how the compiler is invoked."""

    WINDOWS = "windows"
    LINUX = "linux"
    OTHER = "other"


def detect_os(system: str | None = None) -> OSFamily:
    """Return the OS family for ``system`` (defaults to the running host)."""
    name = (system if system is not None else _platform.system()).lower()
    if name == "windows":
        return OSFamily.WINDOWS
    if name == "linux":
        return OSFamily.LINUX
    return OSFamily.OTHER


__all__ = ["OSFamily", "detect_os"]
