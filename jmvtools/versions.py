"""Version parsing and the module ``minApp`` compatibility gate."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

import yaml

from .errors import IncompatibleToolchainVersion, ManifestError
from .logging import get_logger

MANIFEST_RELATIVE_PATH = Path("jamovi") / "0000.yaml"

_FOUND_PATTERN = re.compile(r"jamovi (\d+\.\d+\.\d+) found")
_SEPARATORS = re.compile(r"[.-]")

logger = get_logger("versions")


@dataclass(frozen=True, order=True)
class ParsedVersion:
    """A ``major.minor.patch`` version compared component by component."""

    major: int
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(text: str) -> ParsedVersion:
    """Parse ``text`` such as ``2.3.1``; missing components count as zero."""
    parts = _SEPARATORS.split(str(text).strip())
    if not parts or len(parts) > 3 or not all(part.isdigit() for part in parts):
        raise ValueError(f"'{text}' is not a valid version")
    numbers = [int(part) for part in parts] + [0] * (3 - len(parts))
    return ParsedVersion(*numbers)


def parse_compiler_output(lines: Iterable[str]) -> Optional[ParsedVersion]:
    """Extract the jamovi version reported by ``--check``, if any line has one."""
    for line in lines:
        match = _FOUND_PATTERN.search(line)
        if match:
            return parse_version(match.group(1))
    return None


def read_min_app(module_path: Path | str) -> Optional[str]:
    """Return the ``minApp`` declared in the module manifest, if present."""
    manifest = Path(module_path).expanduser() / MANIFEST_RELATIVE_PATH
    if not manifest.exists():
        logger.debug("No manifest at %s; skipping minApp check", manifest)
        return None
    try:
        # BaseLoader keeps scalars as text so "2.30" is not read as the float 2.3
        data = yaml.load(manifest.read_text(encoding="utf-8"), Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        raise ManifestError(f"Failed to parse {manifest}: {exc}") from exc
    if not isinstance(data, dict):
        return None
    value = data.get("minApp")
    if value is None:
        return None
    return str(value).strip() or None


def check_min_version(
    module_path: Path | str,
    installed: Union[str, Callable[[], str]],
) -> None:
    """Raise if the module needs a newer jamovi compiler than ``installed``.

    ``installed`` may be a callable, in which case it is only evaluated when
    the manifest actually declares a ``minApp``.
    """
    required = read_min_app(module_path)
    if required is None:
        return
    try:
        required_version = parse_version(required)
    except ValueError as exc:
        raise ManifestError(f"minApp '{required}' is not a valid version") from exc

    installed_str = installed() if callable(installed) else installed
    installed_version = parse_version(installed_str)
    logger.debug("Module requires jamovi %s, compiler reports %s", required, installed_str)
    if required_version > installed_version:
        raise IncompatibleToolchainVersion(required, installed_str)


__all__ = [
    "MANIFEST_RELATIVE_PATH",
    "ParsedVersion",
    "check_min_version",
    "parse_compiler_output",
    "parse_version",
    "read_min_app",
]
