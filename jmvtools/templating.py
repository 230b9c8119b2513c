"""Loading and rendering of the bundled module templates."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Mapping, Optional

from .errors import TemplateError

PLACEHOLDERS = ("NAME", "TITLE", "MODULE_NAME")

_TOKEN_PATTERN = re.compile(r"\$(" + "|".join(PLACEHOLDERS) + ")")

TEMPLATES_DIR = Path(__file__).with_name("templates")


def load_template(name: str, templates_dir: Optional[Path] = None) -> str:
    """Read template ``name`` from ``templates_dir`` or the bundled templates."""
    directory = templates_dir or TEMPLATES_DIR
    path = directory / name
    if not path.is_file():
        raise TemplateError(f"Template '{name}' not found in {directory}")
    return path.read_text(encoding="utf-8")


def render(template: str, values: Mapping[str, str]) -> str:
    """Substitute every ``$TOKEN`` in ``template`` in a single pass.

    Only the known placeholders are tokens, so text running on from one
    (``$NAME_suffix``) keeps its tail, and ``$NAME`` never eats into
    ``$MODULE_NAME``. Replacement text is never rescanned. A placeholder
    with no value raises :class:`TemplateError`.
    """
    missing = sorted(
        {match.group(1) for match in _TOKEN_PATTERN.finditer(template)} - set(values)
    )
    if missing:
        tokens = ", ".join(f"${token}" for token in missing)
        raise TemplateError(f"No value supplied for template placeholder(s) {tokens}")
    return _TOKEN_PATTERN.sub(lambda match: values[match.group(1)], template)


__all__ = ["PLACEHOLDERS", "TEMPLATES_DIR", "load_template", "render"]
