"""Creation of new jamovi modules and analyses from templates."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Tuple

from .errors import AlreadyExists, DirectoryNotEmpty, InvalidName, MissingParent, NotAModule
from .logging import get_logger
from .templating import PLACEHOLDERS, load_template, render

_NAME_PATTERN = re.compile(r"[a-zA-Z][a-zA-Z0-9]+")

SOURCE_DIR = "R"
MANIFEST_DIR = "jamovi"

logger = get_logger("scaffold")


def is_valid_name(name: str) -> bool:
    """Names start with a letter and hold at least two letters or digits."""
    return _NAME_PATTERN.fullmatch(name) is not None


def normalise_path(path: Path | str) -> Path:
    return Path(path).expanduser().resolve()


def create_module(
    path: Path | str = ".",
    *,
    include_gitignore: bool = True,
    templates_dir: Optional[Path] = None,
) -> Path:
    """Lay out an empty module at ``path``; the module is named after its directory.

    Every check runs before anything is written. Returns the normalised
    module path.
    """
    module_path = normalise_path(path)
    name = module_path.name

    if not is_valid_name(name):
        raise InvalidName(
            "Module names must be at least two characters long and consist only of letters and numbers"
        )

    parent = module_path.parent
    if not parent.exists():
        raise MissingParent(f"Parent directory '{parent}' does not exist")

    if module_path.exists():
        if not module_path.is_dir():
            raise DirectoryNotEmpty(f"'{module_path}' already exists and is not a directory")
        if any(module_path.iterdir()):
            raise DirectoryNotEmpty("Directory already exists and is not empty")

    description = render(load_template("DESCRIPTION", templates_dir), {"NAME": name})
    namespace = render(load_template("NAMESPACE", templates_dir), {})
    gitignore = load_template("gitignore", templates_dir) if include_gitignore else None

    module_path.mkdir(exist_ok=True)
    (module_path / SOURCE_DIR).mkdir()
    (module_path / MANIFEST_DIR).mkdir()

    (module_path / "DESCRIPTION").write_text(description, encoding="utf-8")
    (module_path / "NAMESPACE").write_text(namespace, encoding="utf-8")
    if gitignore is not None:
        (module_path / ".gitignore").write_text(gitignore, encoding="utf-8")

    logger.info("Created module '%s' at %s", name, module_path)
    return module_path


def add_analysis(
    name: str,
    *,
    title: Optional[str] = None,
    path: Path | str = ".",
    templates_dir: Optional[Path] = None,
) -> Tuple[Path, Path]:
    """Write the options and results definitions for a new analysis.

    The options file doubles as the existence marker: if it is already
    there nothing is written. The check and the writes are not atomic, so a
    concurrent writer can still slip in between them.
    """
    if title is None:
        title = name
    if not isinstance(name, str):
        raise TypeError("name must be a string")
    if not isinstance(title, str):
        raise TypeError("title must be a string")
    if not is_valid_name(name):
        raise InvalidName(
            "Analysis names must be at least two characters long and consist only of letters and numbers"
        )

    if not (Path(path).expanduser() / "DESCRIPTION").exists():
        raise NotAModule(
            "path does not contain a DESCRIPTION file, does not appear to be a package or module"
        )

    module_path = normalise_path(path)
    values = dict(zip(PLACEHOLDERS, (name, title, module_path.name)))

    options = render(load_template("a.yaml", templates_dir), values)
    results = render(load_template("r.yaml", templates_dir), values)

    manifest_dir = module_path / MANIFEST_DIR
    options_path = manifest_dir / f"{name.lower()}.a.yaml"
    results_path = manifest_dir / f"{name.lower()}.r.yaml"

    if options_path.exists():
        raise AlreadyExists(f"analysis '{name}' already exists")

    manifest_dir.mkdir(exist_ok=True)
    options_path.write_text(options, encoding="utf-8")
    results_path.write_text(results, encoding="utf-8")

    logger.info("Added analysis '%s' to module '%s'", name, module_path.name)
    return options_path, results_path


__all__ = ["MANIFEST_DIR", "SOURCE_DIR", "add_analysis", "create_module", "is_valid_name"]
