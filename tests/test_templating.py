"""Tests for template loading and rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from jmvtools.errors import TemplateError
from jmvtools.templating import TEMPLATES_DIR, load_template, render


def test_render_replaces_every_placeholder() -> None:
    template = "name: $NAME\ntitle: $TITLE\nmenu: $MODULE_NAME\nagain: $NAME\n"
    rendered = render(
        template,
        {"NAME": "linreg", "TITLE": "Linear Regression", "MODULE_NAME": "MyMod"},
    )
    assert rendered == (
        "name: linreg\ntitle: Linear Regression\nmenu: MyMod\nagain: linreg\n"
    )


def test_render_does_not_confuse_overlapping_tokens() -> None:
    rendered = render("$MODULE_NAME/$NAME", {"NAME": "a", "MODULE_NAME": "b"})
    assert rendered == "b/a"


def test_render_does_not_rescan_substituted_values() -> None:
    rendered = render("$NAME $TITLE", {"NAME": "$TITLE", "TITLE": "t"})
    assert rendered == "$TITLE t"


def test_render_leaves_other_content_untouched() -> None:
    template = "price: $5\n  keep   spacing\t\n$lower stays\r\n"
    assert render(template, {}) == template


def test_render_rejects_unsubstituted_placeholder() -> None:
    with pytest.raises(TemplateError) as excinfo:
        render("$NAME and $TITLE", {"NAME": "x"})
    assert "$TITLE" in str(excinfo.value)


def test_bundled_templates_are_available() -> None:
    for name in ("DESCRIPTION", "NAMESPACE", "gitignore", "a.yaml", "r.yaml"):
        assert (TEMPLATES_DIR / name).is_file()
    assert "$NAME" in load_template("DESCRIPTION")


def test_load_template_from_custom_directory(tmp_path: Path) -> None:
    (tmp_path / "DESCRIPTION").write_text("Package: $NAME\n", encoding="utf-8")
    assert load_template("DESCRIPTION", tmp_path) == "Package: $NAME\n"
    with pytest.raises(TemplateError):
        load_template("missing", tmp_path)


def test_render_keeps_text_running_on_from_placeholder() -> None:
    assert render("$NAME_suffix $TITLEcase", {"NAME": "ttest", "TITLE": "T"}) == "ttest_suffix Tcase"


def test_render_ignores_unknown_upper_case_tokens() -> None:
    assert render("cost: $USD and $NAME", {"NAME": "x"}) == "cost: $USD and x"
