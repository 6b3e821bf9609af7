from __future__ import annotations

import pytest

from notevim.config import MODE_STYLES, EditorConfig, style_for


def test_defaults() -> None:
    config = EditorConfig()

    assert config.tab_width == 4
    assert config.indent == "    "
    assert config.list_continuation is True


def test_from_env_reads_prefixed_variables() -> None:
    config = EditorConfig.from_env(
        {
            "NOTEVIM_TAB_WIDTH": "2",
            "NOTEVIM_EXPAND_TABS": "no",
            "NOTEVIM_LIST_CONTINUATION": "off",
        }
    )

    assert config.tab_width == 2
    assert config.indent == "\t"
    assert config.list_continuation is False


def test_from_env_ignores_missing_values() -> None:
    assert EditorConfig.from_env({}) == EditorConfig()


def test_invalid_tab_width_rejected() -> None:
    with pytest.raises(ValueError):
        EditorConfig(tab_width=0)


def test_mode_styles_cover_every_mode() -> None:
    assert set(MODE_STYLES) == {
        "normal",
        "insert",
        "visual",
        "operator_pending",
        "delete_confirm",
    }
    assert style_for("operator_pending").label == "NORMAL d-"
    assert style_for("delete_confirm").label == "NORMAL [DEL]"
    assert style_for("unknown") is MODE_STYLES["normal"]
