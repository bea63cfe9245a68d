"""UI string table lookups."""

import pytest

from celestialsphere.i18n import t
from celestialsphere.modes import MODES


@pytest.mark.parametrize("mode", MODES)
def test_every_mode_has_a_label(mode):
    assert t(f"mode_{mode}", "en") != f"mode_{mode}"
    assert t(f"mode_{mode}", "ko") != f"mode_{mode}"


def test_unknown_language_falls_back_to_english():
    assert t("label_mode", "fr") == t("label_mode", "en")


def test_unknown_key_returns_key():
    assert t("no_such_key", "en") == "no_such_key"


def test_vertex_count_placeholder():
    assert "2" in t("result_add_more", "en").format(count=2)
