"""Tests for colour normalisation."""

import pytest

from motionsight.utils.colors import NormalizedColor, canonical_color, is_transparent, normalize_color, to_css


@pytest.mark.parametrize(
    "value, expected",
    [
        ("#FFF", "#ffffff"),
        ("#1a2b3c", "#1a2b3c"),
        ("rgb(26, 43, 60)", "#1a2b3c"),
        ("rgb(26 43 60)", "#1a2b3c"),
        ("hsl(0, 100%, 50%)", "#ff0000"),
        ("Blue", "#0000ff"),
    ],
)
def test_opaque_colours_normalise_to_hex(value, expected):
    normalized = normalize_color(value)
    assert normalized.hex == expected
    assert normalized.alpha is None


def test_alpha_channels():
    assert normalize_color("rgba(255, 0, 0, 0.5)") == NormalizedColor("#ff0000", 0.5)
    assert normalize_color("rgb(255 0 0 / 25%)") == NormalizedColor("#ff0000", 0.25)
    assert normalize_color("#ff000080").alpha == pytest.approx(0.5, abs=0.01)
    assert normalize_color("rgba(255, 0, 0, 1)").alpha is None


def test_keywords_and_unknowns_pass_through():
    assert normalize_color("currentColor").hex == "currentcolor"
    assert normalize_color("var(--brand)").hex == "var(--brand)"
    assert normalize_color("") is None
    assert normalize_color(None) is None


def test_is_transparent():
    assert is_transparent("transparent")
    assert is_transparent("rgba(0, 0, 0, 0)")
    assert is_transparent(None)
    assert not is_transparent("#000")


def test_to_css():
    assert to_css(NormalizedColor("#ff0000")) == "#ff0000"
    assert to_css(NormalizedColor("#ff0000", 0.5)) == "rgba(255, 0, 0, 0.5)"
    assert to_css(NormalizedColor("inherit")) == "inherit"


def test_canonical_color():
    assert canonical_color("rgba(0, 0, 0, 0)") is None
    assert canonical_color("rgba(16, 32, 48, 0.4)") == "rgba(16, 32, 48, 0.4)"
    assert canonical_color("white") == "#ffffff"
