"""Tests for element key synthesis."""

from motionsight.trigger.element import ElementNode
from motionsight.trigger.selector import synthesize_key


def test_id_wins_over_classes():
    assert synthesize_key(ElementNode(id="hero", classes=["a", "b"])) == "#hero"


def test_unique_class_selector_uses_first_three(page):
    hero = page.children[0].children[0]
    assert synthesize_key(hero) == ".hero.fade-in-on-scroll"

    many = ElementNode(classes=["one", "two", "three", "four"])
    page.append(many)
    assert synthesize_key(many) == ".one.two.three"


def test_unique_class_nested(page):
    button = page.children[0].children[1].children[0]
    assert synthesize_key(button) == ".cta"


def test_shared_classes_fall_back_to_path_anchored_at_id(page):
    main = page.children[0]
    first_card, second_card = main.children[1], main.children[2]
    assert synthesize_key(first_card) == "#content > section.card:nth-of-type(2)"
    assert synthesize_key(second_card) == "#content > section.card:nth-of-type(3)"


def test_path_stops_at_body():
    span = ElementNode(tag="span")
    body = ElementNode(tag="body", children=[ElementNode(tag="div", children=[span])])
    assert body.children[0].children[0] is span
    assert synthesize_key(span) == "div > span"


def test_lone_element_without_hints():
    assert synthesize_key(ElementNode(tag="P")) == "p"


def test_node_missing_from_parent_children_skips_nth_of_type():
    parent = ElementNode(tag="ul", children=[ElementNode(tag="li"), ElementNode(tag="li")])
    stray = ElementNode(tag="li", parent=parent)
    assert synthesize_key(stray) == "ul > li"
