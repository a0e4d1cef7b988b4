"""Element abstraction — what trigger classification reads from the page.

The live DOM is an external collaborator; anything exposing this protocol
works (a headless-browser adapter, a parsed snapshot). ``ElementNode`` is the
in-memory implementation used for offline snapshots and tests.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

# Resolved-style values an element reports when nothing is declared.
STYLE_DEFAULTS: dict[str, str] = {
    "cursor": "auto",
    "transition": "all 0s ease 0s",
    "transform": "none",
    "animation-name": "none",
    "will-change": "auto",
}


@runtime_checkable
class Element(Protocol):
    @property
    def id(self) -> str: ...

    @property
    def tag(self) -> str: ...

    @property
    def classes(self) -> Sequence[str]: ...

    @property
    def parent(self) -> Optional[Element]: ...

    @property
    def children(self) -> Sequence[Element]: ...

    def get_attribute(self, name: str) -> str | None: ...

    def style(self, name: str) -> str:
        """Resolved style value (``getComputedStyle`` equivalent)."""
        ...


@dataclass(eq=False)
class ElementNode:
    tag: str = "div"
    id: str = ""
    classes: list[str] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)
    styles: dict[str, str] = field(default_factory=dict)
    parent: ElementNode | None = field(default=None, repr=False)
    children: list[ElementNode] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.tag = self.tag.lower()
        for child in self.children:
            child.parent = self

    def append(self, *children: ElementNode) -> ElementNode:
        for child in children:
            child.parent = self
            self.children.append(child)
        return self

    def get_attribute(self, name: str) -> str | None:
        if name == "id":
            return self.id or None
        if name == "class":
            return " ".join(self.classes) or None
        return self.attributes.get(name)

    def style(self, name: str) -> str:
        return self.styles.get(name, STYLE_DEFAULTS.get(name, ""))


def has_attribute(element: Element, name: str) -> bool:
    return element.get_attribute(name) is not None


def root_of(element: Element) -> Element:
    current = element
    while current.parent is not None:
        current = current.parent
    return current


def iter_subtree(root: Element) -> Iterator[Element]:
    """Pre-order traversal, root included (TreeWalker order)."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(node.children)))


def class_string(element: Element) -> str:
    return " ".join(element.classes).lower()
