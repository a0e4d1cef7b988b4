"""Selector synthesis — element → identifying key.

Order: ``#id`` → unique ``.a.b.c`` from the first three classes → ancestor
path of ``tag.firstClass:nth-of-type(k)`` segments, anchored at the nearest
ancestor with an id. The key indexes telemetry; it is not guaranteed to
survive structural changes between recording and replay.
"""

from __future__ import annotations

from motionsight.trigger.element import Element, iter_subtree, root_of

_MAX_CLASSES = 3


def synthesize_key(element: Element) -> str:
    if element.id:
        return f"#{element.id}"

    classes = [c for c in element.classes if c][:_MAX_CLASSES]
    if classes and _count_matching(root_of(element), classes) == 1:
        return "." + ".".join(classes)

    return _ancestor_path(element)


def _count_matching(root: Element, classes: list[str]) -> int:
    wanted = set(classes)
    return sum(1 for node in iter_subtree(root) if wanted.issubset(node.classes))


def _ancestor_path(element: Element) -> str:
    path: list[str] = []
    current: Element | None = element

    while current is not None and current.tag != "body":
        if current.id:
            path.insert(0, f"#{current.id}")
            break

        segment = current.tag
        first_class = next((c for c in current.classes if c), "")
        if first_class:
            segment += f".{first_class}"

        parent = current.parent
        if parent is not None:
            same_tag = [c for c in parent.children if c.tag == current.tag]
            if len(same_tag) > 1:
                index = next((i for i, c in enumerate(same_tag) if c is current), None)
                if index is not None:
                    segment += f":nth-of-type({index + 1})"

        path.insert(0, segment)
        current = parent

    return " > ".join(path) or element.tag
