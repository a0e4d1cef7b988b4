"""Cursor detection — custom cursor URLs, hotspots, hover changes."""

from __future__ import annotations

import re

from motionsight.models.trigger import CursorInfo
from motionsight.trigger.element import Element, iter_subtree
from motionsight.trigger.selector import synthesize_key

_URL_RE = re.compile(r"""url\(\s*['"]?([^'")]+)['"]?\s*\)""")
_HOTSPOT_RE = re.compile(r"""url\([^)]+\)\s+(\d+)\s+(\d+)""")


def detect_cursor(element: Element) -> CursorInfo:
    """Read the resolved cursor.

    ``changes_on_hover`` compares against the parent's cursor; it is an
    approximation, not a probe of the element's hover state.
    """
    value = element.style("cursor").strip()
    style = value or "auto"
    url = None
    hotspot = None

    m = _URL_RE.search(value)
    if m:
        url = m.group(1)
        style = "custom"
        hm = _HOTSPOT_RE.search(value)
        if hm:
            hotspot = (int(hm.group(1)), int(hm.group(2)))

    changes_on_hover = False
    if element.parent is not None:
        changes_on_hover = value != element.parent.style("cursor").strip()

    return CursorInfo(style=style, url=url, hotspot=hotspot, changes_on_hover=changes_on_hover)


def collect_cursors(root: Element) -> dict[str, CursorInfo]:
    """Key → cursor for every element with a custom, pointer or changed cursor."""
    cursors: dict[str, CursorInfo] = {}
    for node in iter_subtree(root):
        info = detect_cursor(node)
        if info.url or info.style == "pointer" or info.changes_on_hover:
            cursors[synthesize_key(node)] = info
    return cursors
