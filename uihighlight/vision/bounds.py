"""Leaf-element bounds extraction from ``uiautomator`` layout dumps.

A layout dump is an XML tree of ``node`` elements, each optionally carrying a
``bounds`` attribute of the form ``[left,top][right,bottom]``.  Only leaves
(nodes without element children) are highlighted.
"""

from __future__ import annotations

import re
from typing import Optional, Union

from lxml import etree

from ..core.config import config
from ..core.exceptions import LayoutDumpError
from ..core.logger import log
from .models import BoundingBox

BOUNDS_PATTERN = re.compile(r"\[(\d+),(\d+)\]\[(\d+),(\d+)\]")

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)


def parse_layout_dump(data: Union[bytes, str]) -> etree._Element:
    """Parse raw layout dump text into an element tree.

    Raises:
        LayoutDumpError: If the text is not well-formed XML.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        root = etree.fromstring(data, parser=_PARSER)
    except etree.XMLSyntaxError as e:
        raise LayoutDumpError(f"Layout dump is not well-formed XML: {e}") from e
    if root is None:
        raise LayoutDumpError("Layout dump is empty")
    return root


def is_leaf(node: etree._Element) -> bool:
    """A node is a leaf when it has no element children."""
    return next(node.iterchildren(tag=etree.Element), None) is None


def parse_bounds(raw: str) -> Optional[BoundingBox]:
    """Parse a ``[l,t][r,b]`` string, returning ``None`` if it does not match."""
    match = BOUNDS_PATTERN.search(raw)
    if match is None:
        return None
    left, top, right, bottom = (int(group, 10) for group in match.groups())
    return BoundingBox(left, top, right, bottom)


def extract_leaf_bounds(
    document: etree._Element,
    diagnostics: Optional[list[str]] = None,
) -> list[BoundingBox]:
    """Collect the bounding box of every leaf node, in document order.

    Nodes without a bounds attribute are skipped silently.  Malformed or
    inverted bounds are skipped with a warning, and the raw string is appended
    to ``diagnostics`` when a list is supplied.
    """
    boxes: list[BoundingBox] = []

    for node in document.iter(config.layout_node_tag):
        if not is_leaf(node):
            continue

        raw = node.get(config.bounds_attribute)
        if not raw:
            continue

        box = parse_bounds(raw)
        if box is None or box.is_inverted():
            log.warning(f"Malformed bounds data: {raw}")
            if diagnostics is not None:
                diagnostics.append(raw)
            continue

        boxes.append(box)

    return boxes
