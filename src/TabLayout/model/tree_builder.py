"""
Turns declarative templates into a realized layout tree.

Construction is the only place new structure is made from scratch: the initial
tree, and the single-tab layouts a drop creates when it splits a panel.
"""
from __future__ import annotations
import logging
from typing import Mapping, Optional, Union

from ..core.errors import ArityError, DuplicateIdError, ShapeError
from .layout_model import (AnyTemplate, Direction, Layout, LayoutTemplate, NodeKind, Tab, TabTemplate,
                           as_template, new_id)
from .tree_navigator import iter_layouts, iter_tabs

logger = logging.getLogger(__name__)


def transform_tab(template: TabTemplate, parent: Layout) -> Tab:
    """Builds a Tab from its template, assigning an id and the parent link."""
    node = Tab(id=template.id or new_id(), title=template.title, data=template.data)
    node.parent = parent
    return node


def transform_layout(template: Union[LayoutTemplate, Mapping], parent: Optional[Layout] = None) -> Layout:
    """
    Recursively builds a Layout from a template.

    Raises:
        ShapeError: no children, or a mix of tab and layout templates.
        ArityError: a layout of layouts with fewer than 2 children.
        DuplicateIdError: two sibling tabs share an id.
    """
    template = as_template(template)
    if template.kind is not NodeKind.LAYOUT:
        raise ShapeError("A tree must be built from a layout template")

    node = Layout(id=template.id or new_id(), direction=Direction(template.direction or Direction.ROW))
    node.parent = parent

    children = [as_template(child) for child in template.children]
    if not children:
        raise ShapeError("Layout children should have at least 1 tab, or 2 layouts")

    if all(child.kind is NodeKind.TAB for child in children):
        tabs = [transform_tab(child, node) for child in children]
        seen = set()
        for child in tabs:
            if child.id in seen:
                raise DuplicateIdError(child.id)
            seen.add(child.id)
        node.children = tabs
        node.active = tabs[0].id
    elif all(child.kind is NodeKind.LAYOUT for child in children):
        if len(children) < 2:
            raise ArityError("Layout children should be 2 or more layouts")
        node.children = [transform_layout(child, node) for child in children]
    else:
        raise ShapeError("Layout children cannot be a mix of Tabs and Layouts")

    return node


def build_tree(template: Union[LayoutTemplate, Mapping]) -> Layout:
    """
    Builds a complete tree from a root template.

    On top of what transform_layout checks, every id in the resulting tree
    (tabs and layouts alike) must be unique.
    """
    root = transform_layout(template)
    seen = set()
    for node in (*iter_layouts(root), *iter_tabs(root)):
        if node.id in seen:
            raise DuplicateIdError(node.id)
        seen.add(node.id)
    logger.debug("Built layout tree %s with %d ids", root.id, len(seen))
    return root


def single_tab_layout(template: AnyTemplate, parent: Layout) -> Layout:
    """Wraps one tab template into a brand-new layout under ``parent``."""
    return transform_layout(LayoutTemplate(children=[template]), parent)
