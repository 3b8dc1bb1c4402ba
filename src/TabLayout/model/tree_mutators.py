"""
Tab-level mutations: toggle, close, add.

Every precondition is checked before the tree is touched. After a call returns,
the tree satisfies all structural invariants again.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Mapping, Optional, Union

from ..core.errors import DuplicateIdError, ModeError, ShapeError
from .layout_model import Layout, NodeKind, Tab, TabTemplate, as_template
from .tree_builder import transform_tab
from .tree_navigator import get_root, get_tab, iter_layouts, iter_tabs, kind_of

logger = logging.getLogger(__name__)

DuplicateCheck = Callable[[Any, Any], bool]


def _require_tabs(layout: Layout, action: str):
    if kind_of(layout.children) is NodeKind.LAYOUT:
        raise ModeError(f"Cannot {action} tabs in a Layout of layouts ('{layout.id}')")


def toggle_tab(id: str, layout: Layout) -> bool:
    """
    Makes the tab ``id`` the active one of ``layout``.

    Only a direct child of ``layout`` can become active. Returns True if the
    active tab changed.
    """
    _require_tabs(layout, "toggle")
    get_tab(id, layout.children)

    if layout.active == id:
        return False
    layout.active = id
    logger.debug("Activated tab %s in %s", id, layout.id)
    return True


def close_tab(id: str, layout: Layout):
    """
    Removes the tab ``id`` from ``layout``.

    An emptied layout is removed from its parent; a parent left with a single
    layout collapses into it. An emptied root stays in place with no children.
    """
    _require_tabs(layout, "close")
    remove_tab(get_tab(id, layout.children))


def remove_tab(node: Tab):
    """Detaches ``node`` (by identity) from its parent and repairs the tree."""
    owner = node.parent
    owner.children = [child for child in owner.children if child is not node]
    node.parent = None
    logger.debug("Removed tab %s from %s", node.id, owner.id)

    if owner.children:
        if owner.active not in {child.id for child in owner.children}:
            owner.active = owner.children[0].id
        return

    owner.active = None
    parent = owner.parent
    if parent is None:
        logger.debug("Root layout %s is now empty", owner.id)
        return

    parent.children = [child for child in parent.children if child is not owner]
    owner.parent = None
    logger.debug("Removed empty layout %s from %s", owner.id, parent.id)

    if len(parent.children) == 1:
        collapse_layout(parent)


def collapse_layout(layout: Layout):
    """Splices the sole child layout of ``layout`` out, adopting its content."""
    only = layout.children[0]
    layout.direction = only.direction
    layout.active = only.active
    layout.adopt(only.children)
    only.children = []
    only.parent = None
    logger.debug("Collapsed %s into %s", only.id, layout.id)


def contains_id(id: str, root: Layout) -> bool:
    return any(node.id == id for node in (*iter_layouts(root), *iter_tabs(root)))


def insert_tab(template: TabTemplate, layout: Layout, is_duplicate: Optional[DuplicateCheck] = None,
               position: Optional[int] = None) -> Optional[Tab]:
    """add_tab without the whole-tree id check. Returns the new tab, or None if skipped."""
    _require_tabs(layout, "add")
    if template.kind is not NodeKind.TAB:
        raise ShapeError("Only tab templates can be added to a layout")

    if is_duplicate is not None and any(is_duplicate(child.data, template.data) for child in layout.children):
        logger.debug("Skipped duplicate tab '%s' in %s", template.title, layout.id)
        return None

    node = transform_tab(template, layout)
    count = len(layout.children)
    index = count if position is None else max(0, min(position, count))
    layout.children.insert(index, node)
    layout.active = node.id
    logger.debug("Added tab %s to %s at %d", node.id, layout.id, index)
    return node


def add_tab(template: Union[TabTemplate, Mapping], layout: Layout, is_duplicate: Optional[DuplicateCheck] = None,
            position: Optional[int] = None) -> bool:
    """
    Inserts a new tab into ``layout`` and makes it active.

    ``position`` is clamped into the children range; None appends. If
    ``is_duplicate(existing.data, new.data)`` holds for any child, nothing is
    added. Returns whether a tab was inserted.

    Raises:
        ModeError: ``layout`` holds layouts.
        DuplicateIdError: the template's explicit id is already used in the tree.
    """
    template = as_template(template)
    _require_tabs(layout, "add")
    if template.id and contains_id(template.id, get_root(layout)):
        raise DuplicateIdError(template.id)
    return insert_tab(template, layout, is_duplicate, position) is not None
