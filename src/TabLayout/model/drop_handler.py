"""
Drop handling: inserting, splitting and relocating tabs.

A drop either carries a dragged tab that already lives in the tree, or foreign
data that a factory turns into a new tab template. Placement depends on the
side of the target layout it landed on.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Mapping, Optional

from ..core.errors import DuplicateIdError, NotFoundError, ShapeError
from ..drag_payload import is_dragged_tab
from .layout_model import Layout, NodeKind, Side, Tab, TabTemplate, as_template, new_id
from .tree_builder import single_tab_layout
from .tree_mutators import DuplicateCheck, contains_id, insert_tab, remove_tab
from .tree_navigator import find_tab, get_depth, get_root

logger = logging.getLogger(__name__)

TabFactory = Callable[[Mapping[str, Any]], Optional[TabTemplate]]


def on_drop(payload: Mapping[str, Any], layout: Layout, side: Side, is_duplicate: Optional[DuplicateCheck] = None,
            factory: Optional[TabFactory] = None, max_depth: Optional[int] = None,
            on_max_depth_reached: Optional[Callable[[], None]] = None) -> Optional[Tab]:
    """
    Drops ``payload`` on ``side`` of ``layout``.

    Center drops insert into ``layout`` like add_tab. Edge drops create a new
    single-tab layout next to ``layout`` when its parent already runs along the
    implied axis, and split ``layout`` in place otherwise. A dragged tab is
    inserted first and removed from its old place afterwards.

    Returns the inserted tab, or None when the drop changed nothing.

    Raises:
        NotFoundError: a dragged tab id is not in the tree.
        ModeError: a center drop on a layout of layouts.
        ShapeError: the factory produced something other than a tab template.
        DuplicateIdError: foreign data produced a template with a used id.
    """
    side = Side(side)
    root = get_root(layout)
    source = None

    if is_dragged_tab(payload):
        source = find_tab(payload['id'], root)
        if source is None:
            raise NotFoundError(payload['id'], f"Dragged tab '{payload['id']}' is not in the layout")
        template = TabTemplate(title=source.title, data=source.data, id=source.id)
    else:
        template = factory(payload) if factory is not None else None
        if template is None:
            logger.info("Ignored drop on %s: no tab produced for %r", layout.id, payload)
            return None
        template = as_template(template)
        if template.kind is not NodeKind.TAB:
            raise ShapeError("A drop can only produce a tab template")
        if template.id and contains_id(template.id, root):
            raise DuplicateIdError(template.id)

    if source is not None and source.parent is layout and len(layout.children) == 1:
        logger.debug("Ignored drop of %s onto its own container", source.id)
        return None

    if side is Side.CENTER or not layout.children:
        node = insert_tab(template, layout, is_duplicate)
    else:
        node = _drop_on_edge(template, layout, side, max_depth, on_max_depth_reached)

    if node is not None and source is not None:
        remove_tab(source)
    return node


def on_empty_drop(payload: Mapping[str, Any], root: Layout, is_duplicate: Optional[DuplicateCheck] = None,
                  factory: Optional[TabFactory] = None) -> Optional[Tab]:
    """Handles a drop on a root that has no children left."""
    if root.children:
        logger.warning("Ignored empty-area drop: layout %s is not empty", root.id)
        return None
    return on_drop(payload, root, Side.CENTER, is_duplicate, factory)


def _drop_on_edge(template: TabTemplate, layout: Layout, side: Side, max_depth: Optional[int],
                  on_max_depth_reached: Optional[Callable[[], None]]) -> Optional[Tab]:
    parent = layout.parent

    if parent is not None and parent.direction is side.axis:
        created = single_tab_layout(template, parent)
        index = parent.children.index(layout) + (0 if side.is_before else 1)
        parent.children.insert(index, created)
        logger.debug("Inserted layout %s %s %s", created.id, side.value, layout.id)
        return created.children[0]

    if max_depth is not None and get_depth(layout) + 1 > max_depth:
        logger.warning("Ignored drop on %s: splitting it would exceed max depth %d", layout.id, max_depth)
        if on_max_depth_reached is not None:
            on_max_depth_reached()
        return None

    return split_layout(layout, template, side).children[0]


def split_layout(layout: Layout, template: TabTemplate, side: Side) -> Layout:
    """
    Splits ``layout`` in place along ``side``'s axis.

    The current content moves verbatim into a new child layout, the dropped tab
    gets a second one, and ``layout`` becomes a layout of those two.
    Returns the layout holding the dropped tab.
    """
    created = single_tab_layout(template, layout)
    moved = Layout(id=new_id(), direction=layout.direction, active=layout.active)
    moved.parent = layout
    moved.adopt(layout.children)

    layout.direction = side.axis
    layout.active = None
    layout.children = [created, moved] if side.is_before else [moved, created]
    logger.debug("Split %s along %s, new layout %s", layout.id, side.axis.value, created.id)
    return created
