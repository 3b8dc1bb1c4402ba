"""Read-only queries over a realized layout tree."""
from __future__ import annotations
from typing import Iterator, Optional, Sequence

from ..core.errors import ArityError, DuplicateIdError, MixedKindError, NotFoundError, PathError, ShapeError
from .layout_model import AnyNode, Layout, NodeKind, Tab


def kind_of(children: Sequence[AnyNode]) -> NodeKind:
    """
    Returns the common kind of a children sequence.

    An empty sequence counts as tabs, so an emptied root can still receive one.

    Raises:
        MixedKindError: the sequence mixes tabs and layouts (or holds anything else).
    """
    kinds = {getattr(child, 'kind', None) for child in children}
    if not kinds or kinds == {NodeKind.TAB}:
        return NodeKind.TAB
    if kinds == {NodeKind.LAYOUT}:
        return NodeKind.LAYOUT
    raise MixedKindError("Layout children cannot be a mix of Tabs and Layouts")


def get_tab(id: str, children: Sequence[Tab]) -> Tab:
    """Strict lookup of a tab among ``children``."""
    for child in children:
        if child.id == id:
            return child
    raise NotFoundError(id, f"Unable to get tab with id '{id}'")


def find_tab(id: str, layout: Layout) -> Optional[Tab]:
    """Depth-first search for a tab anywhere below ``layout``."""
    if kind_of(layout.children) is NodeKind.TAB:
        return next((child for child in layout.children if child.id == id), None)

    for child in layout.children:
        found = find_tab(id, child)
        if found:
            return found
    return None


def find_layout(id: str, root: Layout) -> Optional[Layout]:
    """Depth-first search for a layout, ``root`` included. Tab ids never match."""
    if root.id == id:
        return root
    if kind_of(root.children) is not NodeKind.LAYOUT:
        return None

    for child in root.children:
        if child.id == id:
            return child
    for child in root.children:
        found = find_layout(id, child)
        if found:
            return found
    return None


def get_root(node: AnyNode) -> Layout:
    while node.parent is not None:
        node = node.parent
    return node


def get_parents_hierarchy(node: AnyNode) -> list[str]:
    """Ids of every ancestor of ``node``, nearest first, root last."""
    ids = []
    parent = node.parent
    while parent is not None:
        ids.append(parent.id)
        parent = parent.parent
    return ids


def get_depth(node: AnyNode) -> int:
    return len(get_parents_hierarchy(node))


def find_ui_by_path(id: str, path: Sequence[str], root: Layout) -> AnyNode:
    """
    Resolves a node from a flat path of layout ids.

    Each path segment must be a direct child layout of the previous one,
    starting below ``root``; ``id`` is then looked up among the children of
    the last layout.

    Raises:
        PathError: a segment does not resolve.
        NotFoundError: ``id`` is not a child of the resolved layout.
    """
    current = root
    for segment in path:
        current = next(
            (child for child in current.children if child.kind is NodeKind.LAYOUT and child.id == segment),
            None
        )
        if current is None:
            raise PathError(path)

    for child in current.children:
        if child.id == id:
            return child
    raise NotFoundError(id, f"Unable to find '{id}' at path \"{'/'.join(path)}\"")


def iter_layouts(layout: Layout) -> Iterator[Layout]:
    """Yields ``layout`` and every layout below it, depth first."""
    yield layout
    for child in layout.children:
        if child.kind is NodeKind.LAYOUT:
            yield from iter_layouts(child)


def iter_tabs(layout: Layout) -> Iterator[Tab]:
    """Yields every tab below ``layout`` in display order."""
    for child in layout.children:
        if child.kind is NodeKind.TAB:
            yield child
        else:
            yield from iter_tabs(child)


def validate_tree(root: Layout):
    """
    Checks every structural invariant of the tree below ``root``.

    Raises the typed error matching the first broken invariant. An empty root
    is accepted; any other empty layout is not.
    """
    if root.parent is not None:
        raise ShapeError(f"Root layout '{root.id}' has a parent")

    seen = set()
    for node in iter_layouts(root):
        kind = kind_of(node.children)
        if not node.children and node is not root:
            raise ShapeError(f"Layout '{node.id}' has no children")
        if kind is NodeKind.LAYOUT:
            if len(node.children) < 2:
                raise ArityError(f"Layout '{node.id}' holds fewer than 2 layouts")
            if node.active is not None:
                raise ShapeError(f"Layout of layouts '{node.id}' has an active tab")
        elif node.children and node.active not in {child.id for child in node.children}:
            raise ShapeError(f"Layout '{node.id}' has an invalid active tab '{node.active}'")
        elif not node.children and node.active is not None:
            raise ShapeError(f"Empty layout '{node.id}' has an active tab")

        for child in node.children:
            if child.parent is not node:
                raise ShapeError(f"Node '{child.id}' does not point back at its parent '{node.id}'")
            if child.kind is NodeKind.TAB:
                if child.id in seen:
                    raise DuplicateIdError(child.id)
                seen.add(child.id)

        if node.id in seen:
            raise DuplicateIdError(node.id)
        seen.add(node.id)
