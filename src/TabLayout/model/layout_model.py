from __future__ import annotations
import uuid
import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Union
from PySide6.QtCore import Qt

from ..core.errors import ShapeError

# Define a type hint for any possible node
AnyNode = Union['Tab', 'Layout']
AnyTemplate = Union['TabTemplate', 'LayoutTemplate']


def new_id() -> str:
    """Allocates a globally unique id for a node created without one."""
    return str(uuid.uuid4())


class NodeKind(str, Enum):
    TAB = "tab"
    LAYOUT = "layout"


class Direction(str, Enum):
    """The axis along which a layout of layouts arranges its children."""
    ROW = "row"
    COLUMN = "column"

    @property
    def orientation(self) -> Qt.Orientation:
        """The QSplitter orientation that renders this direction."""
        return Qt.Orientation.Horizontal if self is Direction.ROW else Qt.Orientation.Vertical


class Side(str, Enum):
    """The five drop zones of a layout."""
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"

    @property
    def axis(self) -> Optional[Direction]:
        """The split direction an edge drop implies, None for center."""
        if self in (Side.TOP, Side.BOTTOM):
            return Direction.COLUMN
        if self in (Side.LEFT, Side.RIGHT):
            return Direction.ROW
        return None

    @property
    def is_before(self) -> bool:
        """True when the dropped content lands before the target."""
        return self in (Side.TOP, Side.LEFT)


# --- Template Definitions ---

@dataclass
class TabTemplate:
    """Declarative description of a tab. The id is optional."""
    title: str
    data: Optional[dict[str, Any]] = None
    id: Optional[str] = None
    kind: NodeKind = field(default=NodeKind.TAB, init=False, repr=False)


@dataclass
class LayoutTemplate:
    """Declarative description of a layout holding tab or layout templates."""
    children: list[AnyTemplate] = field(default_factory=list)
    direction: Optional[Direction] = None
    id: Optional[str] = None
    kind: NodeKind = field(default=NodeKind.LAYOUT, init=False, repr=False)


def tab(title: str, data: Optional[dict[str, Any]] = None, id: Optional[str] = None) -> TabTemplate:
    return TabTemplate(title=title, data=data, id=id)


def layout(children: list[AnyTemplate], direction: Optional[Direction] = None,
           id: Optional[str] = None) -> LayoutTemplate:
    return LayoutTemplate(children=list(children), direction=direction, id=id)


def template_from_dict(data: Mapping[str, Any]) -> AnyTemplate:
    """
    Converts a plain mapping into a template.

    A mapping with a ``type`` of ``"layout"``, or without a type but with a
    ``children`` entry, becomes a LayoutTemplate. Everything else is a tab.
    """
    node_type = data.get('type')
    if node_type is None:
        node_type = NodeKind.LAYOUT.value if 'children' in data else NodeKind.TAB.value

    if node_type == NodeKind.LAYOUT.value:
        direction = data.get('direction')
        return LayoutTemplate(
            children=[as_template(child) for child in data.get('children', [])],
            direction=Direction(direction) if direction is not None else None,
            id=data.get('id')
        )
    if node_type == NodeKind.TAB.value:
        return TabTemplate(title=data.get('title', ''), data=data.get('data'), id=data.get('id'))

    raise ShapeError(f"Unknown template type '{node_type}'")


def as_template(value: Union[AnyTemplate, Mapping[str, Any]]) -> AnyTemplate:
    if isinstance(value, (TabTemplate, LayoutTemplate)):
        return value
    if isinstance(value, Mapping):
        return template_from_dict(value)
    raise ShapeError(f"Expected a tab or layout template, got {type(value).__name__}")


# --- Node Definitions ---

class _TreeNode:
    """
    Non-owning link from a node up to the layout that contains it.

    The parent is held through a weak reference: a layout owns its children,
    a child only points back up for traversal and reparenting.
    """
    _parent_ref = None

    @property
    def parent(self) -> Optional[Layout]:
        return self._parent_ref() if self._parent_ref is not None else None

    @parent.setter
    def parent(self, value: Optional[Layout]):
        self._parent_ref = weakref.ref(value) if value is not None else None


@dataclass(eq=False)
class Tab(_TreeNode):
    """A single selectable panel of content."""
    id: str
    title: str
    data: Optional[dict[str, Any]] = None
    kind: NodeKind = field(default=NodeKind.TAB, init=False)


@dataclass(eq=False)
class Layout(_TreeNode):
    """A tab strip (children are Tabs) or a split (children are Layouts)."""
    id: str
    children: list[AnyNode] = field(default_factory=list)
    direction: Direction = Direction.ROW
    active: Optional[str] = None
    kind: NodeKind = field(default=NodeKind.LAYOUT, init=False)

    def adopt(self, children: list[AnyNode]):
        """Replaces the children, pointing each one back at this layout."""
        self.children = list(children)
        for child in self.children:
            child.parent = self


def format_tree(node: AnyNode) -> str:
    """Renders a tree as indented text, one node per line."""
    lines = []
    _format_node(node, 0, lines)
    return "\n".join(lines)


def _format_node(node: AnyNode, indent: int, lines: list[str]):
    """Recursively formats a node and its children."""
    prefix = "  " * indent
    if node.kind is NodeKind.LAYOUT:
        if node.children and node.children[0].kind is NodeKind.TAB:
            lines.append(f"{prefix}↳ Tabs [id: ...{node.id[-4:]}] - Tabs: {len(node.children)}")
        else:
            lines.append(f"{prefix}↳ Layout ({node.direction.value}) [id: ...{node.id[-4:]}] - Children: {len(node.children)}")
        for child in node.children:
            _format_node(child, indent + 1, lines)
    else:
        marker = " *" if node.parent is not None and node.parent.active == node.id else ""
        lines.append(f"{prefix}↳ Tab: '{node.title}' [id: ...{node.id[-4:]}]{marker}")
