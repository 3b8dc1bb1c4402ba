from __future__ import annotations
import logging
import pickle
from typing import Any

from ..core.errors import LayoutError, LayoutSerializationError
from .layout_model import AnyNode, Direction, Layout, NodeKind, new_id
from .tree_builder import build_tree

logger = logging.getLogger(__name__)


class LayoutSerializer:
    """
    Converts a layout tree to plain data and back.

    Parent links are back-references, so they are never written: loading
    rebuilds the tree through build_tree, which derives them again and
    re-checks every construction rule.
    """

    def serialize_node(self, node: AnyNode) -> dict[str, Any]:
        """
        Recursively serializes a node to a dictionary.

        Args:
            node: The tab or layout to serialize

        Returns:
            dict: Template-shaped data carrying the node's ids
        """
        if node.kind is NodeKind.LAYOUT:
            data = {
                'type': NodeKind.LAYOUT.value,
                'id': node.id,
                'direction': node.direction.value,
                'children': [self.serialize_node(child) for child in node.children]
            }
            if node.active is not None:
                data['active'] = node.active
            return data

        data = {
            'type': NodeKind.TAB.value,
            'id': node.id,
            'title': node.title,
        }
        if node.data is not None:
            data['data'] = node.data
        return data

    def deserialize_node(self, data: dict[str, Any]) -> Layout:
        """
        Rebuilds a tree from serialize_node output.

        The saved active tab of every tab layout is restored when it still
        names one of that layout's children.
        """
        root = build_tree(data)
        self._restore_active(root, data)
        return root

    def _restore_active(self, node: Layout, data: dict[str, Any]):
        active = data.get('active')
        if node.children and node.children[0].kind is NodeKind.TAB:
            if active in {child.id for child in node.children}:
                node.active = active
            return
        for child, child_data in zip(node.children, data.get('children', [])):
            self._restore_active(child, child_data)

    def save_layout_to_bytearray(self, root: Layout) -> bytearray:
        """
        Serializes the whole tree to binary data.

        Returns:
            bytearray: Serialized layout data that can be saved to file
        """
        return bytearray(pickle.dumps(self.serialize_node(root)))

    def load_layout_from_bytearray(self, data: bytes | bytearray) -> Layout:
        """
        Deserializes binary data from save_layout_to_bytearray().

        Raises:
            LayoutSerializationError: the data is not a saved layout
        """
        try:
            layout_data = pickle.loads(bytes(data))
        except Exception as e:
            raise LayoutSerializationError(f"Error deserializing layout data: {e}") from e

        if not isinstance(layout_data, dict):
            raise LayoutSerializationError("Layout data does not describe a layout")

        if not layout_data.get('children'):
            # An emptied root is a valid state but not a valid template.
            logger.debug("Loaded empty layout %s", layout_data.get('id'))
            return Layout(id=layout_data.get('id') or new_id(),
                          direction=Direction(layout_data.get('direction', Direction.ROW)))

        try:
            return self.deserialize_node(layout_data)
        except (LayoutError, KeyError, TypeError, ValueError) as e:
            raise LayoutSerializationError(f"Error rebuilding layout: {e}") from e
