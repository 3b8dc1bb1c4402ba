from __future__ import annotations
import logging
from typing import Any, Mapping, Optional, Union

from PySide6.QtCore import QObject, Signal

from .core.errors import NotFoundError
from .core.options import DuplicateCheck, LayoutOptions, TabFactory
from .drop_zones import get_drop_side
from .model.drop_handler import on_drop, on_empty_drop
from .model.layout_model import Layout, LayoutTemplate, Side, TabTemplate, format_tree
from .model.layout_serializer import LayoutSerializer
from .model.tree_builder import build_tree
from .model.tree_mutators import add_tab, close_tab, toggle_tab
from .model.tree_navigator import find_layout, find_tab, validate_tree

logger = logging.getLogger(__name__)


class LayoutSignals(QObject):
    """
    A collection of signals to allow applications to react to layout changes.
    """
    # Emitted when a tab becomes the active one of its layout.
    # Args: tab_id (str)
    tab_toggled = Signal(str)

    # Emitted after a tab has been closed and the tree repaired.
    # Args: tab_id (str)
    tab_closed = Signal(str)

    # Emitted after a new tab has been inserted.
    # Args: tab_id (str), layout_id (str)
    tab_added = Signal(str, str)

    # Emitted after a drop has placed a tab.
    # Args: tab_id (str), target_layout_id (str), side (str)
    tab_dropped = Signal(str, str, str)

    # A general signal emitted once whenever the tree has been modified.
    layout_changed = Signal()


class LayoutManager(QObject):
    """
    Owns a layout tree and applies user actions to it.

    Every action resolves its target by id against the current root, then
    delegates to the tree mutators. Calls must come from a single thread;
    the manager does no locking.
    """

    def __init__(self, template: Union[LayoutTemplate, Mapping[str, Any], Layout],
                 options: Optional[LayoutOptions] = None):
        super().__init__()
        self.options = options or LayoutOptions()
        self.signals = LayoutSignals()
        self.serializer = LayoutSerializer()
        self.tree = template if isinstance(template, Layout) else build_tree(template)

        # Set up the debug tree dump if debug mode is enabled
        if self.options.debug_mode:
            self.signals.layout_changed.connect(self._debug_report_tree)

    def set_tab_factory(self, factory_callable: Optional[TabFactory]):
        """Sets the callable that turns foreign drop data into a tab template."""
        self.options.tab_factory = factory_callable

    def set_duplicate_check(self, check: Optional[DuplicateCheck]):
        self.options.is_duplicate = check

    def set_debug_mode(self, enabled: bool):
        if enabled == self.options.debug_mode:
            return
        self.options.debug_mode = enabled
        if enabled:
            self.signals.layout_changed.connect(self._debug_report_tree)
        else:
            self.signals.layout_changed.disconnect(self._debug_report_tree)

    def _find_layout(self, layout_id: str) -> Layout:
        layout = find_layout(layout_id, self.tree)
        if layout is None:
            raise NotFoundError(layout_id, f"Unable to find layout with id '{layout_id}'")
        return layout

    def _host_of(self, tab_id: str) -> Layout:
        tab = find_tab(tab_id, self.tree)
        if tab is None:
            raise NotFoundError(tab_id, f"Unable to find tab with id '{tab_id}'")
        return tab.parent

    def toggle_tab(self, tab_id: str):
        if toggle_tab(tab_id, self._host_of(tab_id)):
            self.signals.tab_toggled.emit(tab_id)
            self.signals.layout_changed.emit()

    def close_tab(self, tab_id: str):
        close_tab(tab_id, self._host_of(tab_id))
        self.signals.tab_closed.emit(tab_id)
        self.signals.layout_changed.emit()

    def add_tab(self, template: Union[TabTemplate, Mapping[str, Any]], layout_id: str,
                position: Optional[int] = None) -> bool:
        layout = self._find_layout(layout_id)
        if not add_tab(template, layout, self.options.is_duplicate, position):
            return False

        self.signals.tab_added.emit(layout.active, layout.id)
        self.signals.layout_changed.emit()
        return True

    def on_drop(self, payload: Mapping[str, Any], layout_id: str, side: Union[Side, str]) -> bool:
        layout = self._find_layout(layout_id)
        side = Side(side)

        tab = on_drop(payload, layout, side, self.options.is_duplicate, self.options.tab_factory,
                      self.options.max_depth, self.options.on_max_depth_reached)
        if tab is None:
            return False

        self.signals.tab_dropped.emit(tab.id, layout_id, side.value)
        self.signals.layout_changed.emit()
        return True

    def on_empty_drop(self, payload: Mapping[str, Any]) -> bool:
        tab = on_empty_drop(payload, self.tree, self.options.is_duplicate, self.options.tab_factory)
        if tab is None:
            return False

        self.signals.tab_dropped.emit(tab.id, self.tree.id, Side.CENTER.value)
        self.signals.layout_changed.emit()
        return True

    def get_drop_side(self, pos, rect) -> Optional[Side]:
        """Maps a pointer position over a panel's bounds to its drop zone."""
        return get_drop_side(pos, rect, self.options.edge_ratio)

    def save_layout_to_bytearray(self) -> bytearray:
        return self.serializer.save_layout_to_bytearray(self.tree)

    def load_layout_from_bytearray(self, data: Union[bytes, bytearray]):
        """Replaces the current tree with a saved one."""
        self.tree = self.serializer.load_layout_from_bytearray(data)
        self.signals.layout_changed.emit()

    def pretty_print(self):
        """Logs the current state of the layout tree."""
        logger.info("--- LAYOUT STATE ---\n%s", format_tree(self.tree))

    def _debug_report_tree(self):
        validate_tree(self.tree)
        self.pretty_print()
