#!/usr/bin/env python3
"""Simple demo script driving a TabLayout tree through a few user actions."""

import logging
import sys

from PySide6.QtCore import QPoint, QRect

# Add the src directory to the path so we can import TabLayout
sys.path.insert(0, 'src')

from TabLayout import (Direction, LayoutManager, LayoutOptions, dragged_tab_payload, find_tab, layout,
                       setup_logging, tab)


def create_template():
    """Two editor groups side by side, a terminal panel below them."""
    return layout(direction=Direction.COLUMN, children=[
        layout(direction=Direction.ROW, children=[
            layout([tab("main.py", {"path": "main.py"}, id="main.py"),
                    tab("utils.py", {"path": "utils.py"}, id="utils.py")], id="editors"),
            layout([tab("README.md", {"path": "README.md"}, id="README.md")], id="docs"),
        ]),
        layout([tab("Terminal", {"path": None}, id="terminal")], id="panel"),
    ])


def open_file(data):
    """Tab factory for foreign drops: file paths dragged in from outside."""
    path = data.get("path")
    if not path:
        return None
    return tab(path.rsplit("/", 1)[-1], {"path": path}, id=path)


def main():
    setup_logging(logging.DEBUG)
    logger = logging.getLogger("TabLayout.demo")

    manager = LayoutManager(create_template(), LayoutOptions(
        tab_factory=open_file,
        is_duplicate=lambda a, b: a == b,
        max_depth=4,
        on_max_depth_reached=lambda: logger.warning("Layout is nested too deep"),
    ))
    manager.signals.layout_changed.connect(manager.pretty_print)
    manager.pretty_print()

    # Drag utils.py onto the right edge of the README group
    utils = find_tab("utils.py", manager.tree)
    side = manager.get_drop_side(QPoint(390, 150), QRect(0, 0, 400, 300))
    manager.on_drop(dragged_tab_payload(utils), "docs", side)

    # Open a file from outside into the terminal panel's top edge
    manager.on_drop({"path": "src/app.py"}, "panel", "top")

    # Opening the same file again in the center is suppressed
    app_tab = find_tab("src/app.py", manager.tree)
    manager.add_tab(tab(app_tab.title, app_tab.data), app_tab.parent.id)

    # Close README.md: its group empties and is removed from the row
    manager.close_tab("README.md")

    data = manager.save_layout_to_bytearray()
    logger.info("Saved layout: %d bytes", len(data))
    return 0


if __name__ == "__main__":
    sys.exit(main())
