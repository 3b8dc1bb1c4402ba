from __future__ import annotations
from typing import Optional, Union

from PySide6.QtCore import QPoint, QPointF, QRect

from .core.options import DEFAULT_EDGE_RATIO
from .model.layout_model import Side


def get_drop_side(pos: Union[QPoint, QPointF], rect: QRect, edge_ratio: float = DEFAULT_EDGE_RATIO) -> Optional[Side]:
    """
    Maps a pointer position to the drop zone of a panel.

    Each edge owns a band of ``edge_ratio`` of the panel's size along its axis;
    in a corner, the edge the pointer is relatively closest to wins. Everything
    else is the center. Returns None when ``pos`` lies outside ``rect``.
    """
    if rect.width() <= 0 or rect.height() <= 0:
        return None

    x = (pos.x() - rect.x()) / rect.width()
    y = (pos.y() - rect.y()) / rect.height()
    if not (0 <= x < 1 and 0 <= y < 1):
        return None

    distances = {
        Side.TOP: y,
        Side.BOTTOM: 1 - y,
        Side.LEFT: x,
        Side.RIGHT: 1 - x,
    }
    nearest = min(distances, key=distances.get)
    return nearest if distances[nearest] < edge_ratio else Side.CENTER


def preview_rect(rect: QRect, side: Side) -> QRect:
    """The part of ``rect`` the dropped content would occupy."""
    half_width = rect.width() // 2
    half_height = rect.height() // 2
    side = Side(side)

    if side is Side.TOP:
        return QRect(rect.x(), rect.y(), rect.width(), half_height)
    elif side is Side.BOTTOM:
        return QRect(rect.x(), rect.y() + half_height, rect.width(), rect.height() - half_height)
    elif side is Side.LEFT:
        return QRect(rect.x(), rect.y(), half_width, rect.height())
    elif side is Side.RIGHT:
        return QRect(rect.x() + half_width, rect.y(), rect.width() - half_width, rect.height())
    return QRect(rect)
