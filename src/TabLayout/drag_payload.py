"""
Dragged-tab payloads and their QMimeData encoding.

A payload carrying the reserved signature moves a tab that already exists in
the tree. Any other payload is foreign data that a tab factory may turn into a
new tab.
"""
from __future__ import annotations
import json
import logging
from typing import Any, Mapping, Optional

from PySide6.QtCore import QMimeData

from .core.errors import LayoutSerializationError
from .model.layout_model import Tab

logger = logging.getLogger(__name__)

DRAGGED_SIGNATURE = "__dragged__tab__"
MIME_TYPE = "application/x-tablayout-tab"


def dragged_tab_payload(tab: Tab) -> dict[str, Any]:
    """Builds the payload a drag of ``tab`` carries."""
    payload = {'signature': DRAGGED_SIGNATURE, 'id': tab.id}
    if tab.data is not None:
        payload['data'] = tab.data
    return payload


def is_dragged_tab(payload: Mapping[str, Any]) -> bool:
    return payload.get('signature') == DRAGGED_SIGNATURE and bool(payload.get('id'))


def payload_to_mime(payload: Mapping[str, Any]) -> QMimeData:
    """Encodes a payload as JSON under MIME_TYPE, with the tab id as plain text."""
    mime_data = QMimeData()
    mime_data.setData(MIME_TYPE, json.dumps(dict(payload)).encode('utf-8'))
    if is_dragged_tab(payload):
        mime_data.setText(payload['id'])
    return mime_data


def payload_from_mime(mime_data: QMimeData) -> Optional[dict[str, Any]]:
    """
    Decodes a payload written by payload_to_mime.

    Returns None when the mime data does not carry MIME_TYPE at all.

    Raises:
        LayoutSerializationError: the MIME_TYPE data is not a JSON object.
    """
    if not mime_data.hasFormat(MIME_TYPE):
        return None

    raw = bytes(mime_data.data(MIME_TYPE)).decode('utf-8')
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise LayoutSerializationError(f"Invalid drag payload: {e}") from e
    if not isinstance(payload, dict):
        raise LayoutSerializationError("Drag payload must be a JSON object")
    return payload
