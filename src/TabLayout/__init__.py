"""
TabLayout: a splittable tab-panel layout tree for Qt applications.

Build a tree from a template, then mutate it with toggle/close/add/drop.
"""
from .core.errors import (LayoutError, TemplateError, ShapeError, MixedKindError, ArityError, DuplicateIdError,
                          ModeError, NotFoundError, PathError, LayoutSerializationError)
from .model.layout_model import (Direction, Side, NodeKind, Tab, Layout, TabTemplate, LayoutTemplate, tab, layout,
                                 template_from_dict, format_tree, new_id)
from .model.tree_builder import transform_tab, transform_layout, build_tree
from .model.tree_navigator import (kind_of, get_tab, find_tab, find_layout, get_root, get_parents_hierarchy,
                                   find_ui_by_path, get_depth, iter_tabs, iter_layouts, validate_tree)
from .model.tree_mutators import toggle_tab, close_tab, add_tab
from .model.drop_handler import on_drop, on_empty_drop
from .model.layout_serializer import LayoutSerializer
from .core.options import LayoutOptions
from .drag_payload import DRAGGED_SIGNATURE, MIME_TYPE, dragged_tab_payload, is_dragged_tab, payload_to_mime, payload_from_mime
from .drop_zones import get_drop_side, preview_rect
from .layout_manager import LayoutManager, LayoutSignals
from .logging_config import setup_logging
