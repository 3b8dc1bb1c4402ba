from dataclasses import dataclass
from typing import Callable, Optional

from ..model.drop_handler import TabFactory
from ..model.tree_mutators import DuplicateCheck

DEFAULT_EDGE_RATIO = 0.15


@dataclass
class LayoutOptions:
    """Behaviour switches for a LayoutManager."""
    # Turns foreign drop data into a tab template, or None to ignore the drop.
    tab_factory: Optional[TabFactory] = None
    # Called as is_duplicate(existing_tab.data, new_tab.data).
    is_duplicate: Optional[DuplicateCheck] = None
    max_depth: Optional[int] = None
    on_max_depth_reached: Optional[Callable[[], None]] = None
    edge_ratio: float = DEFAULT_EDGE_RATIO
    debug_mode: bool = False

    def __post_init__(self):
        if not 0 < self.edge_ratio < 0.5:
            raise ValueError(f"edge_ratio must be between 0 and 0.5, got {self.edge_ratio}")
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
