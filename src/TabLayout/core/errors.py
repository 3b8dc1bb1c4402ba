from __future__ import annotations

"""
Typed errors raised by the TabLayout tree engine.

Every check that can fail runs before the tree is touched, so catching one of
these means the tree is exactly as it was before the call.
"""


class LayoutError(Exception):
    """Base class for every error raised by the layout engine."""


class TemplateError(LayoutError, ValueError):
    """A template could not be turned into a tree."""


class ShapeError(TemplateError):
    """A layout has no children, or a mix of tabs and layouts."""


class MixedKindError(ShapeError):
    """A children sequence holds both tabs and layouts."""


class ArityError(TemplateError):
    """A layout of layouts has fewer than 2 children."""


class DuplicateIdError(TemplateError):
    """Two nodes in the same tree share an id."""

    def __init__(self, node_id: str):
        super().__init__(f"Duplicate id '{node_id}' in layout tree")
        self.node_id = node_id


class ModeError(LayoutError):
    """A tab-only operation was called on a layout of layouts."""


class NotFoundError(LayoutError, LookupError):
    """A referenced id does not exist in the searched scope."""

    def __init__(self, node_id: str, message: str | None = None):
        super().__init__(message or f"Unable to find node with id '{node_id}'")
        self.node_id = node_id


class PathError(NotFoundError):
    """A layout path does not resolve segment by segment."""

    def __init__(self, path):
        self.path = list(path)
        super().__init__(self.path[-1] if self.path else "", f"Incorrect UI path: \"{'/'.join(self.path)}\"")


class LayoutSerializationError(LayoutError):
    """Serialized layout data could not be read back."""
