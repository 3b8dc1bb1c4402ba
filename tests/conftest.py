"""Shared fixtures for the TabLayout test suite."""

import sys
from pathlib import Path

import pytest

# Add the src directory to the path so tests run without installing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from TabLayout import Direction, build_tree, layout, tab


def numbered_tabs(*numbers):
    return [tab(f"Hello {n}", {"n": n}) for n in numbers]


@pytest.fixture
def nested_tree():
    """
    root(row)
      A: tabs 1 2 3
      B(row)
        C: tabs 7 8 9
        D: tabs 10 11 12
      E: tabs 4 5 6
    """
    return build_tree(layout([
        layout(numbered_tabs(1, 2, 3)),
        layout([
            layout(numbered_tabs(7, 8, 9)),
            layout(numbered_tabs(10, 11, 12)),
        ]),
        layout(numbered_tabs(4, 5, 6)),
    ]))


@pytest.fixture
def single_tab_tree():
    return build_tree(layout([tab("Old", {"id": 1}, id="old")], id="root"))


@pytest.fixture
def row_of_two():
    """root(row): A[a1, a2], B[b1]"""
    return build_tree(layout([
        layout([tab("a1", {"id": "a1"}, id="a1"), tab("a2", {"id": "a2"}, id="a2")], id="A"),
        layout([tab("b1", {"id": "b1"}, id="b1")], id="B"),
    ], direction=Direction.ROW, id="root"))


@pytest.fixture
def make_tab():
    """Tab factory for foreign drop data: any mapping with an 'id' becomes a tab."""
    def factory(data):
        if "id" not in data:
            return None
        return tab(f"Tab {data['id']}", dict(data))
    return factory
