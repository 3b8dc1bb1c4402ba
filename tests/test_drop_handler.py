import pytest

from TabLayout import (Direction, DuplicateIdError, ModeError, NodeKind, NotFoundError, ShapeError, Side, build_tree,
                       close_tab, dragged_tab_payload, find_tab, get_depth, iter_tabs, kind_of, layout, on_drop,
                       on_empty_drop, tab, validate_tree)
from TabLayout.model.layout_serializer import LayoutSerializer


def no_duplicate(a, b):
    return False


def snapshot(root):
    return LayoutSerializer().serialize_node(root)


def tab_data(layout_node):
    return [child.data for child in layout_node.children]


class TestExternalDrops:
    @pytest.mark.parametrize("side, direction, expected", [
        (Side.RIGHT, Direction.ROW, [{"id": 1}, {"id": 2}]),
        (Side.LEFT, Direction.ROW, [{"id": 2}, {"id": 1}]),
        (Side.BOTTOM, Direction.COLUMN, [{"id": 1}, {"id": 2}]),
        (Side.TOP, Direction.COLUMN, [{"id": 2}, {"id": 1}]),
    ])
    def test_edge_drop_splits_single_tab_layout(self, single_tab_tree, make_tab, side, direction, expected):
        root = single_tab_tree

        node = on_drop({"id": 2}, root, side, no_duplicate, make_tab)

        assert node is not None and node.data == {"id": 2}
        assert root.direction is direction
        assert root.active is None
        assert [child.kind for child in root.children] == [NodeKind.LAYOUT, NodeKind.LAYOUT]
        assert [child.children[0].data for child in root.children] == expected
        validate_tree(root)

    def test_split_keeps_moved_content(self, make_tab):
        root = build_tree(layout([tab("a"), tab("b"), tab("c")], direction=Direction.COLUMN))
        old_tabs = list(root.children)
        root.active = old_tabs[2].id

        on_drop({"id": 9}, root, "right", no_duplicate, make_tab)

        moved = root.children[0]
        assert moved.children == old_tabs
        assert moved.active == old_tabs[2].id
        assert moved.direction is Direction.COLUMN
        assert all(child.parent is moved for child in moved.children)
        assert moved.parent is root
        validate_tree(root)

    def test_factory_returning_none_ignores_drop(self, single_tab_tree, make_tab):
        before = snapshot(single_tab_tree)

        assert on_drop({"unknown": True}, single_tab_tree, Side.RIGHT, no_duplicate, make_tab) is None
        assert snapshot(single_tab_tree) == before

    def test_no_factory_ignores_drop(self, single_tab_tree):
        assert on_drop({"id": 2}, single_tab_tree, Side.CENTER) is None
        assert len(single_tab_tree.children) == 1

    def test_center_drop_adds_tab(self, single_tab_tree, make_tab):
        node = on_drop({"id": 2}, single_tab_tree, Side.CENTER, no_duplicate, make_tab)

        assert tab_data(single_tab_tree) == [{"id": 1}, {"id": 2}]
        assert single_tab_tree.active == node.id

    def test_center_drop_respects_duplicates(self, single_tab_tree, make_tab):
        node = on_drop({"id": 1}, single_tab_tree, Side.CENTER, lambda a, b: a == b, make_tab)

        assert node is None
        assert len(single_tab_tree.children) == 1

    def test_center_drop_on_layout_of_layouts_raises(self, row_of_two, make_tab):
        before = snapshot(row_of_two)
        with pytest.raises(ModeError):
            on_drop({"id": 2}, row_of_two, Side.CENTER, no_duplicate, make_tab)
        assert snapshot(row_of_two) == before

    def test_template_with_used_id_raises(self, row_of_two):
        with pytest.raises(DuplicateIdError):
            on_drop({"id": 2}, row_of_two.children[1], Side.CENTER, no_duplicate, lambda data: tab("x", id="a1"))

    def test_string_side_is_accepted(self, single_tab_tree, make_tab):
        on_drop({"id": 2}, single_tab_tree, "bottom", no_duplicate, make_tab)
        assert single_tab_tree.direction is Direction.COLUMN


class TestSiblingInsertion:
    def test_left_of_target_when_axis_matches(self, row_of_two, make_tab):
        target = row_of_two.children[1]

        on_drop({"id": "n"}, target, Side.LEFT, no_duplicate, make_tab)

        assert [child.id for child in row_of_two.children][0] == "A"
        assert row_of_two.children[2] is target
        assert row_of_two.children[1].children[0].data == {"id": "n"}
        assert row_of_two.children[1].parent is row_of_two
        validate_tree(row_of_two)

    def test_right_of_target_when_axis_matches(self, row_of_two, make_tab):
        target = row_of_two.children[0]

        on_drop({"id": "n"}, target, Side.RIGHT, no_duplicate, make_tab)

        assert len(row_of_two.children) == 3
        assert row_of_two.children[0] is target
        assert row_of_two.children[1].children[0].data == {"id": "n"}
        assert target.children[0].id == "a1"

    def test_split_in_place_when_axis_differs(self, row_of_two, make_tab):
        target = row_of_two.children[0]

        on_drop({"id": "n"}, target, Side.BOTTOM, no_duplicate, make_tab)

        assert len(row_of_two.children) == 2
        assert row_of_two.children[0] is target
        assert target.direction is Direction.COLUMN
        assert target.active is None
        assert [child.id for child in target.children[0].children] == ["a1", "a2"]
        assert target.children[1].children[0].data == {"id": "n"}
        validate_tree(row_of_two)


class TestRelocation:
    def test_center_drop_moves_tab(self, row_of_two):
        moving = find_tab("a2", row_of_two)
        target = row_of_two.children[1]

        node = on_drop(dragged_tab_payload(moving), target, Side.CENTER, no_duplicate)

        assert [child.id for child in target.children] == ["b1", "a2"]
        assert node.data == {"id": "a2"}
        assert node.parent is target
        assert target.active == "a2"
        assert [child.id for child in row_of_two.children[0].children] == ["a1"]
        assert moving.parent is None
        validate_tree(row_of_two)

    def test_moving_last_tab_collapses_source(self, row_of_two):
        moving = find_tab("b1", row_of_two)

        on_drop(dragged_tab_payload(moving), row_of_two.children[0], Side.CENTER)

        assert kind_of(row_of_two.children) is NodeKind.TAB
        assert [child.id for child in row_of_two.children] == ["a1", "a2", "b1"]
        assert row_of_two.active == "b1"
        validate_tree(row_of_two)

    def test_edge_drop_moves_tab_next_to_target(self, row_of_two):
        moving = find_tab("b1", row_of_two)
        target = row_of_two.children[0]

        on_drop(dragged_tab_payload(moving), target, Side.LEFT)

        assert [[node.id for node in child.children] for child in row_of_two.children] == [["b1"], ["a1", "a2"]]
        validate_tree(row_of_two)

    def test_edge_drop_from_own_layout_splits(self, row_of_two):
        target = row_of_two.children[0]

        on_drop(dragged_tab_payload(find_tab("a1", row_of_two)), target, Side.TOP)

        assert target.direction is Direction.COLUMN
        assert [[node.id for node in child.children] for child in target.children] == [["a1"], ["a2"]]
        assert target.children[1].active == "a2"
        validate_tree(row_of_two)

    def test_split_then_collapse_of_root(self, row_of_two):
        target = row_of_two.children[0]

        on_drop(dragged_tab_payload(find_tab("b1", row_of_two)), target, Side.TOP)

        # B emptied, so the root adopted the split layout's content
        assert row_of_two.direction is Direction.COLUMN
        assert [[node.id for node in child.children] for child in row_of_two.children] == [["b1"], ["a1", "a2"]]
        assert all(child.parent is row_of_two for child in row_of_two.children)
        validate_tree(row_of_two)

    def test_drop_on_own_single_tab_layout_is_noop(self, row_of_two):
        before = snapshot(row_of_two)

        result = on_drop(dragged_tab_payload(find_tab("b1", row_of_two)), row_of_two.children[1], Side.RIGHT)

        assert result is None
        assert snapshot(row_of_two) == before

    def test_suppressed_duplicate_keeps_source(self, row_of_two):
        before = snapshot(row_of_two)

        result = on_drop(dragged_tab_payload(find_tab("b1", row_of_two)), row_of_two.children[0], Side.CENTER,
                         lambda a, b: True)

        assert result is None
        assert snapshot(row_of_two) == before

    def test_stale_dragged_id_raises(self, row_of_two):
        before = snapshot(row_of_two)
        payload = {"signature": "__dragged__tab__", "id": "gone"}

        with pytest.raises(NotFoundError):
            on_drop(payload, row_of_two.children[0], Side.CENTER)
        assert snapshot(row_of_two) == before

    def test_tab_count_is_preserved(self, nested_tree):
        count = len(list(iter_tabs(nested_tree)))
        moving = nested_tree.children[1].children[0].children[0]
        target = nested_tree.children[2]

        on_drop(dragged_tab_payload(moving), target, Side.BOTTOM)

        assert len(list(iter_tabs(nested_tree))) == count
        assert find_tab(moving.id, nested_tree).parent is not None
        validate_tree(nested_tree)


class TestDepthLimit:
    def test_split_beyond_max_depth_is_refused(self, single_tab_tree, make_tab):
        calls = []

        on_drop({"id": 2}, single_tab_tree, Side.RIGHT, no_duplicate, make_tab, max_depth=1,
                on_max_depth_reached=lambda: calls.append(True))
        child = single_tab_tree.children[0]
        assert get_depth(child) == 1
        before = snapshot(single_tab_tree)

        result = on_drop({"id": 3}, child, Side.TOP, no_duplicate, make_tab, max_depth=1,
                         on_max_depth_reached=lambda: calls.append(True))

        assert result is None
        assert calls == [True]
        assert snapshot(single_tab_tree) == before

    def test_sibling_insertion_ignores_depth(self, single_tab_tree, make_tab):
        on_drop({"id": 2}, single_tab_tree, Side.RIGHT, no_duplicate, make_tab, max_depth=1)

        result = on_drop({"id": 3}, single_tab_tree.children[0], Side.LEFT, no_duplicate, make_tab, max_depth=1)

        assert result is not None
        assert len(single_tab_tree.children) == 3


class TestEmptyDrop:
    def test_drop_on_empty_root(self, single_tab_tree, make_tab):
        close_tab("old", single_tab_tree)

        node = on_empty_drop({"id": 5}, single_tab_tree, no_duplicate, make_tab)

        assert single_tab_tree.children == [node]
        assert single_tab_tree.active == node.id
        validate_tree(single_tab_tree)

    def test_edge_drop_on_empty_root_inserts(self, single_tab_tree, make_tab):
        close_tab("old", single_tab_tree)

        on_drop({"id": 5}, single_tab_tree, Side.LEFT, no_duplicate, make_tab)

        assert tab_data(single_tab_tree) == [{"id": 5}]

    def test_non_empty_root_is_ignored(self, single_tab_tree, make_tab):
        assert on_empty_drop({"id": 5}, single_tab_tree, no_duplicate, make_tab) is None
        assert len(single_tab_tree.children) == 1


def test_factory_producing_a_layout_raises(single_tab_tree):
    before = snapshot(single_tab_tree)
    with pytest.raises(ShapeError):
        on_drop({"id": 2}, single_tab_tree, Side.RIGHT, no_duplicate, lambda data: layout([tab("x")]))
    assert snapshot(single_tab_tree) == before
