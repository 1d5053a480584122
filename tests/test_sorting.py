"""Tests for the sorting engine."""

import random

import pytest
from conftest import ReverseRandom

from games import Direction, GameConfig, SortingEngine
from games.sorting import is_ordered
from models import GameMode, SessionPhase, SortItem
from session import SessionController


class RotateRandom(random.Random):
    """Random source whose shuffle moves the last element to the front."""

    def shuffle(self, x, *args, **kwargs):
        x.insert(0, x.pop())


def ids(engine):
    return [item.id for item in engine.order]


@pytest.fixture
def reversed_engine(batch_for, timer) -> SortingEngine:
    """Sorting engine whose initial order is c, b, a."""
    controller = SessionController(rng=ReverseRandom(), timer=timer, config=GameConfig())
    return controller.start(batch_for(GameMode.SORTING))


def sort_item(item_id: str, order_index: int) -> SortItem:
    return SortItem(id=item_id, content=item_id, order_index=order_index)


class TestIsOrdered:
    """Tests for the order check."""

    def test_ascending(self):
        assert is_ordered([sort_item("a", 0), sort_item("b", 1), sort_item("c", 2)])

    def test_out_of_order(self):
        """Indexes 2, 0, 1 are not in order."""
        assert not is_ordered([sort_item("a", 2), sort_item("b", 0), sort_item("c", 1)])

    def test_ties_accepted_either_way(self):
        assert is_ordered([sort_item("a", 0), sort_item("b", 1), sort_item("c", 1)])
        assert is_ordered([sort_item("a", 0), sort_item("c", 1), sort_item("b", 1)])

    def test_single_item(self):
        assert is_ordered([sort_item("a", 5)])


class TestSwap:
    """Tests for moving items."""

    def test_move_up(self, reversed_engine):
        assert reversed_engine.swap_adjacent(1, Direction.UP)
        assert ids(reversed_engine) == ["b", "c", "a"]

    def test_move_down(self, reversed_engine):
        assert reversed_engine.swap_adjacent(0, Direction.DOWN)
        assert ids(reversed_engine) == ["b", "c", "a"]

    def test_direction_string(self, reversed_engine):
        assert reversed_engine.swap_adjacent(2, "up")
        assert ids(reversed_engine) == ["c", "a", "b"]

    def test_out_of_range_is_noop(self, reversed_engine):
        """The first item cannot move up and the last cannot move down."""
        assert not reversed_engine.swap_adjacent(0, Direction.UP)
        assert not reversed_engine.swap_adjacent(2, Direction.DOWN)
        assert not reversed_engine.swap_adjacent(7, Direction.UP)
        assert not reversed_engine.swap_adjacent(1, "sideways")
        assert ids(reversed_engine) == ["c", "b", "a"]

    def test_order_is_permutation(self, reversed_engine):
        for position, direction in ((0, "down"), (1, "down"), (2, "up"), (1, "up")):
            reversed_engine.swap_adjacent(position, direction)
        assert sorted(ids(reversed_engine)) == ["a", "b", "c"]


class TestCheck:
    """Tests for checking the order."""

    def test_wrong_order(self, reversed_engine):
        assert not reversed_engine.check_order()
        view = reversed_engine.snapshot()
        assert view.checked
        assert not view.is_correct
        assert view.phase == SessionPhase.ACTIVE

    def test_check_is_repeatable(self, reversed_engine):
        assert not reversed_engine.check_order()
        assert not reversed_engine.check_order()

    def test_move_invalidates_check(self, reversed_engine):
        reversed_engine.check_order()
        reversed_engine.swap_adjacent(0, Direction.DOWN)
        view = reversed_engine.snapshot()
        assert not view.checked
        assert not view.is_correct

    def test_sort_then_check(self, reversed_engine):
        """Reversing c, b, a by swaps solves the round for full score."""
        reversed_engine.swap_adjacent(0, Direction.DOWN)
        reversed_engine.swap_adjacent(1, Direction.DOWN)
        reversed_engine.swap_adjacent(0, Direction.DOWN)
        assert ids(reversed_engine) == ["a", "b", "c"]

        assert reversed_engine.check_order()
        session = reversed_engine.session
        assert session.phase == SessionPhase.COMPLETE
        assert session.score == 3

    def test_two_swaps_solve_rotated_order(self, batch_for, timer):
        """Order indexes 2, 0, 1 need two adjacent swaps to sort."""
        controller = SessionController(rng=RotateRandom(), timer=timer)
        engine = controller.start(batch_for(GameMode.SORTING))
        assert [item.order_index for item in engine.order] == [2, 0, 1]

        assert engine.swap_adjacent(0, Direction.DOWN)
        assert [item.order_index for item in engine.order] == [0, 2, 1]
        assert not engine.check_order()
        assert controller.phase == SessionPhase.ACTIVE

        assert engine.swap_adjacent(1, Direction.DOWN)
        assert engine.check_order()
        assert controller.phase == SessionPhase.COMPLETE
        assert controller.score == 3

    def test_locked_after_success(self, start):
        engine = start(GameMode.SORTING)
        assert engine.check_order()
        assert not engine.swap_adjacent(0, Direction.DOWN)
        assert engine.check_order()
        assert ids(engine) == ["a", "b", "c"]

    def test_snapshot_hides_order_index(self, reversed_engine):
        view = reversed_engine.snapshot()
        assert [entry.content for entry in view.order] == ["3/4", "1/2", "1/4"]
        assert "order_index" not in view.order[0].model_dump()
