"""Sorting game: put every item of the round into its correct order.

The whole batch is one round. Items are shown in a shuffled order and the
player moves them by swapping neighbours. Checking is repeatable until the
order is right; any move made after a check invalidates its result.
"""

from enum import Enum

from loguru import logger
from pydantic import BaseModel, ConfigDict

from games.base import EngineView, GameEngine, shuffled
from models import GameMode, SessionPhase, SortItem


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


class SortEntryView(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    content: str


class SortingView(EngineView):
    order: list[SortEntryView]
    checked: bool
    is_correct: bool


def is_ordered(items: list[SortItem]) -> bool:
    """True if no adjacent pair is out of order.

    The comparison is non-strict, so items sharing an order index are
    accepted in either order.
    """
    return all(
        left.order_index <= right.order_index
        for left, right in zip(items, items[1:])
    )


class SortingEngine(GameEngine[SortItem]):
    """Permutation verification engine."""

    mode = GameMode.SORTING

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.order: list[SortItem] = shuffled(self.rng, self.items)
        self.checked = False
        self.is_correct = False

    @property
    def is_locked(self) -> bool:
        return self.session.phase != SessionPhase.ACTIVE

    def swap_adjacent(self, position: int, direction: Direction) -> bool:
        """Swap the item at position with its neighbour in direction.

        Returns:
            True if the swap happened, False if it was out of range or the
            round is already solved.
        """
        if self.is_locked:
            return False
        try:
            direction = Direction(direction)
        except ValueError:
            return False
        target = position - 1 if direction == Direction.UP else position + 1
        if not (0 <= position < len(self.order) and 0 <= target < len(self.order)):
            logger.debug("Ignoring out-of-range swap {} {}", position, direction)
            return False

        self.order[position], self.order[target] = self.order[target], self.order[position]
        self.checked = False
        self.is_correct = False
        return True

    def check_order(self) -> bool:
        """Check the current order and finish the round if it is correct."""
        if self.is_locked:
            return self.is_correct
        self.checked = True
        self.is_correct = is_ordered(self.order)
        if self.is_correct:
            self.session.complete_round(len(self.items))
        return self.is_correct

    def snapshot(self) -> SortingView:
        return SortingView(
            **self._view_fields(),
            order=[SortEntryView(id=item.id, content=item.content) for item in self.order],
            checked=self.checked,
            is_correct=self.is_correct,
        )
