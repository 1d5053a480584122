"""Matching game: pair each term with its definition.

All pairs are live at once. Terms and definitions are shown in two columns,
each shuffled independently once when the engine is built. The player
selects one entry from each column; a pair whose ids agree is matched and
leaves play for good, a pair whose ids differ is shown as a mismatch and both
selections clear after a short delay.
"""

from enum import Enum

from loguru import logger
from pydantic import BaseModel, ConfigDict

from games.base import EngineView, GameEngine, shuffled
from games.timers import ScheduledCall
from models import GameMode, PairItem, SessionPhase


class Column(str, Enum):
    TERM = "term"
    DEFINITION = "definition"


class SelectionResult(str, Enum):
    IGNORED = "ignored"
    SELECTED = "selected"
    DESELECTED = "deselected"
    MATCHED = "matched"
    MISMATCHED = "mismatched"


class MatchEntryView(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    selected: bool
    matched: bool


class MatchingView(EngineView):
    terms: list[MatchEntryView]
    definitions: list[MatchEntryView]
    pending_term: str | None
    pending_definition: str | None
    matched_count: int
    pair_count: int
    mismatch: bool


class MatchingEngine(GameEngine[PairItem]):
    """Bipartite pairing-by-selection engine."""

    mode = GameMode.MATCHING

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.pairs = {item.id: item for item in self.items}
        self.term_order = tuple(shuffled(self.rng, [item.id for item in self.items]))
        self.definition_order = tuple(
            shuffled(self.rng, [item.id for item in self.items])
        )
        self.pending_term: str | None = None
        self.pending_definition: str | None = None
        self.matched: set[str] = set()
        self.mismatch = False
        self._pending_clear: ScheduledCall | None = None

    @property
    def matched_count(self) -> int:
        return len(self.matched)

    def select_term(self, pair_id: str) -> SelectionResult:
        return self._select(Column.TERM, pair_id)

    def select_definition(self, pair_id: str) -> SelectionResult:
        return self._select(Column.DEFINITION, pair_id)

    def _select(self, column: Column, pair_id: str) -> SelectionResult:
        if self.session.phase != SessionPhase.ACTIVE or self.mismatch:
            logger.debug("Ignoring {} selection while board is locked", column.value)
            return SelectionResult.IGNORED
        if pair_id not in self.pairs or pair_id in self.matched:
            logger.debug("Ignoring {} selection of {!r}", column.value, pair_id)
            return SelectionResult.IGNORED

        if column == Column.TERM:
            own, other = self.pending_term, self.pending_definition
        else:
            own, other = self.pending_definition, self.pending_term

        if other is None:
            new_value = None if own == pair_id else pair_id
            self._set_pending(column, new_value)
            return SelectionResult.SELECTED if new_value else SelectionResult.DESELECTED

        if other == pair_id:
            self.matched.add(pair_id)
            self.pending_term = None
            self.pending_definition = None
            logger.debug("Matched pair {} ({}/{})", pair_id, len(self.matched), len(self.pairs))
            if len(self.matched) == len(self.pairs):
                self.session.complete_round(len(self.pairs))
            return SelectionResult.MATCHED

        self._set_pending(column, pair_id)
        self.mismatch = True
        self._pending_clear = self.schedule(
            self.config.mismatch_delay_ms if self.config else 0,
            self._clear_selection,
        )
        return SelectionResult.MISMATCHED

    def _set_pending(self, column: Column, value: str | None) -> None:
        if column == Column.TERM:
            self.pending_term = value
        else:
            self.pending_definition = value

    def _clear_selection(self) -> None:
        self._pending_clear = None
        self.pending_term = None
        self.pending_definition = None
        self.mismatch = False

    def snapshot(self) -> MatchingView:
        return MatchingView(
            **self._view_fields(),
            terms=[
                MatchEntryView(
                    id=pair_id,
                    text=self.pairs[pair_id].term,
                    selected=pair_id == self.pending_term,
                    matched=pair_id in self.matched,
                )
                for pair_id in self.term_order
            ],
            definitions=[
                MatchEntryView(
                    id=pair_id,
                    text=self.pairs[pair_id].definition,
                    selected=pair_id == self.pending_definition,
                    matched=pair_id in self.matched,
                )
                for pair_id in self.definition_order
            ],
            pending_term=self.pending_term,
            pending_definition=self.pending_definition,
            matched_count=len(self.matched),
            pair_count=len(self.pairs),
            mismatch=self.mismatch,
        )
