"""Memory game: find the term and definition cards that belong together.

Each pair is exploded into a term card and a definition card that share the
pair id. The 2N-card deck is shuffled once and laid face down. The player
flips two cards per attempt; a matching pair stays face up as matched, any
other pair is turned back over. While an attempt resolves the board is
locked and further flips are ignored.
"""

from enum import Enum

from loguru import logger
from pydantic import BaseModel, ConfigDict

from games.base import EngineView, GameEngine, shuffled
from games.timers import ScheduledCall
from models import GameMode, PairItem, SessionPhase


class CardFace(str, Enum):
    TERM = "TERM"
    DEF = "DEF"


class MemoryCard(BaseModel):
    uid: str
    pair_id: str
    content: str
    face: CardFace
    is_flipped: bool = False
    is_matched: bool = False


class FlipResult(str, Enum):
    IGNORED = "ignored"
    FLIPPED = "flipped"
    MATCH = "match"
    MISMATCH = "mismatch"


class MemoryCardView(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int
    uid: str
    content: str | None  # None while the card is face down
    face: CardFace
    is_flipped: bool
    is_matched: bool


class MemoryView(EngineView):
    cards: list[MemoryCardView]
    moves: int
    processing: bool
    matched_pairs: int
    pair_count: int


def build_deck(items: tuple[PairItem, ...]) -> list[MemoryCard]:
    """Create a term card and a definition card for every pair."""
    deck = []
    for item in items:
        deck.append(
            MemoryCard(
                uid=f"{item.id}-term",
                pair_id=item.id,
                content=item.term,
                face=CardFace.TERM,
            )
        )
        deck.append(
            MemoryCard(
                uid=f"{item.id}-def",
                pair_id=item.id,
                content=item.definition,
                face=CardFace.DEF,
            )
        )
    return deck


class MemoryEngine(GameEngine[PairItem]):
    """Concealed-pair flip/reveal engine."""

    mode = GameMode.MEMORY

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.cards = shuffled(self.rng, build_deck(self.items))
        self.flipped: list[int] = []
        self.moves = 0
        self.processing = False
        self._pending_resolve: ScheduledCall | None = None

    @property
    def matched_pairs(self) -> int:
        return sum(1 for card in self.cards if card.is_matched) // 2

    @property
    def all_matched(self) -> bool:
        return all(card.is_matched for card in self.cards)

    def flip(self, index: int) -> FlipResult:
        """Turn a face-down card face up.

        The second card of an attempt locks the board until the pair is
        resolved as matched or turned back over.
        """
        if self.session.phase != SessionPhase.ACTIVE or self.processing:
            logger.debug("Ignoring flip of card {} while board is locked", index)
            return FlipResult.IGNORED
        if not 0 <= index < len(self.cards):
            return FlipResult.IGNORED
        card = self.cards[index]
        if card.is_matched or card.is_flipped:
            return FlipResult.IGNORED

        card.is_flipped = True
        self.flipped.append(index)
        if len(self.flipped) < 2:
            return FlipResult.FLIPPED

        self.processing = True
        self.moves += 1
        first, second = (self.cards[i] for i in self.flipped)
        if first.pair_id == second.pair_id:
            delay = self.config.match_delay_ms if self.config else 0
            self._pending_resolve = self.schedule(delay, self._resolve_match)
            return FlipResult.MATCH

        delay = self.config.mismatch_delay_ms if self.config else 0
        self._pending_resolve = self.schedule(delay, self._resolve_mismatch)
        return FlipResult.MISMATCH

    def _resolve_match(self) -> None:
        for index in self.flipped:
            self.cards[index].is_matched = True
        self._finish_attempt()
        if self.all_matched:
            logger.debug("Memory board cleared in {} moves", self.moves)
            self.session.complete_round(len(self.items))

    def _resolve_mismatch(self) -> None:
        for index in self.flipped:
            self.cards[index].is_flipped = False
        self._finish_attempt()

    def _finish_attempt(self) -> None:
        self._pending_resolve = None
        self.flipped = []
        self.processing = False

    def snapshot(self) -> MemoryView:
        return MemoryView(
            **self._view_fields(),
            cards=[
                MemoryCardView(
                    index=index,
                    uid=card.uid,
                    content=(
                        card.content if card.is_flipped or card.is_matched else None
                    ),
                    face=card.face,
                    is_flipped=card.is_flipped,
                    is_matched=card.is_matched,
                )
                for index, card in enumerate(self.cards)
            ],
            moves=self.moves,
            processing=self.processing,
            matched_pairs=self.matched_pairs,
            pair_count=len(self.items),
        )
