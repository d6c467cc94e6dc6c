# game.py - deal, moves, undo, reverse mode and stock escalation
"""The game orchestrator.

A :class:`Game` is the explicit context for one session: it owns the deck,
talon, tableau columns, foundations, the reverse-mode flag, the stock reload
counter and the move history.  Presentation code never touches containers
directly; it asks the game (or a :class:`~crazy_solitaire.drag.DragCoordinator`
bound to it) and listens to :attr:`Game.events`.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Dict, Iterator, List, NamedTuple, Optional, Sequence, Union

from crazy_solitaire.cards import Card, CardKey, Deck, PLAYABLE_SUITS, Suit
from crazy_solitaire.config import GameConfig
from crazy_solitaire.events import EventBus, EventKind
from crazy_solitaire.history import MoveHistory, MoveRecord
from crazy_solitaire.piles import (
    FOUNDATION,
    STOCK_REF,
    TABLEAU,
    TALON_REF,
    DragSource,
    DropTarget,
    FoundationPile,
    PileRef,
    TableauColumn,
    Talon,
)

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class Lift(NamedTuple):
    cards: List[Card]
    source: DragSource
    source_index: int


PointerTarget = Union[PileRef, Card, None]


class Game:
    def __init__(self, config: Optional[GameConfig] = None, events: Optional[EventBus] = None, deck: Optional[Deck] = None):
        self.config = config or GameConfig()
        self.events = events or EventBus()
        self.history = MoveHistory()
        self._rng = random.Random(self.config.seed)
        self.new_game(deck)

    # ---------- Setup ----------
    def new_game(self, deck: Optional[Deck] = None) -> None:
        """Reset every container and deal a fresh triangular tableau."""
        self.deck = deck if deck is not None else Deck.shuffled(self._rng)
        self.talon = Talon()
        self.tableau = [TableauColumn(i) for i in range(self.config.tableau_columns)]
        self.foundations: Dict[Suit, FoundationPile] = {suit: FoundationPile(suit) for suit in PLAYABLE_SUITS}
        self.reverse_mode = False
        self.stock_reload_count = 0
        self.status = GameStatus.PLAYING
        self.in_flight: List[Card] = []
        self.consumed: List[Card] = []
        self.history.clear()
        self._cards: Dict[CardKey, Card] = {c.key: c for c in self.deck}

        for i, column in enumerate(self.tableau):
            for j in range(i + 1):
                c = self.deck.acquire()
                if c is None:
                    break
                c.face_up = (j == i)
                column.add(c)
        logger.debug("dealt %d columns, %d cards left in stock", len(self.tableau), len(self.deck))

    # ---------- Lookups ----------
    @property
    def is_frozen(self) -> bool:
        return self.status is not GameStatus.PLAYING

    @property
    def reverse_trigger(self) -> Optional[Card]:
        for c in self._cards.values():
            if c.is_reverse_trigger:
                return c
        return None

    @property
    def stock_level(self) -> int:
        return min(self.stock_reload_count, self.config.max_stock_reloads)

    def card(self, key: CardKey) -> Card:
        return self._cards[key]

    def sources(self) -> Iterator[DragSource]:
        yield self.talon
        yield from self.foundations.values()
        yield from self.tableau

    def drop_targets(self) -> Iterator[DropTarget]:
        yield from self.foundations.values()
        yield from self.tableau

    def pile(self, ref: PileRef):
        """Resolve a :class:`PileRef`; raises ``KeyError`` for unknown refs."""
        if ref == STOCK_REF:
            return self.deck
        if ref == TALON_REF:
            return self.talon
        if ref.kind == TABLEAU and 0 <= ref.index < len(self.tableau):
            return self.tableau[ref.index]
        if ref.kind == FOUNDATION:
            for f in self.foundations.values():
                if f.ref == ref:
                    return f
        raise KeyError(f"Unknown pile: {ref}")

    def _as_ref(self, pile) -> PileRef:
        if isinstance(pile, PileRef):
            return pile
        if pile is self.deck:
            return STOCK_REF
        return pile.ref

    def is_movable(self, card: Card) -> bool:
        return any(card in src.movable_cards() for src in self.sources())

    def find_container_of(self, card: Card) -> Optional[DragSource]:
        for src in self.sources():
            if card in src.cards:
                return src
        return None

    def find_drop_target(self, target: PointerTarget) -> Optional[DropTarget]:
        """Resolve whatever is under the pointer to a drop-capable container."""
        if target is None:
            return None
        if isinstance(target, Card):
            if target in self.in_flight:
                return None
            container = self.find_container_of(target)
        else:
            container = self.pile(target)
        return container if isinstance(container, DropTarget) else None

    def clear_hover(self) -> None:
        for target in self.drop_targets():
            target.drag_ended()

    def has_won(self) -> bool:
        return all(f.is_complete() for f in self.foundations.values())

    def can_undo(self) -> bool:
        return not self.is_frozen and not self.in_flight and self.history.can_undo()

    def cards_in_play(self) -> List[Card]:
        """Cards on the table (foundations, tableau, talon), the ones the loss animation scatters."""
        out: List[Card] = []
        for f in self.foundations.values():
            out.extend(f.cards)
        for column in self.tableau:
            out.extend(column.cards)
        out.extend(self.talon.cards)
        return out

    def accounted_cards(self) -> List[Card]:
        """Every card still in the game, wherever it is; consumed cards excluded."""
        return list(self.deck) + self.cards_in_play() + list(self.in_flight)

    # ---------- Moves ----------
    def lift(self, card: Card) -> Optional[Lift]:
        """Take ``card`` (and, in a tableau column, everything above it) into flight."""
        if self.is_frozen or self.in_flight or not self.is_movable(card):
            return None
        source = self.find_container_of(card)
        if source is None:
            return None
        if isinstance(source, TableauColumn):
            cards = source.run_from(card)
        else:
            cards = [card]
        index = source.cards.index(card)
        for c in cards:
            source.remove(c)
        self.in_flight = list(cards)
        logger.debug("lifted %r from %s", cards, source.ref)
        return Lift(list(cards), source, index)

    def can_drop(self, target: DropTarget, cards: Sequence[Card]) -> bool:
        if not cards:
            return False
        if isinstance(target, FoundationPile) and len(cards) != 1:
            return False
        return target.can_accept(cards[0], self.reverse_mode)

    def commit_move(self, cards: Sequence[Card], source: DragSource, source_index: int, target: DropTarget) -> bool:
        if self.is_frozen or not cards or not self.can_drop(target, cards):
            return False
        for c in cards:
            target.drop(c)
        self.in_flight = []
        flipped = self._reveal_top(source)
        self.record_move(cards, source, target, flipped, source_index=source_index)
        logger.debug("moved %r from %s to %s", list(cards), source.ref, target.ref)
        self._check_win()
        return True

    def restore_lift(self, cards: Sequence[Card], source: DragSource, source_index: int) -> None:
        for i, c in enumerate(cards):
            source.insert(source_index + i, c)
        self.in_flight = []

    def move(self, card: Card, target: Union[PileRef, DropTarget]) -> bool:
        """Lift ``card`` and drop it on ``target`` in one step, if legal."""
        if isinstance(target, PileRef):
            target = self.find_drop_target(target)
        if target is None:
            return False
        lifted = self.lift(card)
        if lifted is None:
            return False
        if lifted.source is target or not self.commit_move(lifted.cards, lifted.source, lifted.source_index, target):
            self.restore_lift(*lifted)
            return False
        return True

    def record_move(self, cards: Sequence[Card], source, dest, flipped: Optional[Card] = None, *, source_index: Optional[int] = None) -> MoveRecord:
        """Push a history entry for a move that has already happened."""
        if source_index is None:
            source_index = 0 if source is self.deck or source == STOCK_REF else len(self.pile(self._as_ref(source)).cards)
        record = MoveRecord(
            cards=tuple(c.key for c in cards),
            source=self._as_ref(source),
            dest=self._as_ref(dest),
            source_index=source_index,
            flipped=flipped.key if flipped is not None else None,
        )
        self.history.push(record)
        return record

    def _reveal_top(self, source) -> Optional[Card]:
        if not isinstance(source, TableauColumn):
            return None
        top = source.top
        if top is None or top.face_up:
            return None
        top.face_up = True
        self.events.emit(EventKind.CARD_FLIPPED, card=top, value=True)
        return top

    def flip_over(self, card: Card) -> bool:
        """Turn a face-down card face-up when it is the top of a tableau column."""
        if self.is_frozen or card.face_up:
            return False
        for column in self.tableau:
            if column.top is card:
                card.face_up = True
                self.record_move((), column, column, card, source_index=len(column.cards))
                self.events.emit(EventKind.CARD_FLIPPED, card=card, value=True)
                return True
        return False

    def undo(self) -> bool:
        if not self.can_undo():
            return False
        record = self.history.pop()
        cards = [self._cards[k] for k in record.cards]
        if record.flipped is not None:
            flipped = self._cards[record.flipped]
            flipped.face_up = False
            self.events.emit(EventKind.CARD_FLIPPED, card=flipped, value=False)
        dest = self.pile(record.dest)
        for c in reversed(cards):
            dest.remove(c)
        if record.source == STOCK_REF:
            self.deck.restore_front(cards)
        else:
            source = self.pile(record.source)
            for i, c in enumerate(cards):
                source.insert(record.source_index + i, c)
        logger.debug("undid move of %r from %s to %s", cards, record.source, record.dest)
        return True

    # ---------- Stock ----------
    def click_stock(self) -> bool:
        """Draw from the stock, or reload it from the talon when it is empty."""
        if self.is_frozen or self.in_flight:
            return False
        if not self.deck.is_empty():
            return bool(self.draw_from_stock())
        return self.reload_stock()

    def draw_from_stock(self) -> List[Card]:
        drawn: List[Card] = []
        for _ in range(self.config.draw_count):
            c = self.deck.acquire()
            if c is None:
                break
            self.talon.add(c)
            drawn.append(c)
        if drawn:
            self.record_move(drawn, STOCK_REF, TALON_REF, source_index=0)
            logger.debug("drew %r", drawn)
        return drawn

    def reload_stock(self) -> bool:
        self.stock_reload_count += 1
        if self.stock_reload_count > self.config.max_stock_reloads:
            self.status = GameStatus.LOST
            logger.info("stock reloaded %d times, game lost", self.stock_reload_count - 1)
            self.events.emit(EventKind.LOSS_REACHED, value=True)
            return True
        released = self.talon.release_into_deck(self.deck)
        self.history.clear()
        logger.info("stock reload %d/%d, %d cards recycled", self.stock_reload_count, self.config.max_stock_reloads, released)
        self.events.emit(EventKind.STOCK_LEVEL_CHANGED, value=self.stock_level)
        return True

    # ---------- Reverse mode ----------
    def toggle_reverse_mode(self) -> bool:
        if self.is_frozen:
            return False
        self.reverse_mode = not self.reverse_mode
        for column in self.tableau:
            column.reverse_order()
        # Recorded slots and run orders no longer match the columns.
        self.history.clear()
        logger.info("reverse mode %s", "on" if self.reverse_mode else "off")
        self.events.emit(EventKind.MODE_TOGGLED, value=self.reverse_mode)
        return True

    def activate_reverse_trigger(self, card: Card) -> bool:
        """Play the face-up reverse trigger: flip the rules and take the card out of the game."""
        if self.is_frozen or self.in_flight:
            return False
        if not card.is_reverse_trigger or card.consumed or not card.face_up:
            return False
        container = self.find_container_of(card)
        if container is None:
            return False
        self.toggle_reverse_mode()
        container.cards.remove(card)
        card.consumed = True
        self.consumed.append(card)
        self._reveal_top(container)
        return True

    def _check_win(self) -> None:
        if self.has_won():
            self.status = GameStatus.WON
            logger.info("all foundations complete, game won")
            self.events.emit(EventKind.WIN_REACHED, value=True)
