# piles.py - tableau columns, talon and foundations with their legality rules
"""Card containers.

Each container kind advertises what it can do through two capability
protocols rather than a shared base class: every container is a
:class:`DragSource`, only tableau columns and foundations are also a
:class:`DropTarget`.  Legality checks take the reverse-mode flag as an
argument, the containers themselves hold no game-wide state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Protocol, runtime_checkable

from crazy_solitaire.cards import Card, Deck, Rank, Suit, STANDARD_RANKS, suit_parity

logger = logging.getLogger(__name__)

STOCK = "stock"
TALON = "talon"
TABLEAU = "tableau"
FOUNDATION = "foundation"


@dataclass(frozen=True)
class PileRef:
    """Stable address of a container, safe to keep in history records."""

    kind: str
    index: int = 0

    def __str__(self):
        return f"{self.kind}[{self.index}]"


STOCK_REF = PileRef(STOCK)
TALON_REF = PileRef(TALON)


@runtime_checkable
class DragSource(Protocol):
    ref: PileRef
    cards: List[Card]

    def movable_cards(self) -> List[Card]: ...

    def remove(self, card: Card) -> bool: ...

    def insert(self, index: int, card: Card) -> None: ...


@runtime_checkable
class DropTarget(Protocol):
    ref: PileRef
    hover: Optional[bool]

    def can_accept(self, card: Card, reverse: bool = False) -> bool: ...

    def drop(self, card: Card) -> None: ...

    def drag_over(self, card: Card, reverse: bool = False) -> bool: ...

    def drag_ended(self) -> None: ...


def _top(cards: List[Card]) -> Optional[Card]:
    return cards[-1] if cards else None


class TableauColumn:
    """One of the seven build-down columns; face-down cards form a prefix."""

    def __init__(self, index: int):
        self.ref = PileRef(TABLEAU, index)
        self.cards: List[Card] = []
        # None when nothing is dragged over us, else the last can_accept answer
        self.hover: Optional[bool] = None

    def __len__(self):
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    @property
    def top(self) -> Optional[Card]:
        return _top(self.cards)

    def face_down_count(self) -> int:
        for i, c in enumerate(self.cards):
            if c.face_up:
                return i
        return len(self.cards)

    def is_well_formed(self) -> bool:
        n = self.face_down_count()
        return all(c.face_up for c in self.cards[n:])

    def movable_cards(self) -> List[Card]:
        return self.cards[self.face_down_count():]

    def run_from(self, card: Card) -> List[Card]:
        """Cards from ``card`` to the end of the column, empty if absent."""
        if card not in self.cards:
            return []
        return self.cards[self.cards.index(card):]

    def can_accept(self, card: Card, reverse: bool = False) -> bool:
        top = self.top
        if top is None:
            return card.is_wild or card.rank == (Rank.ACE if reverse else Rank.KING)
        if not top.face_up:
            return False
        if top.is_wild or card.is_wild:
            return True
        if suit_parity(top.suit) == suit_parity(card.suit):
            return False
        if reverse:
            return top.rank == card.rank - 1
        return top.rank == card.rank + 1

    def add(self, card: Card) -> None:
        self.cards.append(card)

    def drop(self, card: Card) -> None:
        self.add(card)

    def insert(self, index: int, card: Card) -> None:
        self.cards.insert(index, card)

    def remove(self, card: Card) -> bool:
        if card not in self.cards:
            logger.warning("%s: cannot remove %r, not in column", self.ref, card)
            return False
        self.cards.remove(card)
        return True

    def reverse_order(self) -> None:
        n = self.face_down_count()
        self.cards[n:] = self.cards[n:][::-1]

    def drag_over(self, card: Card, reverse: bool = False) -> bool:
        self.hover = self.can_accept(card, reverse)
        return self.hover

    def drag_ended(self) -> None:
        self.hover = None


class Talon:
    """Face-up waste pile fed from the stock; a drag source only."""

    def __init__(self):
        self.ref = TALON_REF
        self.cards: List[Card] = []

    def __len__(self):
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    @property
    def top(self) -> Optional[Card]:
        return _top(self.cards)

    def movable_cards(self) -> List[Card]:
        return [self.cards[-1]] if self.cards else []

    def add(self, card: Card) -> None:
        card.face_up = True
        self.cards.append(card)

    def insert(self, index: int, card: Card) -> None:
        self.cards.insert(index, card)

    def remove(self, card: Card) -> bool:
        if self.top is not card:
            logger.warning("talon: ignoring remove of %r, top is %r", card, self.top)
            return False
        self.cards.pop()
        return True

    def release_into_deck(self, deck: Deck) -> int:
        """Return every talon card to the deck, top card first."""
        count = len(self.cards)
        for c in reversed(self.cards):
            deck.release(c)
        self.cards.clear()
        return count


class FoundationPile:
    """Single-suit completion pile, Ace up (or King down in reverse mode)."""

    def __init__(self, suit: Suit):
        self.suit = Suit(suit)
        self.ref = PileRef(FOUNDATION, int(self.suit))
        self.cards: List[Card] = []
        self.hover: Optional[bool] = None

    def __len__(self):
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    @property
    def top(self) -> Optional[Card]:
        return _top(self.cards)

    def is_complete(self) -> bool:
        return len(self.cards) == len(STANDARD_RANKS)

    def movable_cards(self) -> List[Card]:
        return [self.cards[-1]] if self.cards else []

    def can_accept(self, card: Card, reverse: bool = False) -> bool:
        if card.is_wild or card.suit != self.suit:
            return False
        top = self.top
        if top is None:
            return card.rank == (Rank.KING if reverse else Rank.ACE)
        if reverse:
            return top.rank == card.rank + 1
        return top.rank == card.rank - 1

    def drop(self, card: Card) -> None:
        self.cards.append(card)

    def insert(self, index: int, card: Card) -> None:
        self.cards.insert(index, card)

    def remove(self, card: Card) -> bool:
        if self.top is not card:
            logger.warning("%s: ignoring remove of %r, top is %r", self.ref, card, self.top)
            return False
        self.cards.pop()
        return True

    def drag_over(self, card: Card, reverse: bool = False) -> bool:
        self.hover = self.can_accept(card, reverse)
        return self.hover

    def drag_ended(self) -> None:
        self.hover = None
