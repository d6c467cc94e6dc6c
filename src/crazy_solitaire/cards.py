# cards.py - card identities, the reverse trigger and the stock deck
from __future__ import annotations

import random
from collections import deque
from enum import IntEnum
from typing import Deque, Iterable, Iterator, List, NamedTuple, Optional


class Rank(IntEnum):
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    WILD = 14


class Suit(IntEnum):
    # Order matters: tableau colour alternation compares suit index parity.
    DIAMONDS = 0
    SPADES = 1
    HEARTS = 2
    CLUBS = 3
    BLACK_JOKER = 4
    RED_JOKER = 5


PLAYABLE_SUITS = (Suit.DIAMONDS, Suit.SPADES, Suit.HEARTS, Suit.CLUBS)
JOKER_SUITS = (Suit.BLACK_JOKER, Suit.RED_JOKER)
STANDARD_RANKS = tuple(r for r in Rank if r is not Rank.WILD)

DECK_SIZE = len(PLAYABLE_SUITS) * len(STANDARD_RANKS) + len(JOKER_SUITS)

RANK_TO_TEXT = {Rank.ACE: "A", Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K", Rank.WILD: "W"}
for _r in range(2, 11):
    RANK_TO_TEXT[Rank(_r)] = str(_r)

SUIT_TO_TEXT = {
    Suit.DIAMONDS: "♦",
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.CLUBS: "♣",
    Suit.BLACK_JOKER: "★",
    Suit.RED_JOKER: "★",
}


def is_red(suit: Suit) -> bool:
    return suit in (Suit.DIAMONDS, Suit.HEARTS, Suit.RED_JOKER)


def suit_parity(suit: Suit) -> int:
    return int(suit) % 2


class CardKey(NamedTuple):
    """Value identity of a card; unique across the 54-card deck."""

    rank: Rank
    suit: Suit


class Card:
    __slots__ = ("_rank", "_suit", "face_up", "is_reverse_trigger", "consumed")

    def __init__(self, rank: Rank, suit: Suit, face_up: bool = False, is_reverse_trigger: bool = False):
        rank, suit = Rank(rank), Suit(suit)
        if (rank is Rank.WILD) != (suit in JOKER_SUITS):
            raise ValueError(f"jokers pair only with the wild rank: {rank!r} of {suit!r}")
        self._rank = rank
        self._suit = suit
        self.face_up = face_up
        self.is_reverse_trigger = is_reverse_trigger
        self.consumed = False

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def key(self) -> CardKey:
        return CardKey(self._rank, self._suit)

    @property
    def is_wild(self) -> bool:
        return self._rank is Rank.WILD

    def flip(self) -> None:
        self.face_up = not self.face_up

    def face_key(self) -> str:
        """Name of the image shown for this card.

        Face-down cards show the back, a face-up reverse trigger shows its own
        back-like image, face-up jokers show only their suit and every other
        card shows rank and suit (``"queen_of_hearts"``, ``"7_of_clubs"``).
        """
        if not self.face_up:
            return "back"
        if self.is_reverse_trigger:
            return "reverse_back"
        suit_name = self._suit.name.lower()
        if self.is_wild:
            return suit_name
        if Rank.TWO <= self._rank <= Rank.TEN:
            rank_name = str(int(self._rank))
        else:
            rank_name = self._rank.name.lower()
        return f"{rank_name}_of_{suit_name}"

    def __repr__(self):
        mark = "*" if self.is_reverse_trigger else ""
        return f"{RANK_TO_TEXT[self._rank]}{SUIT_TO_TEXT[self._suit]}{mark}{'↑' if self.face_up else '↓'}"


def make_deck(rng: Optional[random.Random] = None) -> List[Card]:
    """Build the 52 standard cards plus two jokers, one of them the reverse trigger, shuffled."""
    rng = rng or random.Random()
    cards = [Card(rank, suit) for rank in STANDARD_RANKS for suit in PLAYABLE_SUITS]
    jokers = [Card(Rank.WILD, suit) for suit in JOKER_SUITS]
    rng.choice(jokers).is_reverse_trigger = True
    cards.extend(jokers)
    rng.shuffle(cards)
    return cards


class Deck:
    """Face-down pool of undealt cards; the stock draws from its front."""

    def __init__(self, cards: Iterable[Card] = ()):
        self.cards: Deque[Card] = deque(cards)
        for c in self.cards:
            c.face_up = False

    @classmethod
    def shuffled(cls, rng: Optional[random.Random] = None) -> "Deck":
        return cls(make_deck(rng))

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __contains__(self, card) -> bool:
        return any(c is card for c in self.cards)

    def is_empty(self) -> bool:
        return not self.cards

    def acquire(self) -> Optional[Card]:
        return self.cards.popleft() if self.cards else None

    def release(self, card: Card) -> None:
        card.face_up = False
        self.cards.append(card)

    def restore_front(self, cards: List[Card]) -> None:
        # Inverse of acquiring ``cards`` in order.
        for c in reversed(cards):
            c.face_up = False
            self.cards.appendleft(c)
