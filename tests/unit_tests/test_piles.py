import pytest

from crazy_solitaire.cards import Card, Deck, Rank, Suit, STANDARD_RANKS
from crazy_solitaire.piles import DragSource, DropTarget, FoundationPile, TableauColumn, Talon


def up(rank, suit):
    return Card(rank, suit, face_up=True)


def down(rank, suit):
    return Card(rank, suit, face_up=False)


def column_with(*cards):
    col = TableauColumn(0)
    for c in cards:
        col.add(c)
    return col


WILD = Card(Rank.WILD, Suit.BLACK_JOKER, face_up=True)


@pytest.mark.parametrize(
    "card, reverse, expected",
    [
        (up(Rank.KING, Suit.SPADES), False, True),
        (up(Rank.QUEEN, Suit.SPADES), False, False),
        (WILD, False, True),
        (up(Rank.ACE, Suit.HEARTS), True, True),
        (up(Rank.KING, Suit.HEARTS), True, False),
        (WILD, True, True),
    ],
)
def test_empty_column_acceptance(card, reverse, expected):
    assert TableauColumn(0).can_accept(card, reverse) is expected


@pytest.mark.parametrize(
    "top, card, reverse, expected",
    [
        (up(Rank.NINE, Suit.SPADES), up(Rank.EIGHT, Suit.DIAMONDS), False, True),
        (up(Rank.NINE, Suit.SPADES), up(Rank.EIGHT, Suit.HEARTS), False, True),
        (up(Rank.NINE, Suit.SPADES), up(Rank.EIGHT, Suit.CLUBS), False, False),
        (up(Rank.NINE, Suit.SPADES), up(Rank.SEVEN, Suit.DIAMONDS), False, False),
        (up(Rank.NINE, Suit.SPADES), up(Rank.TEN, Suit.DIAMONDS), False, False),
        (up(Rank.EIGHT, Suit.DIAMONDS), up(Rank.NINE, Suit.SPADES), True, True),
        (up(Rank.EIGHT, Suit.DIAMONDS), up(Rank.SEVEN, Suit.SPADES), True, False),
        (up(Rank.EIGHT, Suit.DIAMONDS), up(Rank.NINE, Suit.HEARTS), True, False),
        (WILD, up(Rank.TWO, Suit.CLUBS), False, True),
        (up(Rank.TWO, Suit.CLUBS), WILD, False, True),
        (down(Rank.NINE, Suit.SPADES), up(Rank.EIGHT, Suit.DIAMONDS), False, False),
    ],
)
def test_column_acceptance(top, card, reverse, expected):
    assert column_with(top).can_accept(card, reverse) is expected


def _alternating_suit(i):
    return (Suit.SPADES, Suit.HEARTS)[i % 2]


def test_full_run_legal_in_both_directions():
    normal = [up(rank, _alternating_suit(i)) for i, rank in enumerate(reversed(STANDARD_RANKS))]
    col = TableauColumn(0)
    for c in normal:
        assert col.can_accept(c, reverse=False)
        col.drop(c)

    reversed_run = [up(rank, _alternating_suit(i)) for i, rank in enumerate(STANDARD_RANKS)]
    col = TableauColumn(1)
    for c in reversed_run:
        assert col.can_accept(c, reverse=True)
        col.drop(c)

    f = FoundationPile(Suit.CLUBS)
    for rank in STANDARD_RANKS:
        c = up(rank, Suit.CLUBS)
        assert f.can_accept(c, reverse=False)
        f.drop(c)
    assert f.is_complete()

    f = FoundationPile(Suit.CLUBS)
    for rank in reversed(STANDARD_RANKS):
        c = up(rank, Suit.CLUBS)
        assert f.can_accept(c, reverse=True)
        f.drop(c)
    assert f.is_complete()


def test_movable_cards_is_face_up_suffix():
    a, b, c = down(Rank.TWO, Suit.CLUBS), up(Rank.NINE, Suit.SPADES), up(Rank.EIGHT, Suit.DIAMONDS)
    col = column_with(a, b, c)
    assert col.movable_cards() == [b, c]
    assert col.run_from(c) == [c]
    assert col.run_from(a) == [a, b, c]
    assert column_with(down(Rank.TWO, Suit.CLUBS)).movable_cards() == []
    assert TableauColumn(0).movable_cards() == []


def test_reverse_order_flips_only_face_up_suffix():
    two_c, five_d = down(Rank.TWO, Suit.CLUBS), down(Rank.FIVE, Suit.DIAMONDS)
    nine_s, eight_d = up(Rank.NINE, Suit.SPADES), up(Rank.EIGHT, Suit.DIAMONDS)
    col = column_with(two_c, five_d, nine_s, eight_d)
    col.reverse_order()
    assert col.cards == [two_c, five_d, eight_d, nine_s]
    assert col.is_well_formed()


def test_reverse_order_without_face_up_cards_is_noop():
    cards = [down(Rank.TWO, Suit.CLUBS), down(Rank.FIVE, Suit.DIAMONDS)]
    col = column_with(*cards)
    col.reverse_order()
    assert col.cards == cards


def test_hover_feedback_and_drag_ended():
    col = TableauColumn(0)
    assert col.drag_over(up(Rank.KING, Suit.HEARTS)) is True
    assert col.hover is True
    assert col.drag_over(up(Rank.QUEEN, Suit.HEARTS)) is False
    col.drag_ended()
    assert col.hover is None


def test_hearts_foundation_scenario():
    f = FoundationPile(Suit.HEARTS)
    for rank in (Rank.ACE, Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE):
        f.drop(up(rank, Suit.HEARTS))
    assert f.can_accept(up(Rank.SIX, Suit.HEARTS))
    assert not f.can_accept(up(Rank.SIX, Suit.DIAMONDS))
    assert not f.can_accept(up(Rank.SEVEN, Suit.HEARTS))
    assert f.can_accept(up(Rank.FOUR, Suit.HEARTS), reverse=True)


def test_foundation_base_rank_and_wild_rejection():
    f = FoundationPile(Suit.SPADES)
    assert f.can_accept(up(Rank.ACE, Suit.SPADES))
    assert not f.can_accept(up(Rank.KING, Suit.SPADES))
    assert f.can_accept(up(Rank.KING, Suit.SPADES), reverse=True)
    assert not f.can_accept(WILD)
    assert not f.can_accept(WILD, reverse=True)


def test_foundation_remove_only_top():
    f = FoundationPile(Suit.SPADES)
    ace, two = up(Rank.ACE, Suit.SPADES), up(Rank.TWO, Suit.SPADES)
    f.drop(ace)
    f.drop(two)
    assert not f.remove(ace)
    assert f.cards == [ace, two]
    assert f.remove(two)
    assert f.movable_cards() == [ace]


def test_talon_only_top_is_movable_and_removable():
    talon = Talon()
    a, b = down(Rank.ACE, Suit.CLUBS), down(Rank.TWO, Suit.CLUBS)
    talon.add(a)
    talon.add(b)
    assert a.face_up and b.face_up
    assert talon.movable_cards() == [b]
    assert not talon.remove(a)
    assert talon.cards == [a, b]
    assert talon.remove(b)
    assert talon.cards == [a]


def test_talon_release_into_deck_top_first_and_face_down():
    talon = Talon()
    a, b, c = down(Rank.ACE, Suit.CLUBS), down(Rank.TWO, Suit.CLUBS), down(Rank.THREE, Suit.CLUBS)
    for card in (a, b, c):
        talon.add(card)
    deck = Deck()
    assert talon.release_into_deck(deck) == 3
    assert len(talon) == 0
    assert list(deck) == [c, b, a]
    assert not any(card.face_up for card in deck)


def test_capabilities():
    assert isinstance(Talon(), DragSource)
    assert not isinstance(Talon(), DropTarget)
    assert isinstance(TableauColumn(0), DropTarget)
    assert isinstance(FoundationPile(Suit.HEARTS), DropTarget)
    assert isinstance(FoundationPile(Suit.HEARTS), DragSource)
