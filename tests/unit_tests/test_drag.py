from collections import Counter

from crazy_solitaire.cards import CardKey, Rank, Suit
from crazy_solitaire.config import GameConfig
from crazy_solitaire.drag import DragCoordinator, DragState
from crazy_solitaire.game import Game
from crazy_solitaire.piles import PileRef, TABLEAU


def setup_board():
    """Column 0: [4C down, 9S up, 8D up]; column 1: [10H up]; column 2 empty."""
    game = Game(GameConfig(seed=2))
    for col in game.tableau:
        col.cards.clear()
    game.deck.cards.clear()
    cards = {}
    for column, specs in ((0, [(Rank.FOUR, Suit.CLUBS, False), (Rank.NINE, Suit.SPADES, True), (Rank.EIGHT, Suit.DIAMONDS, True)]),
                          (1, [(Rank.TEN, Suit.HEARTS, True)])):
        for rank, suit, face_up in specs:
            c = game.card(CardKey(rank, suit))
            c.face_up = face_up
            game.tableau[column].add(c)
            cards[(rank, suit)] = c
    return game, DragCoordinator(game), cards


def test_begin_drag_lifts_run_from_clicked_card():
    game, drag, cards = setup_board()
    nine = cards[(Rank.NINE, Suit.SPADES)]
    eight = cards[(Rank.EIGHT, Suit.DIAMONDS)]
    assert drag.begin_drag(nine)
    assert drag.state is DragState.DRAGGING
    assert drag.cards == [nine, eight]
    assert drag.source is game.tableau[0]
    assert game.in_flight == [nine, eight]
    assert game.tableau[0].cards == [cards[(Rank.FOUR, Suit.CLUBS)]]
    assert drag.is_dragging_card(eight)


def test_only_one_drag_at_a_time():
    game, drag, cards = setup_board()
    assert drag.begin_drag(cards[(Rank.EIGHT, Suit.DIAMONDS)])
    assert not drag.begin_drag(cards[(Rank.TEN, Suit.HEARTS)])
    assert drag.cards == [cards[(Rank.EIGHT, Suit.DIAMONDS)]]


def test_face_down_card_cannot_be_lifted():
    game, drag, cards = setup_board()
    assert not drag.begin_drag(cards[(Rank.FOUR, Suit.CLUBS)])
    assert drag.state is DragState.IDLE


def test_hover_feedback_follows_pointer():
    game, drag, cards = setup_board()
    drag.begin_drag(cards[(Rank.NINE, Suit.SPADES)])
    col1, col2 = game.tableau[1], game.tableau[2]

    assert drag.drag_over(PileRef(TABLEAU, 1)) is True
    assert col1.hover is True
    # pointing at a card resolves to its column
    assert drag.drag_over(cards[(Rank.TEN, Suit.HEARTS)]) is True

    assert drag.drag_over(PileRef(TABLEAU, 2)) is False
    assert col1.hover is None
    assert col2.hover is False

    assert drag.drag_over(None) is None
    assert col2.hover is None


def test_dragged_cards_and_source_are_not_targets():
    game, drag, cards = setup_board()
    drag.begin_drag(cards[(Rank.NINE, Suit.SPADES)])
    assert drag.drag_over(cards[(Rank.EIGHT, Suit.DIAMONDS)]) is None
    assert drag.drag_over(PileRef(TABLEAU, 0)) is None
    assert drag.hovered is None


def test_release_over_valid_target_commits_one_undoable_move():
    game, drag, cards = setup_board()
    four = cards[(Rank.FOUR, Suit.CLUBS)]
    drag.begin_drag(cards[(Rank.NINE, Suit.SPADES)])
    drag.drag_over(PileRef(TABLEAU, 1))
    assert drag.release()
    assert drag.state is DragState.IDLE
    assert [c.key for c in game.tableau[1]] == [
        CardKey(Rank.TEN, Suit.HEARTS), CardKey(Rank.NINE, Suit.SPADES), CardKey(Rank.EIGHT, Suit.DIAMONDS)
    ]
    assert four.face_up
    assert len(game.history) == 1
    assert game.in_flight == []
    assert all(t.hover is None for t in game.drop_targets())

    assert game.undo()
    assert game.tableau[0].cards == [four, cards[(Rank.NINE, Suit.SPADES)], cards[(Rank.EIGHT, Suit.DIAMONDS)]]
    assert not four.face_up


def test_release_without_valid_target_restores_order():
    game, drag, cards = setup_board()
    before = list(game.tableau[0].cards)
    drag.begin_drag(cards[(Rank.NINE, Suit.SPADES)])
    drag.drag_over(PileRef(TABLEAU, 2))
    assert not drag.release()
    assert game.tableau[0].cards == before
    assert drag.state is DragState.IDLE
    assert game.history.peek() is None
    assert all(t.hover is None for t in game.drop_targets())


def test_release_over_nothing_cancels():
    game, drag, cards = setup_board()
    drag.begin_drag(cards[(Rank.TEN, Suit.HEARTS)])
    assert not drag.release()
    assert game.tableau[1].cards == [cards[(Rank.TEN, Suit.HEARTS)]]


def test_commit_drop_directly():
    game, drag, cards = setup_board()
    drag.begin_drag(cards[(Rank.EIGHT, Suit.DIAMONDS)])
    assert not drag.commit_drop(game.tableau[2])
    assert drag.state is DragState.IDLE
    assert game.tableau[0].top is cards[(Rank.EIGHT, Suit.DIAMONDS)]


def test_cards_conserved_during_drag():
    game = Game(GameConfig(seed=9))
    drag = DragCoordinator(game)
    col = game.tableau[6]
    assert drag.begin_drag(col.top)
    counts = Counter(c.key for c in game.accounted_cards())
    assert len(counts) == 54 and set(counts.values()) == {1}
    drag.cancel_drop()
    counts = Counter(c.key for c in game.accounted_cards())
    assert len(counts) == 54 and set(counts.values()) == {1}
    assert col.is_well_formed()


def test_stock_and_undo_blocked_while_dragging():
    game, drag, cards = setup_board()
    game.record_move([], game.tableau[0], game.tableau[0])
    drag.begin_drag(cards[(Rank.TEN, Suit.HEARTS)])
    assert not game.click_stock()
    assert not game.can_undo()
    drag.cancel_drop()
    assert game.can_undo()
