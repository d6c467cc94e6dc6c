# drag.py - drag/drop state machine between pointer input and the game
"""Drag and drop coordination.

Hosts translate raw pointer events into four calls:

* :meth:`DragCoordinator.begin_drag` on press over a card,
* :meth:`DragCoordinator.drag_over` on every pointer move, with whatever is
  under the pointer (a :class:`~crazy_solitaire.piles.PileRef`, a card or
  ``None``),
* :meth:`DragCoordinator.release` on button release, which commits to the
  hovered target when it accepts the lead card and cancels otherwise.

:meth:`commit_drop` and :meth:`cancel_drop` are also public so tests and
non-pointer hosts can drive the machine directly.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from crazy_solitaire.cards import Card
from crazy_solitaire.game import Game, PointerTarget
from crazy_solitaire.piles import DragSource, DropTarget

logger = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragCoordinator:
    def __init__(self, game: Game):
        self.game = game
        self.state = DragState.IDLE
        self.cards: List[Card] = []
        self.source: Optional[DragSource] = None
        self.source_index = 0
        self.hovered: Optional[DropTarget] = None

    @property
    def is_dragging(self) -> bool:
        return self.state is DragState.DRAGGING

    def is_dragging_card(self, card: Card) -> bool:
        return self.is_dragging and card in self.cards

    def begin_drag(self, card: Card) -> bool:
        if self.is_dragging:
            return False
        lifted = self.game.lift(card)
        if lifted is None:
            return False
        self.cards, self.source, self.source_index = lifted
        self.hovered = None
        self.state = DragState.DRAGGING
        return True

    def drag_over(self, pointer_target: PointerTarget) -> Optional[bool]:
        """Track the container under the pointer.

        Returns the hover feedback for the current target (``True`` if it
        would accept the drop, ``False`` if not) or ``None`` when the pointer
        is over nothing droppable.
        """
        if not self.is_dragging:
            return None
        target = self.game.find_drop_target(pointer_target)
        if target is self.source:
            target = None
        if target is not self.hovered:
            if self.hovered is not None:
                self.hovered.drag_ended()
            self.hovered = target
            if target is not None:
                target.hover = self.game.can_drop(target, self.cards)
        if self.hovered is None:
            return None
        return self.hovered.hover

    def end_drag(self) -> None:
        """Clear hover highlighting on every drop target."""
        self.game.clear_hover()

    def release(self) -> bool:
        if not self.is_dragging:
            return False
        target = self.hovered
        if target is not None and self.game.can_drop(target, self.cards):
            return self.commit_drop(target)
        self.cancel_drop()
        return False

    def commit_drop(self, target: DropTarget) -> bool:
        if not self.is_dragging:
            return False
        if target is self.source or not self.game.commit_move(self.cards, self.source, self.source_index, target):
            self.cancel_drop()
            return False
        self._reset()
        return True

    def cancel_drop(self) -> None:
        if not self.is_dragging:
            return
        self.game.restore_lift(self.cards, self.source, self.source_index)
        logger.debug("drag of %r cancelled", self.cards)
        self._reset()

    def _reset(self) -> None:
        self.end_drag()
        self.cards = []
        self.source = None
        self.source_index = 0
        self.hovered = None
        self.state = DragState.IDLE
