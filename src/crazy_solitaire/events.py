# events.py - notifications the engine sends to the presentation layer
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

from crazy_solitaire.cards import Card


class EventKind(Enum):
    CARD_FLIPPED = "card_flipped"
    MODE_TOGGLED = "mode_toggled"
    WIN_REACHED = "win_reached"
    STOCK_LEVEL_CHANGED = "stock_level_changed"
    LOSS_REACHED = "loss_reached"


@dataclass(frozen=True)
class GameEvent:
    kind: EventKind
    card: Optional[Card] = None
    value: Any = None


Listener = Callable[[GameEvent], None]


class EventBus:
    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def emit(self, kind: EventKind, *, card: Optional[Card] = None, value: Any = None) -> GameEvent:
        event = GameEvent(kind, card=card, value=value)
        for listener in list(self._listeners):
            listener(event)
        return event
