# mechanics.py - presentation-only timers and the loss explosion
import random
from typing import List, Optional, Tuple

import pygame

from crazy_solitaire import render as R
from crazy_solitaire.cards import Card

SPEED = 6
MORE_SPEED = 10

EXPLODE_VECTORS: Tuple[Tuple[int, int], ...] = (
    (0, SPEED), (0, -SPEED),
    (SPEED, 0), (-SPEED, 0),
    (SPEED, SPEED), (-SPEED, SPEED),
    (SPEED, -SPEED), (-SPEED, -SPEED),
    (SPEED, MORE_SPEED), (-SPEED, MORE_SPEED),
    (SPEED, -MORE_SPEED), (-SPEED, -MORE_SPEED),
    (MORE_SPEED, SPEED), (-MORE_SPEED, SPEED),
    (MORE_SPEED, -SPEED), (-MORE_SPEED, -SPEED),
)


def format_elapsed(ms: int) -> str:
    total_seconds = max(0, int(ms)) // 1000
    return f"{total_seconds // 60}:{total_seconds % 60:02d}"


class ElapsedClock:
    """Play timer driven by pygame ticks; freezes once stopped."""

    def __init__(self, now_ms: int = 0):
        self.restart(now_ms)

    def restart(self, now_ms: int) -> None:
        self._start = now_ms
        self._stopped_at: Optional[int] = None

    def stop(self, now_ms: int) -> None:
        if self._stopped_at is None:
            self._stopped_at = now_ms

    @property
    def running(self) -> bool:
        return self._stopped_at is None

    def elapsed_ms(self, now_ms: int) -> int:
        end = now_ms if self._stopped_at is None else self._stopped_at
        return end - self._start

    def label(self, now_ms: int) -> str:
        return format_elapsed(self.elapsed_ms(now_ms))


class ExplosionAnimator:
    """
    Scatter every card on the table when the game is lost.
    Each card keeps one of EXPLODE_VECTORS for the whole animation and moves
    by it once per tick. Touches screen positions only, never the piles.
    """

    def __init__(self, interval_ms: int = 25, rng: Optional[random.Random] = None):
        self.interval_ms = interval_ms
        self.active = False
        self._rng = rng or random.Random()
        self._sprites: List[List] = []  # [card, x, y, dx, dy]
        self._last_ms = 0

    def start(self, placed: List[Tuple[Card, int, int]], now_ms: int = 0) -> None:
        self._sprites = []
        for card, x, y in placed:
            dx, dy = self._rng.choice(EXPLODE_VECTORS)
            self._sprites.append([card, x, y, dx, dy])
        self._last_ms = now_ms
        self.active = True

    def positions(self) -> List[Tuple[Card, int, int]]:
        return [(s[0], s[1], s[2]) for s in self._sprites]

    def update(self, now_ms: int) -> int:
        """Advance by every whole tick since the last update; returns ticks applied."""
        if not self.active:
            return 0
        ticks = (now_ms - self._last_ms) // self.interval_ms
        if ticks <= 0:
            return 0
        self._last_ms += ticks * self.interval_ms
        for s in self._sprites:
            s[1] += s[3] * ticks
            s[2] += s[4] * ticks
        return ticks

    def draw(self, surface: pygame.Surface) -> None:
        for card, x, y, _dx, _dy in self._sprites:
            surface.blit(R.get_card_surface(card), (x, y))
