# ui.py - right-aligned action bar drawn in the top strip
import pygame
from typing import Callable, List, Optional, Tuple

BUTTON_H = 32
PAD_X = 14
GAP = 8
MARGIN_RIGHT = 16

FILL = (230, 230, 235)
FILL_DISABLED = (120, 120, 128)
OUTLINE = (160, 160, 170)
LABEL = (30, 30, 35)

_FONT = None


def _font():
    global _FONT
    if _FONT is None:
        _FONT = pygame.font.SysFont("Segoe UI", 18)
    return _FONT


class Action:
    __slots__ = ("label", "callback", "enabled", "rect")

    def __init__(self, label: str, callback: Callable[[], None], enabled: Optional[Callable[[], bool]] = None):
        self.label = label
        self.callback = callback
        self.enabled = enabled
        self.rect = pygame.Rect(0, 0, _font().size(label)[0] + PAD_X * 2, BUTTON_H)

    def is_enabled(self) -> bool:
        return self.enabled is None or bool(self.enabled())


class ActionBar:
    """Buttons laid out right to left from the window edge, vertically centred in a bar."""

    def __init__(self, actions: List[Tuple[str, Callable[[], None], Optional[Callable[[], bool]]]]):
        self.actions = [Action(label, cb, enabled) for label, cb, enabled in actions]

    def layout(self, width: int, bar_height: int) -> None:
        x = width - MARGIN_RIGHT
        y = (bar_height - BUTTON_H) // 2
        for action in reversed(self.actions):
            x -= action.rect.width
            action.rect.topleft = (x, y)
            x -= GAP

    def action_at(self, pos) -> Optional[Action]:
        return next((a for a in self.actions if a.rect.collidepoint(pos)), None)

    def handle_event(self, event) -> bool:
        """Run the clicked action; True if the click landed on the bar."""
        if event.type != pygame.MOUSEBUTTONDOWN or event.button != 1:
            return False
        action = self.action_at(event.pos)
        if action is None:
            return False
        if action.is_enabled():
            action.callback()
        return True

    def draw(self, surface: pygame.Surface) -> None:
        for action in self.actions:
            on = action.is_enabled()
            pygame.draw.rect(surface, FILL if on else FILL_DISABLED, action.rect, border_radius=6)
            pygame.draw.rect(surface, OUTLINE, action.rect, width=1, border_radius=6)
            text = _font().render(action.label, True, LABEL)
            surface.blit(text, text.get_rect(center=action.rect.center))
