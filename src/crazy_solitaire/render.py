# render.py - card surfaces and pile views for the pygame front end
import pygame
from typing import List, Optional, Tuple

from crazy_solitaire import config
from crazy_solitaire.cards import Card, RANK_TO_TEXT, Suit, is_red
from crazy_solitaire.piles import PileRef

# ---------- Configuration ----------
SCREEN_W, SCREEN_H = 1280, 800
TABLE_BG = (2, 100, 40)
TOP_BAR_H = 60


def _size_to_dims(size_name: str):
    size_name = (size_name or "Medium").capitalize()
    if size_name == "Small":
        return 75, 105
    if size_name == "Large":
        return 150, 210
    return 100, 140


CARD_W, CARD_H = _size_to_dims(config.get_current_settings().get("card_size", "Medium"))
CARD_RADIUS = 10
CARD_GAP_X = 18
FAN_Y = 28
TALON_FAN_X = 20

# Colors
BLACK = (20, 20, 20)
WHITE = (245, 245, 245)
RED = (200, 20, 20)
GOLD = (230, 190, 80)
LIGHT = (220, 220, 220)
HOVER_OK = (40, 200, 80)
HOVER_BAD = (220, 50, 50)

BACK_COLORS = {
    "Green": (30, 120, 60),
    "Blue": (34, 96, 200),
    "Orange": (230, 130, 30),
    "Red": (180, 30, 30),
}
# Stock back colour per reload warning level
STOCK_LEVEL_COLORS = {0: "Green", 1: "Green", 2: "Orange", 3: "Red"}
REVERSE_BACK = (90, 20, 90)

# Fonts are initialized via setup_fonts() AFTER pygame.init()
FONT_SMALL = None
FONT_UI = None
FONT_CORNER_RANK = None
FONT_CENTER = None


def setup_fonts():
    global FONT_SMALL, FONT_UI, FONT_CORNER_RANK, FONT_CENTER
    name = pygame.font.get_default_font()
    FONT_SMALL = pygame.font.SysFont(name, 20, bold=True)
    FONT_UI = pygame.font.SysFont(name, 26, bold=True)
    FONT_CORNER_RANK = pygame.font.SysFont(name, 28, bold=True)
    FONT_CENTER = pygame.font.SysFont(name, 40, bold=True)


def apply_card_settings(size_name: str = None):
    global CARD_W, CARD_H
    if size_name is not None:
        CARD_W, CARD_H = _size_to_dims(size_name)
    invalidate_card_caches()


_card_face_cache = {}
_card_back_cache = {}


def invalidate_card_caches():
    global _card_face_cache, _card_back_cache
    _card_face_cache = {}
    _card_back_cache = {}


def draw_suit_shape(surface, center, suit, color, size=42):
    x, y = center
    if suit == Suit.DIAMONDS:
        half = size//2
        points = [(x, y - half), (x + half, y), (x, y + half), (x - half, y)]
        pygame.draw.polygon(surface, color, points)
    elif suit == Suit.HEARTS:
        r = size//3
        pygame.draw.circle(surface, color, (x - r, y - r), r)
        pygame.draw.circle(surface, color, (x + r, y - r), r)
        tri = [(x - 2*r, y - r), (x + 2*r, y - r), (x, y + 2*r)]
        pygame.draw.polygon(surface, color, tri)
    elif suit == Suit.SPADES:
        r = size//3
        pygame.draw.circle(surface, color, (x - r, y), r)
        pygame.draw.circle(surface, color, (x + r, y), r)
        tri = [(x - 2*r, y), (x + 2*r, y), (x, y - 2*r)]
        pygame.draw.polygon(surface, color, tri)
        stem_w = max(6, size//6)
        pygame.draw.rect(surface, color, (x - stem_w//2, y + r, stem_w, size//2))
    elif suit == Suit.CLUBS:
        r = size//3
        pygame.draw.circle(surface, color, (x, y - r), r)
        pygame.draw.circle(surface, color, (x - r, y + r//3), r)
        pygame.draw.circle(surface, color, (x + r, y + r//3), r)
        stem_w = max(6, size//6)
        pygame.draw.rect(surface, color, (x - stem_w//2, y + r, stem_w, size//2))
    else:  # joker star
        r = size//2
        points = []
        for i in range(10):
            radius = r if i % 2 == 0 else r//2
            v = pygame.math.Vector2(0, -radius).rotate(i * 36)
            points.append((x + v.x, y + v.y))
        pygame.draw.polygon(surface, color, points)


def _blank_card():
    surf = pygame.Surface((CARD_W, CARD_H), pygame.SRCALPHA)
    pygame.draw.rect(surf, WHITE, (0, 0, CARD_W, CARD_H), border_radius=CARD_RADIUS)
    pygame.draw.rect(surf, BLACK, (0, 0, CARD_W, CARD_H), width=3, border_radius=CARD_RADIUS)
    return surf


def get_back_surface(color_name: Optional[str] = None, inner=None):
    color = inner or BACK_COLORS.get(color_name or config.get_current_settings()["back_color"], BACK_COLORS["Green"])
    if color in _card_back_cache:
        return _card_back_cache[color]
    surf = _blank_card()
    inset = 8
    inner_rect = pygame.Rect(inset, inset, CARD_W-2*inset, CARD_H-2*inset)
    pygame.draw.rect(surf, color, inner_rect, border_radius=8)
    for i in range(-CARD_H, CARD_W, 12):
        pygame.draw.line(surf, LIGHT, (i, 8), (i+CARD_H, CARD_H-8), 1)
    _card_back_cache[color] = surf
    return surf


def get_card_surface(card: Card):
    key = card.face_key()
    if key == "back":
        return get_back_surface()
    if key in _card_face_cache:
        return _card_face_cache[key]
    if key == "reverse_back":
        surf = get_back_surface(inner=REVERSE_BACK).copy()
        glyph = FONT_CENTER.render("R", True, GOLD)
        surf.blit(glyph, (CARD_W//2 - glyph.get_width()//2, CARD_H//2 - glyph.get_height()//2))
        _card_face_cache[key] = surf
        return surf
    surf = _blank_card()
    color = RED if is_red(card.suit) else BLACK
    margin = 10
    if card.is_wild:
        label = FONT_SMALL.render("JOKER", True, color)
        surf.blit(label, (CARD_W//2 - label.get_width()//2, margin))
        draw_suit_shape(surf, (CARD_W//2, CARD_H//2 + 8), card.suit, color, size=56)
    else:
        rtxt = FONT_CORNER_RANK.render(RANK_TO_TEXT[card.rank], True, color)
        surf.blit(rtxt, (margin, margin))
        r180 = pygame.transform.rotate(rtxt, 180)
        surf.blit(r180, (CARD_W - margin - r180.get_width(), CARD_H - margin - r180.get_height()))
        draw_suit_shape(surf, (CARD_W//2, CARD_H//2), card.suit, color, size=56)
    _card_face_cache[key] = surf
    return surf


class PileView:
    """Screen placement of one container; knows nothing about rules."""

    def __init__(self, ref: PileRef, x, y, fan_y=0, fan_x=0, max_visible: Optional[int] = None):
        self.ref = ref
        self.x, self.y = x, y
        self.fan_y = fan_y
        self.fan_x = fan_x
        self.max_visible = max_visible

    def visible(self, cards: List[Card]) -> List[Card]:
        if self.max_visible is not None:
            return list(cards[-self.max_visible:])
        return list(cards)

    def rect_for_index(self, idx):
        rx = self.x + idx * self.fan_x
        ry = self.y + idx * self.fan_y
        return pygame.Rect(rx, ry, CARD_W, CARD_H)

    def area(self, cards: List[Card]):
        r = pygame.Rect(self.x, self.y, CARD_W, CARD_H)
        shown = self.visible(cards)
        if shown:
            r.union_ip(self.rect_for_index(len(shown) - 1))
        return r

    def hit(self, cards: List[Card], pos) -> Optional[Card]:
        shown = self.visible(cards)
        for i in reversed(range(len(shown))):
            if self.rect_for_index(i).collidepoint(pos):
                return shown[i]
        return None

    def draw(self, screen, cards: List[Card], hover: Optional[bool] = None):
        if hover is not None:
            col = HOVER_OK if hover else HOVER_BAD
            pygame.draw.rect(screen, col, self.area(cards).inflate(10, 10), border_radius=CARD_RADIUS, width=4)
        shown = self.visible(cards)
        if not shown:
            pygame.draw.rect(screen, (255, 255, 255, 40), (self.x, self.y, CARD_W, CARD_H),
                             border_radius=CARD_RADIUS, width=2)
        for i, c in enumerate(shown):
            r = self.rect_for_index(i)
            screen.blit(get_card_surface(c), r.topleft)


def fan_positions(origin: Tuple[int, int], count: int, fan_y: int = FAN_Y):
    ox, oy = origin
    return [(ox, oy + i * fan_y) for i in range(count)]
