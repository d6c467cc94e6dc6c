# scene.py - pygame scene translating mouse and keys into engine calls
import pygame
from typing import Optional, Tuple

from crazy_solitaire import config
from crazy_solitaire import render as R
from crazy_solitaire.cards import Card
from crazy_solitaire.drag import DragCoordinator
from crazy_solitaire.events import EventKind, GameEvent
from crazy_solitaire.game import Game, GameStatus
from crazy_solitaire.mechanics import ElapsedClock, ExplosionAnimator
from crazy_solitaire.piles import STOCK_REF, TALON_REF, PileRef
from crazy_solitaire.ui import ActionBar


class Scene:
    def __init__(self):
        self.quit_requested = False
    def handle_event(self, e): pass
    def update(self, dt): pass
    def draw(self, screen): pass


class CrazySolitaireScene(Scene):
    def __init__(self, game: Optional[Game] = None):
        super().__init__()
        self.game = game or Game()
        self.drag = DragCoordinator(self.game)
        self.drag_offset: Tuple[int, int] = (0, 0)
        self.mouse_pos: Tuple[int, int] = (0, 0)
        self.message = ""
        self.clock = ElapsedClock(pygame.time.get_ticks())
        self.explosion = ExplosionAnimator()
        self.game.events.subscribe(self._on_game_event)

        self.toolbar = ActionBar([
            ("Undo", self.undo, self.game.can_undo),
            ("Back", self.cycle_back_color, None),
            ("New", self.new_game, None),
        ])
        self.compute_layout()

    # ---------- Layout ----------
    def compute_layout(self):
        top = R.TOP_BAR_H + 30
        step = R.CARD_W + 20
        self.stock_view = R.PileView(STOCK_REF, 40, top)
        self.talon_view = R.PileView(TALON_REF, 40 + step, top, fan_x=R.TALON_FAN_X, max_visible=3)
        self.foundation_views = [
            R.PileView(f.ref, 40 + (3 + i) * step, top) for i, f in enumerate(self.game.foundations.values())
        ]
        tab_y = top + R.CARD_H + 40
        self.tableau_views = [
            R.PileView(col.ref, 40 + i * (R.CARD_W + R.CARD_GAP_X), tab_y, fan_y=R.FAN_Y)
            for i, col in enumerate(self.game.tableau)
        ]
        self.toolbar.layout(R.SCREEN_W, R.TOP_BAR_H)

    def _views(self):
        # Topmost first for hit testing
        yield from self.tableau_views
        yield self.talon_view
        yield from self.foundation_views

    def card_at(self, pos) -> Optional[Card]:
        for view in self._views():
            card = view.hit(self.game.pile(view.ref).cards, pos)
            if card is not None:
                return card
        return None

    def target_at(self, pos):
        """Card or pile under the pointer, as the drag coordinator wants it."""
        card = self.card_at(pos)
        if card is not None:
            return card
        for view in self._views():
            if view.area(self.game.pile(view.ref).cards).collidepoint(pos):
                return view.ref
        return None

    def _view_for(self, ref: PileRef):
        for view in self._views():
            if view.ref == ref:
                return view
        return None

    # ---------- Actions ----------
    def new_game(self):
        if self.drag.is_dragging:
            self.drag.cancel_drop()
        self.game.new_game()
        self.message = ""
        self.explosion = ExplosionAnimator()
        self.clock.restart(pygame.time.get_ticks())

    def undo(self):
        self.game.undo()

    def cycle_back_color(self):
        """Switch to the next card back colour and remember it for later sessions."""
        names = list(R.BACK_COLORS)
        current = config.get_current_settings()["back_color"]
        nxt = names[(names.index(current) + 1) % len(names)] if current in names else names[0]
        config.save_settings({"back_color": nxt})
        R.invalidate_card_caches()

    def _on_game_event(self, event: GameEvent):
        now = pygame.time.get_ticks()
        if event.kind is EventKind.WIN_REACHED:
            self.clock.stop(now)
            self.message = f"Congratulations! You won! It took {self.clock.label(now)}"
        elif event.kind is EventKind.LOSS_REACHED:
            self.clock.stop(now)
            self.message = "Out of stock reloads. You lose! Press N for a new game."
            self._explode(now)
        elif event.kind is EventKind.STOCK_LEVEL_CHANGED:
            self.message = f"Stock reloaded ({event.value}/{self.game.config.max_stock_reloads})"
        elif event.kind is EventKind.MODE_TOGGLED:
            self.message = ""

    def _explode(self, now):
        placed = []
        for view in self._views():
            cards = self.game.pile(view.ref).cards
            shown = view.visible(cards)
            for i, c in enumerate(shown):
                r = view.rect_for_index(i)
                placed.append((c, r.x, r.y))
        self.explosion.start(placed, now)

    # ---------- Event handling ----------
    def handle_event(self, e):
        if self.toolbar.handle_event(e):
            return
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            self._on_press(e.pos)
        elif e.type == pygame.MOUSEMOTION:
            self.mouse_pos = e.pos
            if self.drag.is_dragging:
                self.drag.drag_over(self.target_at(e.pos))
        elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            if self.drag.is_dragging:
                self.drag.drag_over(self.target_at(e.pos))
                self.drag.release()
        elif e.type == pygame.KEYDOWN:
            if e.key == pygame.K_u:
                self.undo()
            elif e.key == pygame.K_n:
                self.new_game()
            elif e.key == pygame.K_b:
                self.cycle_back_color()
            elif e.key == pygame.K_ESCAPE:
                self.quit_requested = True

    def _on_press(self, pos):
        if self.game.is_frozen:
            return
        self.mouse_pos = pos
        stock_rect = pygame.Rect(self.stock_view.x, self.stock_view.y, R.CARD_W, R.CARD_H)
        if stock_rect.collidepoint(pos):
            self.game.click_stock()
            return
        card = self.card_at(pos)
        if card is None:
            return
        if card.is_reverse_trigger and card.face_up:
            self.game.activate_reverse_trigger(card)
            return
        if not card.face_up:
            self.game.flip_over(card)
            return
        view = self._view_for(self.game.find_container_of(card).ref)
        shown = view.visible(self.game.pile(view.ref).cards)
        r = view.rect_for_index(shown.index(card))
        if self.drag.begin_drag(card):
            self.drag_offset = (pos[0] - r.x, pos[1] - r.y)

    # ---------- Drawing ----------
    def draw(self, screen):
        now = pygame.time.get_ticks()
        screen.fill(R.TABLE_BG)

        pygame.draw.rect(screen, (0, 0, 0), (0, 0, R.SCREEN_W, R.TOP_BAR_H))
        t = R.FONT_UI.render(f"Time {self.clock.label(now)}", True, R.WHITE)
        screen.blit(t, (20, R.TOP_BAR_H // 2 - t.get_height() // 2))
        self.toolbar.draw(screen)

        if self.game.status is GameStatus.LOST:
            self.explosion.update(now)
            self.explosion.draw(screen)
        else:
            self._draw_table(screen)

        if self.game.reverse_mode:
            band = pygame.Rect(0, R.SCREEN_H - 35, R.SCREEN_W, 35)
            pygame.draw.rect(screen, (139, 0, 0), band)
            lab = R.FONT_UI.render("REVERSE MODE ACTIVE", True, (255, 255, 0))
            screen.blit(lab, (band.centerx - lab.get_width() // 2, band.centery - lab.get_height() // 2))

        if self.message:
            msg = R.FONT_UI.render(self.message, True, (255, 255, 180))
            screen.blit(msg, (R.SCREEN_W // 2 - msg.get_width() // 2, R.SCREEN_H - 80))

    def _draw_table(self, screen):
        if self.game.deck.is_empty():
            pygame.draw.rect(screen, (255, 255, 255), (self.stock_view.x, self.stock_view.y, R.CARD_W, R.CARD_H),
                             border_radius=R.CARD_RADIUS, width=2)
        else:
            color = R.STOCK_LEVEL_COLORS.get(self.game.stock_level, "Red")
            screen.blit(R.get_back_surface(color), (self.stock_view.x, self.stock_view.y))
        lab = R.FONT_SMALL.render("Stock", True, R.WHITE)
        screen.blit(lab, (self.stock_view.x + (R.CARD_W - lab.get_width()) // 2, self.stock_view.y - 22))

        self.talon_view.draw(screen, self.game.talon.cards)
        for view in self.foundation_views:
            pile = self.game.pile(view.ref)
            view.draw(screen, pile.cards, pile.hover)
        for view in self.tableau_views:
            pile = self.game.pile(view.ref)
            view.draw(screen, pile.cards, pile.hover)

        if self.drag.is_dragging:
            mx, my = self.mouse_pos
            ox, oy = self.drag_offset
            for c, (x, y) in zip(self.drag.cards, R.fan_positions((mx - ox, my - oy), len(self.drag.cards))):
                screen.blit(R.get_card_surface(c), (x, y))
