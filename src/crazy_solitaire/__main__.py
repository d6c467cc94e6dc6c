# __main__.py - entry point
import logging
import os

import pygame

from crazy_solitaire import config
from crazy_solitaire import render as R
from crazy_solitaire.game import Game
from crazy_solitaire.scene import CrazySolitaireScene

logger = logging.getLogger(__name__)


def _initial_window_size():
    info = pygame.display.Info()
    # Keep a safety margin so the window never hides under taskbar
    margin_w, margin_h = 120, 140
    w = min(R.SCREEN_W, max(640, info.current_w - margin_w))
    h = min(R.SCREEN_H, max(480, info.current_h - margin_h))
    return w, h


def _system_keys_set():
    names = [
        "K_BRIGHTNESSUP", "K_BRIGHTNESSDOWN", "K_KBDILLUMUP", "K_KBDILLUMDOWN", "K_KBDILLUMTOGGLE",
        "K_VOLUMEUP", "K_VOLUMEDOWN", "K_MUTE", "K_AUDIOMUTE",
        "K_AUDIOPLAY", "K_AUDIOSTOP", "K_AUDIONEXT", "K_AUDIOPREV",
        "K_MEDIASELECT",
    ]
    out = set()
    for n in names:
        v = getattr(pygame, n, None)
        if isinstance(v, int):
            out.add(v)
    for i in range(1, 13):
        v = getattr(pygame, f"K_F{i}", None)
        if isinstance(v, int):
            out.add(v)
    return out


def main():
    config.configure_logging()
    settings = config.load_settings()
    R.apply_card_settings(size_name=settings["card_size"])

    # Center window and init
    os.environ.setdefault("SDL_VIDEO_CENTERED", "1")
    pygame.init()

    w, h = _initial_window_size()
    R.SCREEN_W, R.SCREEN_H = w, h
    screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)
    pygame.display.set_caption("Crazy Solitaire")
    R.setup_fonts()
    clock = pygame.time.Clock()

    game_config = config.GameConfig.from_env()
    logger.info("starting game (seed=%s)", game_config.seed)
    scene = CrazySolitaireScene(game=Game(game_config))

    system_keys = _system_keys_set()
    running = True
    while running:
        clock.tick(60)
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
            elif e.type == pygame.VIDEORESIZE:
                R.SCREEN_W, R.SCREEN_H = e.size
                screen = pygame.display.set_mode((R.SCREEN_W, R.SCREEN_H), pygame.RESIZABLE)
                scene.compute_layout()
            elif e.type == pygame.KEYDOWN and getattr(e, "key", None) in system_keys:
                continue
            else:
                scene.handle_event(e)
        if scene.quit_requested:
            running = False
        scene.draw(screen)
        pygame.display.flip()
    pygame.quit()


if __name__ == "__main__":
    main()
