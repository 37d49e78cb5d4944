"""Pygame shell for the mindbench minigames.

One tick: read at most one input event, advance the session, redraw the
whole screen. Timing, scoring, RNG and state live in the core modules
(``session``, ``reaction_time``, ``verbal_memory``, ``number_memory``).
"""

from __future__ import annotations

import random
from collections.abc import Callable

import pygame
from loguru import logger

from .clock import RealClock
from .game_core import GameVariant, Key, KeyPress
from .logging_setup import configure_logging
from .session import Game, SessionController, build_game
from .terminal import TerminalRenderer

WINDOW_SIZE = (960, 576)
TARGET_FPS = 60

_KEY_MAP: dict[int, Key] = {
    pygame.K_RETURN: Key.ENTER,
    pygame.K_KP_ENTER: Key.ENTER,
    pygame.K_ESCAPE: Key.ESCAPE,
    pygame.K_BACKSPACE: Key.BACKSPACE,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
}


def key_press_from_event(event: pygame.event.Event) -> KeyPress | None:
    """Translate a pygame KEYDOWN into a KeyPress; anything else maps to None."""

    if event.type != pygame.KEYDOWN:
        return None
    mapped = _KEY_MAP.get(event.key)
    if mapped is not None:
        return KeyPress(mapped)
    char = getattr(event, "unicode", "")
    if len(char) == 1 and char.isprintable():
        return KeyPress.of(char)
    if event.key == pygame.K_SPACE:
        return KeyPress.of(" ")
    return None


def _poll_input() -> pygame.event.Event | None:
    """Next KEYDOWN or QUIT event; other queued events before it are dropped."""

    while True:
        event = pygame.event.poll()
        if event.type == pygame.NOEVENT:
            return None
        if event.type in (pygame.KEYDOWN, pygame.QUIT):
            return event


def _new_seed() -> int:
    return random.SystemRandom().randint(1, 2**31 - 1)


def run(*, max_frames: int | None = None, event_injector: Callable[[int], None] | None = None) -> int:
    configure_logging()

    try:
        pygame.init()
        pygame.display.set_caption("mindbench")
        surface = pygame.display.set_mode(WINDOW_SIZE)
    except pygame.error as exc:
        logger.error("Could not initialise the display: {}", exc)
        pygame.quit()
        return 1

    clock = pygame.time.Clock()
    renderer = TerminalRenderer(surface)
    real_clock = RealClock()

    def make_game(variant: GameVariant) -> Game:
        return build_game(variant, clock=real_clock, seed=_new_seed())

    session = SessionController(game_factory=make_game)
    logger.info("mindbench started")

    frame = 0
    try:
        while session.running:
            if event_injector is not None:
                event_injector(frame)

            event = _poll_input()
            if event is not None and event.type == pygame.QUIT:
                session.quit()
                break
            press = None if event is None else key_press_from_event(event)
            if press is not None:
                session.advance(press)

            session.update()
            renderer.render(session.render())

            pygame.display.flip()

            frame += 1
            if max_frames is not None and frame >= max_frames:
                break

            clock.tick(TARGET_FPS)
    finally:
        pygame.quit()

    logger.info("mindbench stopped")
    return 0
