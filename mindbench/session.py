"""Top-level menu / play / result loop.

The controller owns at most one game at a time. It never talks to pygame:
it consumes ``KeyPress`` values and produces ``Frame`` values, so it can be
driven headlessly in tests.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from loguru import logger

from .clock import Clock
from .game_core import Frame, GameStatus, GameVariant, Key, KeyPress, Line, Tone
from .number_memory import build_number_memory_game
from .reaction_time import build_reaction_time_game
from .results import GameResult
from .verbal_memory import build_verbal_memory_game


class Game(Protocol):
    variant: GameVariant

    def status(self) -> GameStatus: ...
    def advance(self, event: KeyPress) -> GameStatus: ...
    def update(self) -> GameStatus: ...
    def render(self) -> Frame: ...
    def result(self) -> GameResult | None: ...


GameFactory = Callable[[GameVariant], Game]


@dataclass(frozen=True, slots=True)
class MenuEntry:
    variant: GameVariant
    label: str
    description: str


MENU_ENTRIES: tuple[MenuEntry, ...] = (
    MenuEntry(GameVariant.REACTION_TIME, "Reaction Time", "Test your visual reflexes"),
    MenuEntry(GameVariant.VERBAL_MEMORY, "Verbal Memory", "Keep as many words in short term memory as possible"),
    MenuEntry(GameVariant.NUMBER_MEMORY, "Number Memory", "Remember the longest number you can"),
)


class SessionState(str, Enum):
    MENU = "menu"
    PLAYING = "playing"
    RESULT = "result"


def build_game(variant: GameVariant, *, clock: Clock, seed: int) -> Game:
    if variant is GameVariant.REACTION_TIME:
        return build_reaction_time_game(clock=clock, seed=seed)
    if variant is GameVariant.VERBAL_MEMORY:
        return build_verbal_memory_game(seed=seed)
    if variant is GameVariant.NUMBER_MEMORY:
        return build_number_memory_game(clock=clock, seed=seed)
    raise ValueError(f"unknown game variant: {variant!r}")


class SessionController:
    def __init__(self, *, game_factory: GameFactory, entries: tuple[MenuEntry, ...] = MENU_ENTRIES) -> None:
        if not entries:
            raise ValueError("entries must not be empty")
        self._game_factory = game_factory
        self._entries = entries
        self._state = SessionState.MENU
        self._selected = 0
        self._game: Game | None = None
        self._last_result: GameResult | None = None
        self._running = True

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def running(self) -> bool:
        return self._running

    @property
    def selected_index(self) -> int:
        return self._selected

    @property
    def active_game(self) -> Game | None:
        return self._game

    @property
    def active_variant(self) -> GameVariant | None:
        return None if self._game is None else self._game.variant

    @property
    def last_result(self) -> GameResult | None:
        return self._last_result

    def quit(self) -> None:
        self._running = False

    def advance(self, event: KeyPress) -> SessionState:
        if self._state is SessionState.MENU:
            self._handle_menu_key(event)
        elif self._state is SessionState.PLAYING:
            assert self._game is not None
            if event.is_quit:
                self.abort_game()
            else:
                self._game.advance(event)
                self._collect_if_finished()
        else:
            self._dismiss_result()
        return self._state

    def update(self) -> SessionState:
        if self._state is SessionState.PLAYING:
            assert self._game is not None
            self._game.update()
            self._collect_if_finished()
        return self._state

    def select(self, variant: GameVariant) -> None:
        if self._state is not SessionState.MENU:
            return
        assert self._game is None, "a game is already active"
        self._game = self._game_factory(variant)
        self._state = SessionState.PLAYING
        logger.info("Starting {}", variant.value)

    def abort_game(self) -> None:
        if self._state is not SessionState.PLAYING:
            return
        assert self._game is not None
        logger.info("Aborted {}", self._game.variant.value)
        self._game = None
        self._state = SessionState.MENU

    def render(self) -> Frame:
        if self._state is SessionState.PLAYING:
            assert self._game is not None
            return self._game.render()
        if self._state is SessionState.RESULT:
            return self._render_result()
        return self._render_menu()

    def _handle_menu_key(self, event: KeyPress) -> None:
        if event.is_quit or event.is_char("q"):
            self.quit()
        elif event.key is Key.UP or event.is_char("w"):
            self._selected = max(0, self._selected - 1)
        elif event.key is Key.DOWN or event.is_char("s"):
            self._selected = min(len(self._entries) - 1, self._selected + 1)
        elif event.key is Key.ENTER:
            self.select(self._entries[self._selected].variant)
        elif event.key is Key.CHAR and event.char.isdigit() and event.char.isascii():
            idx = int(event.char) - 1
            if 0 <= idx < len(self._entries):
                self._selected = idx
                self.select(self._entries[idx].variant)

    def _collect_if_finished(self) -> None:
        assert self._game is not None
        if self._game.status() is not GameStatus.FINISHED:
            return
        result = self._game.result()
        assert result is not None, "finished game without a result"
        logger.info("Finished {}: {}", result.variant.value, result.headline())
        self._last_result = result
        self._game = None
        self._state = SessionState.RESULT

    def _dismiss_result(self) -> None:
        self._last_result = None
        self._state = SessionState.MENU

    def _render_menu(self) -> Frame:
        lines: list[Line] = []
        for idx, entry in enumerate(self._entries):
            selected = idx == self._selected
            marker = ">>" if selected else "  "
            lines.append(Line(f"{marker} {idx + 1}. {entry.label}", bold=True, highlight=selected))
            lines.append(Line(f"      {entry.description}", tone=Tone.MUTED))
            lines.append(Line(""))
        return Frame(
            title="Game Selector",
            lines=tuple(lines),
            hint="Up/Down: navigate  |  Enter or 1-3: launch  |  q: quit",
        )

    def _render_result(self) -> Frame:
        result = self._last_result
        assert result is not None
        return Frame(
            title=result.summary,
            lines=(
                Line(result.summary),
                Line(result.headline(), bold=True, tone=Tone.GOOD),
                Line(""),
                *(Line(text, tone=Tone.MUTED) for text in result.detail),
            ),
            background=Tone.INFO,
            hint="Press any key to return to the menu",
        )
