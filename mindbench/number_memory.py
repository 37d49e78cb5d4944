from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from loguru import logger

from .clock import Clock, elapsed_s
from .game_core import (
    Frame,
    GameStatus,
    GameVariant,
    Key,
    KeyPress,
    Line,
    SeededRng,
    Tone,
    clamp01,
)
from .results import GameResult, number_memory_result


@dataclass(frozen=True, slots=True)
class NumberMemoryConfig:
    show_duration_s: float = 1.7
    start_level: int = 1

    def __post_init__(self) -> None:
        if self.show_duration_s <= 0.0:
            raise ValueError("show_duration_s must be > 0")
        if self.start_level < 1:
            raise ValueError("start_level must be >= 1")


def digits_for_level(level: int) -> int:
    """Number of digits shown at ``level``."""

    return max(1, int(level))


class NumberMemoryGenerator:
    def __init__(self, rng: SeededRng) -> None:
        self._rng = rng

    def next_number(self, *, level: int) -> str:
        return "".join(str(self._rng.randint(0, 9)) for _ in range(digits_for_level(level)))


class _Stage(str, Enum):
    TITLE = "title"
    SHOW = "show"
    RECALL = "recall"
    SUCCESS = "success"
    DONE = "done"


class NumberMemoryGame:
    variant = GameVariant.NUMBER_MEMORY
    title = "Number Memory"
    description = "Remember the longest number you can"

    def __init__(self, *, clock: Clock, rng: SeededRng, config: NumberMemoryConfig | None = None) -> None:
        self._clock = clock
        self._config = config or NumberMemoryConfig()
        self._gen = NumberMemoryGenerator(rng)
        self._stage = _Stage.TITLE
        self._level = self._config.start_level
        self._recalled_level = 0
        self._target = ""
        self._buffer = ""
        self._last_answer = ""
        self._shown_at_s: float | None = None
        self._result: GameResult | None = None

    @property
    def level(self) -> int:
        return self._level

    @property
    def recalled_level(self) -> int:
        """Highest level reproduced exactly; 0 until the first match."""

        return self._recalled_level

    @property
    def target(self) -> str:
        return self._target

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def accepting_input(self) -> bool:
        return self._stage is _Stage.RECALL

    def status(self) -> GameStatus:
        return GameStatus.FINISHED if self._stage is _Stage.DONE else GameStatus.IN_PROGRESS

    def result(self) -> GameResult | None:
        return self._result

    def update(self) -> GameStatus:
        if self._stage is _Stage.SHOW:
            assert self._shown_at_s is not None
            if elapsed_s(self._clock, self._shown_at_s) >= self._config.show_duration_s:
                self._stage = _Stage.RECALL
        return self.status()

    def advance(self, event: KeyPress) -> GameStatus:
        if self._stage in (_Stage.TITLE, _Stage.SUCCESS):
            self._show_number()
        elif self._stage is _Stage.RECALL:
            if event.key is Key.ENTER:
                self.submit()
            elif event.key is Key.BACKSPACE:
                self._buffer = self._buffer[:-1]
            elif event.key is Key.CHAR and event.char.isdigit() and event.char.isascii():
                self._buffer += event.char
        return self.status()

    def submit(self) -> bool:
        """Check the typed digits; returns True when they were accepted for judging."""

        if self._stage is not _Stage.RECALL or self._buffer == "":
            return False
        self._last_answer = self._buffer
        if self._buffer == self._target:
            logger.debug("Number memory level {} recalled", self._level)
            self._recalled_level = self._level
            self._level += 1
            self._stage = _Stage.SUCCESS
        else:
            self._stage = _Stage.DONE
            self._result = number_memory_result(self._recalled_level, target=self._target, answer=self._buffer)
        return True

    def render(self) -> Frame:
        status = f"Level {self._level}"
        if self._stage is _Stage.TITLE or self._stage is _Stage.DONE:
            return Frame(
                title=self.title,
                lines=(
                    Line("The average person can remember 7 numbers at once.", bold=True),
                    Line("Can you do more?"),
                ),
                background=Tone.INFO,
                hint="Press any key to start  |  Esc: menu",
            )
        if self._stage is _Stage.SHOW:
            assert self._shown_at_s is not None
            elapsed = elapsed_s(self._clock, self._shown_at_s)
            return Frame(
                title=self.title,
                lines=(Line(self._target, bold=True),),
                background=Tone.INFO,
                status=status,
                progress=clamp01(1.0 - elapsed / self._config.show_duration_s),
            )
        if self._stage is _Stage.RECALL:
            return Frame(
                title=self.title,
                lines=(
                    Line("What was the number?", bold=True),
                    Line(""),
                    Line(f"> {self._buffer}_"),
                ),
                background=Tone.INFO,
                status=status,
                hint="Type digits  |  Backspace: delete  |  Enter: submit  |  Esc: menu",
            )
        return Frame(
            title=self.title,
            lines=(
                Line("Number", tone=Tone.MUTED),
                Line(self._target, bold=True),
                Line("Your answer", tone=Tone.MUTED),
                Line(self._last_answer, bold=True, tone=Tone.GOOD),
                Line(""),
                Line(f"Level {self._level}", bold=True),
            ),
            background=Tone.INFO,
            status=status,
            hint="Press any key for the next number",
        )

    def _show_number(self) -> None:
        self._target = self._gen.next_number(level=self._level)
        self._buffer = ""
        self._shown_at_s = self._clock.now()
        self._stage = _Stage.SHOW


def build_number_memory_game(
    *,
    clock: Clock,
    seed: int,
    config: NumberMemoryConfig | None = None,
) -> NumberMemoryGame:
    return NumberMemoryGame(clock=clock, rng=SeededRng(seed), config=config)
