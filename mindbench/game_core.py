from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, StrEnum


class GameVariant(StrEnum):
    REACTION_TIME = "reaction_time"
    VERBAL_MEMORY = "verbal_memory"
    NUMBER_MEMORY = "number_memory"


class GameStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Key(StrEnum):
    CHAR = "char"
    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, slots=True)
class KeyPress:
    """A single key-down event, independent of the input backend.

    ``char`` is only meaningful for ``Key.CHAR`` and holds exactly one character.
    """

    key: Key
    char: str = ""

    @classmethod
    def of(cls, char: str) -> "KeyPress":
        if len(char) != 1:
            raise ValueError("char must be a single character")
        return cls(Key.CHAR, char)

    @property
    def is_quit(self) -> bool:
        return self.key is Key.ESCAPE

    def is_char(self, *chars: str) -> bool:
        return self.key is Key.CHAR and self.char.lower() in chars


class Tone(StrEnum):
    """Semantic colours; the renderer maps them to a palette."""

    PLAIN = "plain"
    INFO = "info"
    WAIT = "wait"
    GO = "go"
    GOOD = "good"
    BAD = "bad"
    MUTED = "muted"


@dataclass(frozen=True, slots=True)
class Line:
    text: str
    tone: Tone | None = None  # None: use the frame's foreground
    bold: bool = False
    highlight: bool = False


@dataclass(frozen=True, slots=True)
class Frame:
    """Full-screen draw description (pure data)."""

    title: str
    lines: tuple[Line, ...]
    background: Tone = Tone.PLAIN
    status: str = ""
    hint: str = ""
    progress: float | None = None  # 0.0..1.0 bar under the body, if set


def text_lines(*texts: str, tone: Tone | None = None, bold: bool = False) -> tuple[Line, ...]:
    return tuple(Line(t, tone=tone, bold=bold) for t in texts)


class SeededRng:
    """Simple seeded RNG wrapper to keep deterministic streams explicit."""

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(int(seed))

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def choice(self, seq: Sequence[str]) -> str:
        return self._rng.choice(seq)

    def uniform(self, a: float, b: float) -> float:
        return self._rng.uniform(a, b)

    def random(self) -> float:
        return self._rng.random()

    def shuffled(self, seq: Sequence[str]) -> list[str]:
        out = list(seq)
        self._rng.shuffle(out)
        return out


def clamp01(x: float) -> float:
    return 0.0 if x <= 0.0 else 1.0 if x >= 1.0 else float(x)


def to_ms(seconds: float) -> int:
    return int(round(seconds * 1000.0))
