from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass
from enum import Enum, StrEnum

from loguru import logger

from .game_core import (
    Frame,
    GameStatus,
    GameVariant,
    Key,
    KeyPress,
    Line,
    SeededRng,
    Tone,
)
from .results import GameResult, verbal_memory_result
from .words import load_words


@dataclass(frozen=True, slots=True)
class VerbalMemoryConfig:
    lives: int = 3
    # Chance of re-showing an already seen word.
    seen_ratio: float = 0.3

    def __post_init__(self) -> None:
        if self.lives <= 0:
            raise ValueError("lives must be > 0")
        if not (0.0 <= self.seen_ratio <= 1.0):
            raise ValueError("seen_ratio must be in [0.0, 1.0]")


class Claim(StrEnum):
    SEEN = "seen"
    NEW = "new"


class VerbalMemoryGenerator:
    """Deterministic word stream.

    Fresh words come from a shuffled deck so a word is only ever dealt as new
    once. When the deck runs out every further word is a repeat.
    """

    def __init__(self, rng: SeededRng, words: Sequence[str], *, seen_ratio: float) -> None:
        if not words:
            raise ValueError("words must not be empty")
        self._rng = rng
        self._deck = rng.shuffled(words)
        self._next = 0
        self._seen_ratio = float(seen_ratio)

    def next_word(self, seen: Collection[str]) -> str:
        if seen and self._rng.random() < self._seen_ratio:
            return self._pick_seen(seen)
        while self._next < len(self._deck):
            word = self._deck[self._next]
            self._next += 1
            if word not in seen:
                return word
        # Deck exhausted.
        assert seen
        return self._pick_seen(seen)

    def _pick_seen(self, seen: Collection[str]) -> str:
        # Sorted so the pick does not depend on set iteration order.
        return self._rng.choice(sorted(seen))


class _Stage(str, Enum):
    TITLE = "title"
    SHOWING = "showing"
    DONE = "done"


class VerbalMemoryGame:
    variant = GameVariant.VERBAL_MEMORY
    title = "Verbal Memory"
    description = "Keep as many words in short term memory as possible"

    def __init__(
        self,
        *,
        rng: SeededRng,
        words: Sequence[str],
        config: VerbalMemoryConfig | None = None,
    ) -> None:
        self._config = config or VerbalMemoryConfig()
        self._gen = VerbalMemoryGenerator(rng, words, seen_ratio=self._config.seen_ratio)
        self._stage = _Stage.TITLE
        self._seen: set[str] = set()
        self._word: str | None = None
        self._choice = Claim.SEEN
        self._lives = self._config.lives
        self._score = 0
        self._last_correct: bool | None = None
        self._result: GameResult | None = None

    @property
    def word(self) -> str | None:
        return self._word

    @property
    def lives(self) -> int:
        return self._lives

    @property
    def score(self) -> int:
        return self._score

    @property
    def choice(self) -> Claim:
        return self._choice

    @property
    def seen_words(self) -> frozenset[str]:
        return frozenset(self._seen)

    def status(self) -> GameStatus:
        return GameStatus.FINISHED if self._stage is _Stage.DONE else GameStatus.IN_PROGRESS

    def result(self) -> GameResult | None:
        return self._result

    def update(self) -> GameStatus:
        return self.status()

    def start(self) -> None:
        if self._stage is not _Stage.TITLE:
            return
        self._stage = _Stage.SHOWING
        self._deal()

    def advance(self, event: KeyPress) -> GameStatus:
        if self._stage is _Stage.TITLE:
            self.start()
        elif self._stage is _Stage.SHOWING:
            if event.key is Key.LEFT or event.is_char("a"):
                self._choice = Claim.SEEN
            elif event.key is Key.RIGHT or event.is_char("d"):
                self._choice = Claim.NEW
            elif event.key is Key.ENTER:
                self.answer(self._choice)
            elif event.is_char("s"):
                self.answer(Claim.SEEN)
            elif event.is_char("n"):
                self.answer(Claim.NEW)
        return self.status()

    def answer(self, claim: Claim) -> bool:
        """Judge ``claim`` for the current word; returns whether it was correct."""

        if self._stage is not _Stage.SHOWING:
            return False
        assert self._word is not None

        was_seen = self._word in self._seen
        correct = was_seen == (claim is Claim.SEEN)
        if correct:
            self._score += 1
        else:
            self._lives -= 1
        self._seen.add(self._word)
        self._last_correct = correct
        logger.debug("Verbal memory: {!r} claimed {} -> {}", self._word, claim.value, correct)

        if self._lives <= 0:
            self._stage = _Stage.DONE
            self._word = None
            self._result = verbal_memory_result(self._score, words_seen=len(self._seen))
        else:
            self._deal()
        return correct

    def render(self) -> Frame:
        if self._stage is not _Stage.SHOWING:
            return Frame(
                title=self.title,
                lines=(
                    Line("You will be shown words, one at a time.", bold=True),
                    Line("If you've seen a word during the test, choose SEEN."),
                    Line("If it's a new word, choose NEW."),
                ),
                background=Tone.INFO,
                hint="Press any key to start  |  Esc: menu",
            )
        feedback: tuple[Line, ...] = ()
        if self._last_correct is True:
            feedback = (Line("Correct", tone=Tone.GOOD),)
        elif self._last_correct is False:
            feedback = (Line("Wrong", tone=Tone.BAD),)
        return Frame(
            title=self.title,
            lines=(
                Line(self._word or "", bold=True),
                Line(""),
                Line("[ SEEN ]", highlight=self._choice is Claim.SEEN),
                Line("[ NEW ]", highlight=self._choice is Claim.NEW),
                Line(""),
                *feedback,
            ),
            background=Tone.INFO,
            status=f"Score: {self._score}    Lives: {self._lives}",
            hint="Left/Right: choose  |  Enter: submit  |  S/N: seen/new  |  Esc: menu",
        )

    def _deal(self) -> None:
        self._word = self._gen.next_word(self._seen)
        self._choice = Claim.SEEN


def build_verbal_memory_game(
    *,
    seed: int,
    words: Sequence[str] | None = None,
    config: VerbalMemoryConfig | None = None,
) -> VerbalMemoryGame:
    return VerbalMemoryGame(
        rng=SeededRng(seed),
        words=words if words is not None else load_words(),
        config=config,
    )
