from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from loguru import logger

from .clock import Clock
from .game_core import (
    Frame,
    GameStatus,
    GameVariant,
    KeyPress,
    Line,
    SeededRng,
    Tone,
    text_lines,
    to_ms,
)
from .results import GameResult, reaction_time_result

# Hard limits for the randomized arm delay; keeps every round finite.
MIN_DELAY_BOUND_S = 1.0
MAX_DELAY_BOUND_S = 5.0


@dataclass(frozen=True, slots=True)
class ReactionTimeConfig:
    attempts: int = 5
    min_delay_s: float = 2.0
    max_delay_s: float = 4.0

    def __post_init__(self) -> None:
        if self.attempts <= 0:
            raise ValueError("attempts must be > 0")
        if not (MIN_DELAY_BOUND_S <= self.min_delay_s <= self.max_delay_s <= MAX_DELAY_BOUND_S):
            raise ValueError(
                f"delay bounds must satisfy {MIN_DELAY_BOUND_S} <= min_delay_s <= max_delay_s <= {MAX_DELAY_BOUND_S}"
            )


class ReactionRoundStatus(str, Enum):
    WAITING = "waiting"
    ARMED = "armed"
    REACTED = "reacted"
    FAILED_EARLY = "failed_early"


class ReactionRound:
    """One reaction trial: WAITING -> ARMED -> REACTED, or WAITING -> FAILED_EARLY.

    REACTED and FAILED_EARLY are terminal; later key presses are ignored.
    """

    def __init__(self, *, clock: Clock, delay_s: float) -> None:
        if delay_s < 0.0:
            raise ValueError("delay_s must be >= 0")
        self._clock = clock
        self._delay_s = float(delay_s)
        self._status = ReactionRoundStatus.WAITING
        self._started_at_s: float | None = None
        self._armed_at_s: float | None = None
        self._reaction_s: float | None = None

    @property
    def status(self) -> ReactionRoundStatus:
        return self._status

    @property
    def delay_s(self) -> float:
        return self._delay_s

    @property
    def armed_at_s(self) -> float | None:
        return self._armed_at_s

    @property
    def reaction_s(self) -> float | None:
        return self._reaction_s

    @property
    def is_over(self) -> bool:
        return self._status in (ReactionRoundStatus.REACTED, ReactionRoundStatus.FAILED_EARLY)

    def start(self) -> None:
        if self._started_at_s is not None:
            return
        self._started_at_s = self._clock.now()

    def update(self) -> ReactionRoundStatus:
        if self._status is not ReactionRoundStatus.WAITING or self._started_at_s is None:
            return self._status
        now = self._clock.now()
        if now - self._started_at_s >= self._delay_s:
            self._status = ReactionRoundStatus.ARMED
            self._armed_at_s = now
        return self._status

    def on_key_press(self) -> ReactionRoundStatus:
        if self._status is ReactionRoundStatus.WAITING:
            self._status = ReactionRoundStatus.FAILED_EARLY
        elif self._status is ReactionRoundStatus.ARMED:
            assert self._armed_at_s is not None
            self._reaction_s = max(0.0, self._clock.now() - self._armed_at_s)
            self._status = ReactionRoundStatus.REACTED
        return self._status


class _Stage(str, Enum):
    TITLE = "title"
    ROUND = "round"
    DONE = "done"


class ReactionTimeGame:
    variant = GameVariant.REACTION_TIME
    title = "Reaction Time"
    description = "Test your visual reflexes"

    def __init__(self, *, clock: Clock, rng: SeededRng, config: ReactionTimeConfig | None = None) -> None:
        self._clock = clock
        self._rng = rng
        self._config = config or ReactionTimeConfig()
        self._stage = _Stage.TITLE
        self._round: ReactionRound | None = None
        self._times_ms: list[int] = []
        self._early_presses = 0
        self._result: GameResult | None = None

    @property
    def current_round(self) -> ReactionRound | None:
        return self._round

    @property
    def times_ms(self) -> list[int]:
        return list(self._times_ms)

    @property
    def early_presses(self) -> int:
        return self._early_presses

    def status(self) -> GameStatus:
        return GameStatus.FINISHED if self._stage is _Stage.DONE else GameStatus.IN_PROGRESS

    def result(self) -> GameResult | None:
        return self._result

    def update(self) -> GameStatus:
        if self._stage is _Stage.ROUND and self._round is not None:
            self._round.update()
        return self.status()

    def advance(self, event: KeyPress) -> GameStatus:
        _ = event  # any key
        if self._stage is _Stage.TITLE:
            self._begin_round()
        elif self._stage is _Stage.ROUND:
            self._handle_round_key()
        return self.status()

    def render(self) -> Frame:
        status = f"Attempt {min(len(self._times_ms) + 1, self._config.attempts)}/{self._config.attempts}"
        rnd = self._round
        if self._stage is _Stage.TITLE or rnd is None:
            return Frame(
                title=self.title,
                lines=(
                    Line("When the red screen turns green, press any key as quickly as you can.", bold=True),
                    Line(""),
                    Line(f"{self._config.attempts} attempts, the average is your score."),
                ),
                background=Tone.INFO,
                hint="Press any key to start  |  Esc: menu",
            )
        if rnd.status is ReactionRoundStatus.WAITING:
            return Frame(
                title=self.title,
                lines=text_lines("Wait for green...", bold=True),
                background=Tone.WAIT,
                status=status,
            )
        if rnd.status is ReactionRoundStatus.ARMED:
            return Frame(
                title=self.title,
                lines=text_lines("PRESS NOW!", bold=True),
                background=Tone.GO,
                status=status,
            )
        if rnd.status is ReactionRoundStatus.FAILED_EARLY:
            return Frame(
                title=self.title,
                lines=text_lines("Too soon!", bold=True),
                background=Tone.BAD,
                status=status,
                hint="Press any key to try again",
            )
        last = "Press any key to see your average" if self._all_done() else "Keep going! Press any key to continue"
        return Frame(
            title=self.title,
            lines=(Line(f"{self._times_ms[-1]} ms", bold=True), Line(""), Line(last)),
            background=Tone.INFO,
            status=f"Attempt {len(self._times_ms)}/{self._config.attempts}",
        )

    def _all_done(self) -> bool:
        return len(self._times_ms) >= self._config.attempts

    def _handle_round_key(self) -> None:
        rnd = self._round
        assert rnd is not None
        if rnd.status is ReactionRoundStatus.WAITING:
            rnd.on_key_press()
            self._early_presses += 1
            logger.debug("Reaction round failed early")
            return
        if rnd.status is ReactionRoundStatus.ARMED:
            rnd.on_key_press()
            assert rnd.reaction_s is not None
            self._times_ms.append(to_ms(rnd.reaction_s))
            logger.debug("Reaction round {}: {} ms", len(self._times_ms), self._times_ms[-1])
            return
        if rnd.status is ReactionRoundStatus.FAILED_EARLY:
            self._begin_round()
            return
        # REACTED: the round ignores the press; the game moves on.
        if self._all_done():
            self._result = reaction_time_result(self._times_ms)
            self._round = None
            self._stage = _Stage.DONE
        else:
            self._begin_round()

    def _begin_round(self) -> None:
        delay_s = self._rng.uniform(self._config.min_delay_s, self._config.max_delay_s)
        self._round = ReactionRound(clock=self._clock, delay_s=delay_s)
        self._round.start()
        self._stage = _Stage.ROUND


def build_reaction_time_game(
    *,
    clock: Clock,
    seed: int,
    config: ReactionTimeConfig | None = None,
) -> ReactionTimeGame:
    return ReactionTimeGame(clock=clock, rng=SeededRng(seed), config=config)
