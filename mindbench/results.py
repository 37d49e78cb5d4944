from __future__ import annotations

from dataclasses import dataclass

from .game_core import GameVariant


@dataclass(frozen=True, slots=True)
class GameResult:
    """Outcome of one completed game.

    Held by the session only while the result screen is showing; nothing is
    persisted.
    """

    variant: GameVariant
    score: int
    unit: str
    summary: str
    detail: tuple[str, ...] = ()

    def headline(self) -> str:
        return f"{self.score} {self.unit}"


def reaction_time_result(times_ms: list[int]) -> GameResult:
    """Build the Reaction Time result from the individual reaction times."""

    if not times_ms:
        raise ValueError("times_ms must not be empty")
    mean_ms = int(round(sum(times_ms) / len(times_ms)))
    detail = tuple(f"Attempt {i}: {ms} ms" for i, ms in enumerate(times_ms, start=1))
    return GameResult(
        variant=GameVariant.REACTION_TIME,
        score=mean_ms,
        unit="ms",
        summary="Average reaction time",
        detail=detail,
    )


def verbal_memory_result(score: int, *, words_seen: int) -> GameResult:
    return GameResult(
        variant=GameVariant.VERBAL_MEMORY,
        score=int(score),
        unit="words",
        summary="Verbal Memory",
        detail=(f"Distinct words shown: {words_seen}",),
    )


def number_memory_result(level_reached: int, *, target: str, answer: str) -> GameResult:
    return GameResult(
        variant=GameVariant.NUMBER_MEMORY,
        score=int(level_reached),
        unit="digits",
        summary="Number Memory",
        detail=(f"Number:      {target}", f"Your answer: {answer}"),
    )
