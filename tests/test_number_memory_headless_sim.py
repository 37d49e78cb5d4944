from __future__ import annotations

from dataclasses import dataclass

from mindbench.game_core import GameStatus, GameVariant, Key, KeyPress, SeededRng
from mindbench.number_memory import NumberMemoryGenerator, build_number_memory_game


@dataclass
class FakeClock:
    t: float = 0.0

    def now(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += float(dt)


def test_headless_sim_climbs_levels_then_fails() -> None:
    seed = 31
    clock = FakeClock()
    mirror = NumberMemoryGenerator(SeededRng(seed))
    game = build_number_memory_game(clock=clock, seed=seed)

    previous_len = 0
    for level in range(1, 7):
        expected = mirror.next_number(level=level)
        game.advance(KeyPress(Key.ENTER))  # title/success -> show
        assert game.target == expected
        assert len(game.target) >= previous_len
        previous_len = len(game.target)

        clock.advance(2.0)
        game.update()
        for ch in expected:
            game.advance(KeyPress.of(ch))
        game.advance(KeyPress(Key.ENTER))
        assert game.level == level + 1

    expected = mirror.next_number(level=7)
    game.advance(KeyPress.of("x"))
    clock.advance(2.0)
    game.update()
    wrong = expected[:-1] + ("1" if expected[-1] != "1" else "2")
    for ch in wrong:
        game.advance(KeyPress.of(ch))
    game.advance(KeyPress(Key.ENTER))

    assert game.status() is GameStatus.FINISHED
    result = game.result()
    assert result is not None
    assert result.variant is GameVariant.NUMBER_MEMORY
    assert result.score == 6
    assert result.unit == "digits"
