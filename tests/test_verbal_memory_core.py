from __future__ import annotations

import pytest

from mindbench.game_core import GameStatus, Key, KeyPress, SeededRng
from mindbench.verbal_memory import (
    Claim,
    VerbalMemoryConfig,
    VerbalMemoryGame,
    VerbalMemoryGenerator,
    build_verbal_memory_game,
)
from mindbench.words import load_words, parse_words

WORDS = ("cat", "dog", "owl", "elk", "bee", "ant", "cow", "pig")


class ScriptedGenerator:
    """Hands out a fixed word sequence, ignoring the seen set."""

    def __init__(self, words: list[str]) -> None:
        self._words = list(words)

    def next_word(self, seen) -> str:
        return self._words.pop(0)


def _scripted_game(words: list[str], *, lives: int = 3) -> VerbalMemoryGame:
    game = VerbalMemoryGame(rng=SeededRng(0), words=WORDS, config=VerbalMemoryConfig(lives=lives))
    game._gen = ScriptedGenerator(words)  # type: ignore[assignment]
    game.start()
    return game


def test_new_then_seen_cat_scenario() -> None:
    game = _scripted_game(["cat", "cat", "dog"])
    assert game.word == "cat"
    assert game.answer(Claim.NEW) is True
    score_before = game.score

    assert game.word == "cat"
    assert game.answer(Claim.SEEN) is True
    assert game.score == score_before + 1
    assert game.lives == 3


def test_wrong_claims_cost_lives_and_finish_at_zero() -> None:
    game = _scripted_game(["cat", "dog", "owl", "elk"], lives=2)
    assert game.answer(Claim.SEEN) is False  # never shown before
    assert game.lives == 1
    assert game.status() is GameStatus.IN_PROGRESS

    assert game.answer(Claim.NEW) is True
    assert game.lives == 1

    assert game.answer(Claim.SEEN) is False
    assert game.lives == 0
    assert game.status() is GameStatus.FINISHED
    result = game.result()
    assert result is not None
    assert result.score == 1
    assert result.unit == "words"


def test_presented_words_join_the_seen_set_once() -> None:
    game = _scripted_game(["cat", "cat", "dog"])
    game.answer(Claim.NEW)
    game.answer(Claim.NEW)  # wrong: cat was already seen
    assert game.seen_words == frozenset({"cat"})
    assert game.lives == 2


def test_arrow_keys_select_and_enter_submits() -> None:
    game = _scripted_game(["cat", "cat", "dog"])
    assert game.choice is Claim.SEEN

    game.advance(KeyPress(Key.RIGHT))
    assert game.choice is Claim.NEW
    game.advance(KeyPress(Key.ENTER))
    assert game.score == 1

    # Selection resets to SEEN for each new word.
    assert game.choice is Claim.SEEN
    game.advance(KeyPress(Key.ENTER))
    assert game.score == 2

    game.advance(KeyPress.of("d"))
    game.advance(KeyPress.of("a"))
    assert game.choice is Claim.SEEN


def test_shortcut_keys_submit_directly_and_others_are_ignored() -> None:
    game = _scripted_game(["cat", "cat", "dog"])
    game.advance(KeyPress.of("7"))
    game.advance(KeyPress(Key.BACKSPACE))
    assert game.word == "cat"
    assert game.score == 0

    game.advance(KeyPress.of("n"))
    game.advance(KeyPress.of("s"))
    assert game.score == 2


def test_generator_never_deals_a_seen_word_as_fresh() -> None:
    gen = VerbalMemoryGenerator(SeededRng(5), WORDS, seen_ratio=0.0)
    seen: set[str] = set()
    dealt = [gen.next_word(seen) for _ in range(len(WORDS))]
    for word in dealt:
        seen.add(word)
    assert sorted(dealt) == sorted(WORDS)


def test_generator_repeats_once_deck_is_exhausted() -> None:
    gen = VerbalMemoryGenerator(SeededRng(5), ("cat", "dog"), seen_ratio=0.0)
    seen: set[str] = set()
    for _ in range(2):
        seen.add(gen.next_word(seen))
    for _ in range(20):
        assert gen.next_word(seen) in seen


def test_generator_is_deterministic_for_same_seed() -> None:
    def stream(seed: int) -> list[str]:
        gen = VerbalMemoryGenerator(SeededRng(seed), WORDS, seen_ratio=0.3)
        seen: set[str] = set()
        out = []
        for _ in range(30):
            w = gen.next_word(seen)
            seen.add(w)
            out.append(w)
        return out

    assert stream(11) == stream(11)


def test_game_runs_indefinitely_with_perfect_play() -> None:
    game = build_verbal_memory_game(seed=3, words=WORDS)
    game.start()
    seen: set[str] = set()
    for _ in range(200):
        word = game.word
        assert word is not None
        assert game.answer(Claim.SEEN if word in seen else Claim.NEW) is True
        seen.add(word)
    assert game.score == 200
    assert game.lives == 3
    assert game.status() is GameStatus.IN_PROGRESS


def test_config_and_word_validation() -> None:
    with pytest.raises(ValueError):
        VerbalMemoryConfig(lives=0)
    with pytest.raises(ValueError):
        VerbalMemoryConfig(seen_ratio=1.5)
    with pytest.raises(ValueError):
        VerbalMemoryGenerator(SeededRng(1), (), seen_ratio=0.3)


def test_parse_words_drops_blanks_and_duplicates() -> None:
    assert parse_words("Cat\n\n dog \ncat\n") == ("cat", "dog")


def test_bundled_word_list_loads() -> None:
    words = load_words()
    assert len(words) >= 100
    assert len(set(words)) == len(words)
