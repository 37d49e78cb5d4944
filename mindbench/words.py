from __future__ import annotations

from pathlib import Path

DEFAULT_WORDS_PATH = Path(__file__).resolve().parent / "assets" / "words.txt"


def parse_words(text: str) -> tuple[str, ...]:
    """One word per line; blanks and repeats are dropped, first occurrence wins."""

    seen: set[str] = set()
    out: list[str] = []
    for raw in text.splitlines():
        word = raw.strip().lower()
        if not word or word in seen:
            continue
        seen.add(word)
        out.append(word)
    return tuple(out)


def load_words(path: Path | None = None) -> tuple[str, ...]:
    words = parse_words((path or DEFAULT_WORDS_PATH).read_text(encoding="utf-8"))
    if not words:
        raise ValueError(f"no words found in {path or DEFAULT_WORDS_PATH}")
    return words
