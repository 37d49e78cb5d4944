"""Pygame renderer that draws a ``Frame`` as a fixed character grid.

The window behaves like an 80x24 terminal: every frame is redrawn in full,
one text row per grid row, nothing is retained between frames.
"""

from __future__ import annotations

from dataclasses import replace

import pygame

from .game_core import Frame, Line, Tone

GRID_COLS = 80
GRID_ROWS = 24

RGB = tuple[int, int, int]

# (background, foreground) per tone.
PALETTE: dict[Tone, tuple[RGB, RGB]] = {
    Tone.PLAIN: ((12, 12, 16), (230, 230, 236)),
    Tone.INFO: ((0, 120, 140), (245, 250, 255)),
    Tone.WAIT: ((170, 28, 36), (255, 240, 240)),
    Tone.GO: ((28, 150, 60), (240, 255, 240)),
    Tone.GOOD: ((20, 90, 40), (140, 240, 150)),
    Tone.BAD: ((120, 30, 30), (255, 150, 150)),
    Tone.MUTED: ((40, 40, 48), (170, 176, 190)),
}


def fit_text(text: str, cols: int = GRID_COLS) -> str:
    if cols <= 0:
        return ""
    if len(text) <= cols:
        return text
    return text[: max(0, cols - 3)] + "..."


def wrap_text(text: str, cols: int = GRID_COLS) -> list[str]:
    """Greedy word wrap to ``cols`` characters; words longer than a row are split."""

    if cols <= 0:
        return []
    rows: list[str] = []
    cur = ""
    for word in text.split():
        while len(word) > cols:
            if cur:
                rows.append(cur)
                cur = ""
            rows.append(word[:cols])
            word = word[cols:]
        trial = word if cur == "" else f"{cur} {word}"
        if len(trial) <= cols:
            cur = trial
            continue
        rows.append(cur)
        cur = word
    if cur:
        rows.append(cur)
    return rows or [""]


def wrap_line(line: Line, cols: int = GRID_COLS) -> list[Line]:
    if len(line.text) <= cols:
        return [line]
    return [replace(line, text=row) for row in wrap_text(line.text, cols)]


def progress_bar(fraction: float, width: int) -> str:
    fraction = 0.0 if fraction <= 0.0 else 1.0 if fraction >= 1.0 else fraction
    filled = int(round(fraction * width))
    return "#" * filled + "-" * (width - filled)


def layout_rows(frame: Frame, rows: int = GRID_ROWS) -> list[tuple[int, Line]]:
    """Assign grid rows to the body lines, centred between header and footer."""

    top = 3
    bottom = rows - 3
    body = [row for line in frame.lines for row in wrap_line(line)]
    if frame.progress is not None:
        body += [Line(""), Line(progress_bar(frame.progress, 40))]
    body = body[: max(0, bottom - top)]
    start = top + max(0, (bottom - top - len(body)) // 2)
    return [(start + i, line) for i, line in enumerate(body)]


class TerminalRenderer:
    def __init__(self, surface: pygame.Surface) -> None:
        self._surface = surface
        self._font_size = 0
        self._font: pygame.font.Font | None = None
        self._bold_font: pygame.font.Font | None = None

    def render(self, frame: Frame) -> None:
        w, h = self._surface.get_size()
        row_h = max(8, h // GRID_ROWS)
        self._ensure_fonts(row_h)

        bg, fg = PALETTE[frame.background]
        self._surface.fill(bg)

        # Header: inverted title bar, status right-aligned on the next row.
        pygame.draw.rect(self._surface, fg, pygame.Rect(0, 0, w, row_h))
        self._blit_row(0, fit_text(f" {frame.title}"), bg, row_h, align="left", bold=True)
        if frame.status:
            self._blit_row(1, fit_text(f"{frame.status} "), fg, row_h, align="right")

        for row, line in layout_rows(frame):
            self._draw_line(row, line, frame, row_h)

        if frame.hint:
            muted = PALETTE[Tone.MUTED][1] if frame.background is Tone.PLAIN else fg
            self._blit_row(GRID_ROWS - 1, fit_text(frame.hint), muted, row_h)

    def _draw_line(self, row: int, line: Line, frame: Frame, row_h: int) -> None:
        bg, fg = PALETTE[frame.background]
        color = fg if line.tone is None else PALETTE[line.tone][1]
        text = fit_text(line.text)
        if line.highlight and text:
            rect = self._text_rect(text, row, row_h, bold=line.bold).inflate(16, 2)
            pygame.draw.rect(self._surface, fg, rect)
            color = bg
        self._blit_row(row, text, color, row_h, bold=line.bold)

    def _ensure_fonts(self, row_h: int) -> None:
        size = max(10, int(row_h * 0.9))
        if self._font is not None and size == self._font_size:
            return
        self._font_size = size
        self._font = pygame.font.Font(None, size)
        self._bold_font = pygame.font.Font(None, size)
        self._bold_font.set_bold(True)

    def _text_rect(self, text: str, row: int, row_h: int, *, bold: bool) -> pygame.Rect:
        font = self._bold_font if bold else self._font
        assert font is not None
        tw, th = font.size(text)
        w = self._surface.get_width()
        return pygame.Rect((w - tw) // 2, row * row_h + (row_h - th) // 2, tw, th)

    def _blit_row(
        self,
        row: int,
        text: str,
        color: RGB,
        row_h: int,
        *,
        align: str = "center",
        bold: bool = False,
    ) -> pygame.Rect | None:
        if not text:
            return None
        font = self._bold_font if bold else self._font
        assert font is not None
        img = font.render(text, True, color)
        w = self._surface.get_width()
        y = row * row_h + (row_h - img.get_height()) // 2
        if align == "left":
            x = 8
        elif align == "right":
            x = w - img.get_width() - 8
        else:
            x = (w - img.get_width()) // 2
        return self._surface.blit(img, (x, y))
