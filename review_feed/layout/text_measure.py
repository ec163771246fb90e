"""Word-wrapped text measurement backed by Pillow fonts."""

from functools import lru_cache

from PIL import ImageFont

from config.settings import settings
from review_feed.layout.geometry import Size
from review_feed.models.typography import StyledText, TextStyle


class TextMeasurer:
    """
    Measures styled text the way a multi-line label would lay it out.

    Text is broken at whitespace; a word wider than the available width is
    broken between characters. Explicit newlines start a new line.
    Fonts are loaded once per size and reused across calls.
    """

    def __init__(self, font_path: str | None = None):
        self.font_path = font_path if font_path is not None else settings.font_path
        self._font = lru_cache(maxsize=32)(self._load_font)

    def font(self, style: TextStyle) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        return self._font(style.font_size)

    def line_height(self, style: TextStyle) -> float:
        if style.line_height is not None:
            return style.line_height
        font = self.font(style)
        if isinstance(font, ImageFont.FreeTypeFont):
            ascent, descent = font.getmetrics()
            return float(ascent + descent)
        left, top, right, bottom = font.getbbox("Ay")
        return float(bottom - top)

    def text_width(self, text: str, style: TextStyle) -> float:
        if not text:
            return 0.0
        return float(self.font(style).getlength(text))

    def wrap(self, text: str, style: TextStyle, width: float) -> list[str]:
        """Split *text* into the lines it occupies within *width*."""
        lines: list[str] = []
        for paragraph in text.split("\n"):
            words = paragraph.split()
            if not words:
                lines.append("")
                continue

            current = ""
            for word in words:
                candidate = f"{current} {word}" if current else word
                if self.text_width(candidate, style) <= width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                if self.text_width(word, style) <= width:
                    current = word
                else:
                    pieces = self._break_word(word, style, width)
                    lines.extend(pieces[:-1])
                    current = pieces[-1]
            lines.append(current)
        return lines

    def measure(self, text: StyledText, width: float, max_lines: int = 0) -> Size:
        """
        Bounding size of *text* wrapped to *width*.

        Args:
            text: Styled text to measure
            width: Available width
            max_lines: Line clamp, 0 for unlimited

        Returns:
            Size of the occupied area
        """
        if text.is_empty:
            return Size(0.0, 0.0)

        lines = self.wrap(text.text, text.style, width)
        if max_lines > 0:
            lines = lines[:max_lines]
        line_width = max(self.text_width(line, text.style) for line in lines)
        return Size(min(line_width, width), len(lines) * self.line_height(text.style))

    def _break_word(self, word: str, style: TextStyle, width: float) -> list[str]:
        pieces: list[str] = []
        current = ""
        for char in word:
            if current and self.text_width(current + char, style) > width:
                pieces.append(current)
                current = char
            else:
                current += char
        pieces.append(current)
        return pieces

    def _load_font(self, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        if self.font_path:
            return ImageFont.truetype(self.font_path, size)
        return ImageFont.load_default(size=size)
