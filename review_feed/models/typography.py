"""Text styles applied to review row fragments."""

from pydantic import BaseModel, ConfigDict, Field


class TextStyle(BaseModel):
    """Font size and color for a text fragment."""

    model_config = ConfigDict(frozen=True)

    name: str
    font_size: int = Field(..., gt=0)
    color: str = "#000000"
    line_height: float | None = Field(default=None, description="Overrides the font's own line height")


class StyledText(BaseModel):
    """A text fragment paired with the style it is rendered in."""

    model_config = ConfigDict(frozen=True)

    text: str
    style: TextStyle

    @property
    def is_empty(self) -> bool:
        return not self.text

    def __str__(self) -> str:
        return self.text


USERNAME = TextStyle(name="username", font_size=17)
TEXT = TextStyle(name="text", font_size=16)
CREATED = TextStyle(name="created", font_size=14, color="#8A8A8E")
REVIEW_COUNT = TextStyle(name="review_count", font_size=15, color="#8A8A8E")
SHOW_MORE = TextStyle(name="show_more", font_size=16, color="#3478F6")


def styled(text: str, style: TextStyle) -> StyledText:
    """Attach a style to a piece of text."""
    return StyledText(text=text, style=style)
