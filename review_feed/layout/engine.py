"""Row geometry for review list items."""

from dataclasses import dataclass

from review_feed.layout.geometry import ZERO_RECT, Rect, Size
from review_feed.layout.text_measure import TextMeasurer
from review_feed.models.items import ListItem, ReviewCountItem, ReviewDisplayItem
from review_feed.models.typography import SHOW_MORE, styled
from review_feed.rendering.rating import RATING_IMAGE_SIZE


@dataclass(frozen=True)
class ReviewRowLayout:
    """Frames of every element in a review row, plus the row height."""

    avatar: Rect
    username: Rect
    rating: Rect
    photos: tuple[Rect, ...]
    text: Rect
    show_more: Rect | None
    created: Rect
    height: float

    @property
    def has_show_more(self) -> bool:
        return self.show_more is not None


@dataclass(frozen=True)
class CountRowLayout:
    """Frame of the centered review-count label, plus the row height."""

    label: Rect
    height: float


@dataclass(frozen=True)
class Insets:
    top: float
    left: float
    bottom: float
    right: float


class LayoutEngine:
    """
    Computes review row geometry from content and available width.

    The row is a vertical stack: avatar beside the name, rating stars,
    optional photo strip, clamped review text, optional "show more" button
    and the creation date. Layout is a pure function of the item and width;
    the only state kept between calls is the measurer's font cache.
    """

    SHOW_MORE_TEXT = styled("Показать полностью...", SHOW_MORE)

    INSETS = Insets(top=9.0, left=12.0, bottom=9.0, right=12.0)

    AVATAR_SIZE = Size(36.0, 36.0)
    AVATAR_CORNER_RADIUS = 18.0
    RATING_SIZE = Size(*RATING_IMAGE_SIZE)
    PHOTO_SIZE = Size(55.0, 66.0)
    PHOTO_CORNER_RADIUS = 8.0

    # Horizontal gap between avatar and name.
    AVATAR_TO_USERNAME = 10.0
    USERNAME_TO_RATING = 6.0
    # Used when the row has no photos.
    RATING_TO_TEXT = 6.0
    RATING_TO_PHOTOS = 10.0
    # Horizontal gap between photo tiles.
    PHOTOS_SPACING = 8.0
    PHOTOS_TO_TEXT = 10.0
    # Below the text: to the date, or to the "show more" button if present.
    TEXT_TO_CREATED = 6.0
    SHOW_MORE_TO_CREATED = 6.0

    def __init__(self, measurer: TextMeasurer | None = None):
        self.measurer = measurer or TextMeasurer()

    def height(self, item: ListItem, max_width: float) -> float:
        """Row height of any list item."""
        match item:
            case ReviewDisplayItem():
                return self.layout_review(item, max_width).height
            case ReviewCountItem():
                return self.layout_count(item, max_width).height
            case _:
                raise TypeError(f"Unsupported list item: {type(item).__name__}")

    def layout_review(self, item: ReviewDisplayItem, max_width: float) -> ReviewRowLayout:
        insets = self.INSETS
        content_left = insets.left + self.AVATAR_SIZE.width + self.AVATAR_TO_USERNAME
        width = max(0.0, max_width - content_left - insets.right)
        measure = self.measurer.measure

        avatar = Rect.at(insets.left, insets.top, self.AVATAR_SIZE)
        username = Rect.at(content_left, insets.top, measure(item.full_name, width))
        max_y = username.max_y + self.USERNAME_TO_RATING

        rating = Rect.at(content_left, max_y, self.RATING_SIZE)
        max_y = rating.max_y + self.RATING_TO_TEXT

        photos: tuple[Rect, ...] = ()
        if item.photos:
            photos = self._photo_frames(len(item.photos), content_left, rating.max_y + self.RATING_TO_PHOTOS)
            max_y = photos[0].max_y + self.PHOTOS_TO_TEXT

        text = ZERO_RECT
        show_more_visible = False
        if not item.review_text.is_empty:
            line_height = self.measurer.line_height(item.review_text.style)
            clamped_height = line_height * item.max_lines
            full_height = measure(item.review_text, width).height
            show_more_visible = item.max_lines != 0 and full_height > clamped_height

            text = Rect.at(content_left, max_y, measure(item.review_text, width, max_lines=item.max_lines))
            max_y = text.max_y + self.TEXT_TO_CREATED

        show_more = None
        if show_more_visible:
            show_more = Rect.at(content_left, max_y, measure(self.SHOW_MORE_TEXT, float("inf")))
            max_y = show_more.max_y + self.SHOW_MORE_TO_CREATED

        created = Rect.at(content_left, max_y, measure(item.created, width))

        return ReviewRowLayout(
            avatar=avatar,
            username=username,
            rating=rating,
            photos=photos,
            text=text,
            show_more=show_more,
            created=created,
            height=created.max_y + insets.bottom,
        )

    def layout_count(self, item: ReviewCountItem, max_width: float) -> CountRowLayout:
        insets = self.INSETS
        width = max(0.0, max_width - insets.left - insets.right)
        size = self.measurer.measure(item.text, width)
        label = Rect.at(insets.left + (width - size.width) / 2, insets.top, size)
        return CountRowLayout(label=label, height=label.max_y + insets.bottom)

    def _photo_frames(self, count: int, left: float, top: float) -> tuple[Rect, ...]:
        step = self.PHOTO_SIZE.width + self.PHOTOS_SPACING
        return tuple(Rect.at(left + index * step, top, self.PHOTO_SIZE) for index in range(count))
