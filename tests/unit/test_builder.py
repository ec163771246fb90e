"""Tests for item building and pluralization."""

import pytest

from review_feed.models.review import ReviewRecord
from review_feed.state.builder import ItemBuilder, review_word


class TestReviewWord:
    @pytest.mark.parametrize("count", [1, 21, 101])
    def test_singular(self, count):
        assert review_word(count) == "отзыв"

    @pytest.mark.parametrize("count", [2, 3, 4, 22, 34])
    def test_few(self, count):
        assert review_word(count) == "отзыва"

    @pytest.mark.parametrize("count", [0, 5, 9, 10, 20, 100])
    def test_many(self, count):
        assert review_word(count) == "отзывов"

    def test_teens_follow_last_digit(self):
        """Only the last digit decides, so the teens are not special-cased."""
        assert review_word(11) == "отзыв"
        assert review_word(12) == "отзыва"
        assert review_word(14) == "отзыва"
        assert review_word(15) == "отзывов"


class TestItemBuilder:
    def test_make_review_item(self, sample_record):
        item = ItemBuilder().make_review_item(sample_record)
        assert item.full_name.text == "Имя1 Фамилия1"
        assert item.rating == sample_record.rating
        assert item.review_text.text == sample_record.text
        assert item.review_text.style.name == "text"
        assert item.created.style.name == "created"
        assert item.photo_urls == ("https://cdn.test/p/1.png",)
        assert item.avatar_url == sample_record.avatar_url

    def test_assets_start_absent(self, sample_record):
        item = ItemBuilder().make_review_item(sample_record)
        assert item.avatar_image is None
        assert item.photos is None
        assert item.max_lines == 3

    def test_fresh_id_per_item(self, sample_record):
        builder = ItemBuilder()
        assert builder.make_review_item(sample_record).id != builder.make_review_item(sample_record).id

    def test_missing_photo_urls(self, make_record):
        record = ReviewRecord.model_validate(make_record(2, photo_urls=None))
        assert ItemBuilder().make_review_item(record).photo_urls == ()

    def test_custom_line_limit(self, sample_record):
        assert ItemBuilder(default_max_lines=5).make_review_item(sample_record).max_lines == 5

    def test_make_count_item(self):
        item = ItemBuilder().make_count_item(24)
        assert item.count == 24
        assert item.text.text == "24 отзыва"
        assert item.text.style.name == "review_count"
