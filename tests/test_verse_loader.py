"""Tests for queuing verses (single and ranges)."""

import datetime

import pytest

from tartil_app.core.extensions import db
from tartil_app.core.signals import verse_added
from tartil_app.modules.hifz.exceptions import InvalidVerseError
from tartil_app.modules.hifz.interface import HifzInterface
from tartil_app.modules.hifz.models import MemorizationItem
from tartil_app.modules.hifz.schemas import VerseStatus


class TestAddVerse:

    def test_new_item_has_initial_state(self, app, today):
        item = HifzInterface.add_verse('L1', 1, 1, today=today)
        assert item.verse_key == '1:1'
        assert item.chapter_number == 1
        assert item.verse_number == 1
        assert item.interval_days == 1
        assert item.ease_factor == 2.5
        assert item.repetitions == 0
        assert item.status == VerseStatus.NEW
        assert item.next_review_date == today
        assert item.last_review_date is None

    def test_add_is_idempotent(self, app, today):
        first = HifzInterface.add_verse('L1', 1, 1, today=today)
        again = HifzInterface.add_verse('L1', 1, 1, today=today)
        assert again.item_id == first.item_id
        assert MemorizationItem.query.filter_by(learner_id='L1').count() == 1

    def test_second_add_leaves_row_untouched(self, app, today):
        first = HifzInterface.add_verse('L1', 2, 255, today=today)
        db.session.expire_all()
        before = first.to_dict()
        assert before['updated_at'] is not None

        later = today + datetime.timedelta(days=3)
        again = HifzInterface.add_verse('L1', 2, 255, today=later)
        db.session.expire_all()

        assert again.to_dict() == before
        assert again.updated_at == first.updated_at
        assert again.next_review_date == today

    def test_readd_does_not_reset_schedule(self, app, bridge, today):
        HifzInterface.add_verse('L1', 1, 1, today=today)
        HifzInterface.record_review('L1', '1:1', 5, today=today)
        HifzInterface.record_review('L1', '1:1', 5, today=today)

        item = HifzInterface.add_verse('L1', 1, 1, today=today)
        assert item.repetitions == 2
        assert item.interval_days == 6

    def test_same_verse_for_different_learners(self, app, today):
        a = HifzInterface.add_verse('L1', 2, 255, today=today)
        b = HifzInterface.add_verse('L2', 2, 255, today=today)
        assert a.item_id != b.item_id

    @pytest.mark.parametrize("chapter,verse", [(0, 1), (115, 1), (1, 0), ('1', 1)])
    def test_invalid_address_rejected(self, app, chapter, verse):
        with pytest.raises(InvalidVerseError):
            HifzInterface.add_verse('L1', chapter, verse)
        assert MemorizationItem.query.count() == 0

    def test_signal_only_on_creation(self, app, today):
        received = []

        def _listener(sender, **kwargs):
            received.append(kwargs)

        verse_added.connect(_listener)
        try:
            HifzInterface.add_verse('L1', 1, 1, today=today)
            HifzInterface.add_verse('L1', 1, 1, today=today)
        finally:
            verse_added.disconnect(_listener)

        assert len(received) == 1
        assert received[0]['learner_id'] == 'L1'
        assert received[0]['verse_key'] == '1:1'
        assert received[0]['item']['status'] == VerseStatus.NEW


class TestAddRange:

    def test_range_is_inclusive_and_ordered(self, app, today):
        items = HifzInterface.add_range('L1', 1, 1, 7, today=today)
        assert [i.verse_key for i in items] == [f'1:{v}' for v in range(1, 8)]

    def test_single_verse_range(self, app, today):
        items = HifzInterface.add_range('L1', 112, 3, 3, today=today)
        assert len(items) == 1
        assert items[0].verse_key == '112:3'

    def test_overlapping_range_returns_existing(self, app, today):
        HifzInterface.add_range('L1', 1, 1, 3, today=today)
        items = HifzInterface.add_range('L1', 1, 2, 5, today=today)
        assert len(items) == 4
        assert MemorizationItem.query.filter_by(learner_id='L1').count() == 5

    def test_reversed_range_rejected(self, app):
        with pytest.raises(InvalidVerseError):
            HifzInterface.add_range('L1', 1, 5, 3)
        assert MemorizationItem.query.count() == 0

    def test_invalid_chapter_rejected(self, app):
        with pytest.raises(InvalidVerseError):
            HifzInterface.add_range('L1', 200, 1, 3)
