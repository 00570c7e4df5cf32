"""
Tests for recording reviews

Tests cover:
- Full state transitions through the stored item
- Failure resets
- Invalid ratings and unknown verses
- Reward delivery after commit
- verse_reviewed signal payload
"""

import datetime

import pytest

from tartil_app.core.extensions import db
from tartil_app.core.signals import verse_reviewed
from tartil_app.modules.hifz.exceptions import InvalidRatingError, InvalidVerseError, VerseNotQueuedError
from tartil_app.modules.hifz.interface import HifzInterface
from tartil_app.modules.hifz.models import MemorizationItem
from tartil_app.modules.hifz.schemas import RewardInstruction, ScheduleState, VerseStatus


def _stored(learner_id, verse_key):
    db.session.expire_all()
    return MemorizationItem.query.filter_by(learner_id=learner_id, verse_key=verse_key).one()


class TestReviewProgression:

    def test_three_perfect_reviews(self, app, bridge, today):
        HifzInterface.add_verse('L1', 1, 1, today=today)

        first = HifzInterface.record_review('L1', '1:1', 5, today=today)
        assert (first.new_interval, first.new_ease, first.new_repetitions) == (1, 2.5, 1)
        assert first.new_status == VerseStatus.LEARNING

        second = HifzInterface.record_review('L1', '1:1', 5, today=today)
        assert (second.new_interval, second.new_repetitions) == (6, 2)
        assert second.new_status == VerseStatus.LEARNING

        third = HifzInterface.record_review('L1', '1:1', 5, today=today)
        assert (third.new_interval, third.new_repetitions) == (15, 3)
        assert third.new_status == VerseStatus.REVIEW

        item = _stored('L1', '1:1')
        assert item.interval_days == 15
        assert item.repetitions == 3
        assert item.status == VerseStatus.REVIEW
        assert item.next_review_date == today + datetime.timedelta(days=15)
        assert item.last_review_date == today

    def test_failure_resets_mature_item(self, app, bridge, today):
        item = HifzInterface.add_verse('L1', 18, 10, today=today)
        item.apply_schedule(ScheduleState(interval_days=30, ease_factor=2.0, repetitions=5))
        db.session.commit()
        assert item.status == VerseStatus.MATURE

        result = HifzInterface.record_review('L1', '18:10', 1, today=today)

        assert result.new_interval == 1
        assert result.new_repetitions == 0
        assert result.new_ease == 2.0
        assert result.new_status == VerseStatus.NEW
        assert result.reward_instructions == []
        assert result.next_review_date == today + datetime.timedelta(days=1)
        assert _stored('L1', '18:10').status == VerseStatus.NEW

    def test_review_becomes_mature(self, app, bridge, today):
        item = HifzInterface.add_verse('L1', 2, 1, today=today)
        item.apply_schedule(ScheduleState(interval_days=15, ease_factor=2.5, repetitions=3))
        db.session.commit()

        result = HifzInterface.record_review('L1', '2:1', 4, today=today)
        assert result.new_interval == 38
        assert result.new_status == VerseStatus.MATURE

    def test_interval_capped(self, app, bridge, today):
        item = HifzInterface.add_verse('L1', 2, 2, today=today)
        item.apply_schedule(ScheduleState(interval_days=200, ease_factor=2.5, repetitions=8))
        db.session.commit()

        result = HifzInterface.record_review('L1', '2:2', 5, today=today)
        assert result.new_interval == 365
        assert result.next_review_date == today + datetime.timedelta(days=365)

    def test_key_is_normalized(self, app, bridge, today):
        HifzInterface.add_verse('L1', 3, 7, today=today)
        HifzInterface.record_review('L1', ' 3:7 ', 4, today=today)
        assert _stored('L1', '3:7').repetitions == 1


class TestReviewValidation:

    @pytest.mark.parametrize("quality", [-1, 6, 3.0, '4', True, None])
    def test_invalid_quality_rejected(self, app, bridge, today, quality):
        HifzInterface.add_verse('L1', 1, 1, today=today)
        with pytest.raises(InvalidRatingError):
            HifzInterface.record_review('L1', '1:1', quality, today=today)
        item = _stored('L1', '1:1')
        assert item.repetitions == 0
        assert item.last_review_date is None
        assert bridge.calls == []

    def test_unknown_verse(self, app, bridge):
        with pytest.raises(VerseNotQueuedError) as exc_info:
            HifzInterface.record_review('L1', '1:1', 4)
        assert exc_info.value.status_code == 404
        assert MemorizationItem.query.count() == 0

    def test_other_learners_item_not_touched(self, app, bridge, today):
        HifzInterface.add_verse('L2', 1, 1, today=today)
        with pytest.raises(VerseNotQueuedError):
            HifzInterface.record_review('L1', '1:1', 4, today=today)
        assert _stored('L2', '1:1').repetitions == 0

    def test_malformed_key(self, app, bridge):
        with pytest.raises(InvalidVerseError):
            HifzInterface.record_review('L1', 'fatiha', 4)


class TestRewards:

    def test_rewards_by_quality(self, app, bridge, today):
        HifzInterface.add_range('L1', 1, 1, 3, today=today)
        HifzInterface.record_review('L1', '1:1', 2, today=today)
        HifzInterface.record_review('L1', '1:2', 3, today=today)
        HifzInterface.record_review('L1', '1:3', 5, today=today)
        assert bridge.calls == [('credit', 'L1'), ('credit', 'L1'), ('bonus', 'L1')]

    def test_xp_awarded_reported(self, app, bridge, today):
        HifzInterface.add_verse('L1', 1, 1, today=today)
        result = HifzInterface.record_review('L1', '1:1', 5, today=today)
        assert result.reward_instructions == [
            RewardInstruction.MEMORIZATION_CREDIT,
            RewardInstruction.PERFECT_RECALL_BONUS,
        ]
        assert result.xp_awarded == 62

    def test_reward_failure_keeps_committed_schedule(self, app, bridge, today):
        bridge.fail_on = {'credit', 'bonus'}
        HifzInterface.add_verse('L1', 1, 1, today=today)

        result = HifzInterface.record_review('L1', '1:1', 5, today=today)

        assert result.new_repetitions == 1
        assert result.xp_awarded == 0
        assert _stored('L1', '1:1').repetitions == 1

    def test_credit_failure_still_delivers_bonus(self, app, bridge, today):
        bridge.fail_on = {'credit'}
        HifzInterface.add_verse('L1', 1, 1, today=today)

        result = HifzInterface.record_review('L1', '1:1', 5, today=today)

        assert ('bonus', 'L1') in bridge.calls
        assert result.xp_awarded == 37


class TestReviewSignal:

    def test_signal_payload(self, app, bridge, today):
        received = []

        def _listener(sender, **kwargs):
            received.append(kwargs)

        HifzInterface.add_verse('L1', 1, 1, today=today)
        verse_reviewed.connect(_listener)
        try:
            HifzInterface.record_review('L1', '1:1', 4, today=today)
        finally:
            verse_reviewed.disconnect(_listener)

        assert len(received) == 1
        payload = received[0]
        assert payload['learner_id'] == 'L1'
        assert payload['verse_key'] == '1:1'
        assert payload['quality'] == 4
        assert payload['new_state']['new_status'] == VerseStatus.LEARNING
        assert payload['new_state']['next_review_date'] == (today + datetime.timedelta(days=1)).isoformat()

    def test_failing_receiver_does_not_fail_review(self, app, bridge, today):
        def _broken(sender, **kwargs):
            raise RuntimeError('listener crashed')

        HifzInterface.add_verse('L1', 1, 1, today=today)
        verse_reviewed.connect(_broken)
        try:
            result = HifzInterface.record_review('L1', '1:1', 4, today=today)
        finally:
            verse_reviewed.disconnect(_broken)

        assert result.new_repetitions == 1
        assert _stored('L1', '1:1').repetitions == 1
