from typing import List, Optional
import datetime
import logging
from sqlalchemy import case
from tartil_app.core.extensions import db
from tartil_app.core.signals import verse_reviewed
from ..engine.core import SM2Engine
from ..exceptions import InvalidRatingError
from ..logics.chapters import parse_verse_key, make_verse_key
from ..models import MemorizationItem
from ..schemas import ReviewResultDTO, VerseStatus
from .item_store import ItemStore
from .reward_bridge import RewardDispatcher
from .settings_service import HifzSettingsService

logger = logging.getLogger(__name__)


def _today() -> datetime.date:
    return datetime.datetime.now(datetime.timezone.utc).date()


class SchedulerService:
    """
    Orchestrator for Hifz scheduling.
    Handles DB interactions, Engine calls, reward delivery and Signal emission.
    """

    @staticmethod
    def validate_quality(quality) -> int:
        if isinstance(quality, bool) or not isinstance(quality, int):
            raise InvalidRatingError(f"Quality must be an integer 0-5, got {quality!r}", errors={'quality': quality})
        if not (0 <= quality <= 5):
            raise InvalidRatingError(f"Quality must be 0-5, got {quality}", errors={'quality': quality})
        return quality

    @staticmethod
    def record_review(
        learner_id: str,
        verse_key: str,
        quality: int,
        today: Optional[datetime.date] = None
    ) -> ReviewResultDTO:
        """
        Main entry point for processing a review.
        The schedule change is committed first; rewards are delivered afterwards.
        """
        SchedulerService.validate_quality(quality)
        chapter, verse = parse_verse_key(verse_key)
        verse_key = make_verse_key(chapter, verse)
        if today is None:
            today = _today()

        def _apply(item: MemorizationItem) -> ReviewResultDTO:
            new_state, status, next_review_date, instructions = SM2Engine.review(
                item.schedule_state, quality, today
            )
            item.apply_schedule(new_state)
            item.next_review_date = next_review_date
            item.last_review_date = today
            return ReviewResultDTO(
                new_interval=new_state.interval_days,
                new_ease=new_state.ease_factor,
                new_repetitions=new_state.repetitions,
                new_status=status,
                next_review_date=next_review_date,
                reward_instructions=instructions,
            )

        # 1. Commit schedule (per-item lock held only here)
        item, result = ItemStore.update_atomically(learner_id, verse_key, _apply)

        logger.info(
            f"Review recorded for {verse_key}: learner={learner_id} quality={quality}, "
            f"interval={result.new_interval}d, status={result.new_status}"
        )

        # 2. Best-effort rewards
        if result.reward_instructions:
            result.xp_awarded = RewardDispatcher.deliver(learner_id, result.reward_instructions)

        # 3. Notify observers; the review is stored whatever a receiver does
        try:
            verse_reviewed.send(
                SchedulerService,
                learner_id=learner_id,
                verse_key=verse_key,
                quality=quality,
                new_state=result.to_dict()
            )
        except Exception as e:
            db.session.rollback()
            logger.error(f"[Hifz] verse_reviewed receiver failed for {verse_key}: {e}", exc_info=True)

        return result

    @staticmethod
    def get_due_reviews(
        learner_id: str,
        limit: Optional[int] = None,
        today: Optional[datetime.date] = None
    ) -> List[MemorizationItem]:
        """
        Items with next_review_date on or before today, least consolidated first.
        """
        if limit is None:
            limit = int(HifzSettingsService.get('HIFZ_DUE_LIMIT'))
        if limit <= 0:
            return []
        if today is None:
            today = _today()

        priority = case(
            VerseStatus.PRIORITY,
            value=MemorizationItem.status,
            else_=len(VerseStatus.PRIORITY)
        )
        return MemorizationItem.query.filter(
            MemorizationItem.learner_id == learner_id,
            MemorizationItem.next_review_date <= today
        ).order_by(priority, MemorizationItem.item_id).limit(limit).all()
