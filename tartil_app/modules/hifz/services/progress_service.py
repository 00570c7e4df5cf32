from typing import Optional
import datetime
from sqlalchemy import func
from tartil_app.core.extensions import db
from ..logics.chapters import chapter_length, validate_chapter
from ..models import MemorizationItem
from ..schemas import ProgressSummaryDTO, ChapterProgressDTO, VerseStatus
from .item_store import ItemStore


class ProgressService:
    """Derived progress views. Holds no state of its own."""

    @staticmethod
    def get_progress(learner_id: str, today: Optional[datetime.date] = None) -> ProgressSummaryDTO:
        if today is None:
            today = datetime.datetime.now(datetime.timezone.utc).date()

        rows = (
            db.session.query(MemorizationItem.status, func.count(MemorizationItem.item_id))
            .filter(MemorizationItem.learner_id == learner_id)
            .group_by(MemorizationItem.status)
            .all()
        )
        counts = {status: count for status, count in rows}

        due_today = MemorizationItem.query.filter(
            MemorizationItem.learner_id == learner_id,
            MemorizationItem.next_review_date <= today
        ).count()

        return ProgressSummaryDTO(
            total=sum(counts.values()),
            new=counts.get(VerseStatus.NEW, 0),
            learning=counts.get(VerseStatus.LEARNING, 0),
            review=counts.get(VerseStatus.REVIEW, 0),
            mature=counts.get(VerseStatus.MATURE, 0),
            due_today=due_today,
        )

    @staticmethod
    def get_chapter_progress(learner_id: str, chapter: int) -> ChapterProgressDTO:
        """Memorized verses are those in review or mature state. percent_complete stays within 0-100."""
        validate_chapter(chapter)
        items = ItemStore.list_for_learner(learner_id, chapter=chapter)
        total_verses = chapter_length(chapter)
        # Verse numbers past the end of the chapter are stored but never counted
        memorized = [
            i for i in items
            if i.status in VerseStatus.MEMORIZED and i.verse_number <= total_verses
        ]
        reviewed_dates = [i.last_review_date for i in items if i.last_review_date]

        return ChapterProgressDTO(
            chapter_number=chapter,
            total_verses=total_verses,
            memorized_verses=len(memorized),
            percent_complete=(len(memorized) / total_verses) * 100 if total_verses > 0 else 0.0,
            items=items,
            last_reviewed=max(reviewed_dates) if reviewed_dates else None,
        )
