# File: tartil_app/modules/hifz/interface.py
from typing import Optional, List, Dict
import datetime
from .models import MemorizationItem
from .logics.chapters import parse_verse_key, make_verse_key
from .schemas import ReviewQuality, ReviewResultDTO, ProgressSummaryDTO, ChapterProgressDTO
from .services.item_store import ItemStore
from .services.loader_service import VerseLoaderService
from .services.scheduler_service import SchedulerService
from .services.progress_service import ProgressService


class HifzInterface:
    """Public API for the Hifz module."""

    @staticmethod
    def add_verse(learner_id: str, chapter: int, verse: int,
                  today: Optional[datetime.date] = None) -> MemorizationItem:
        """Queue one verse for memorization (idempotent)."""
        return VerseLoaderService.add_verse(learner_id, chapter, verse, today=today)

    @staticmethod
    def add_range(learner_id: str, chapter: int, start_verse: int, end_verse: int,
                  today: Optional[datetime.date] = None) -> List[MemorizationItem]:
        """Queue an inclusive verse range of one chapter."""
        return VerseLoaderService.add_range(learner_id, chapter, start_verse, end_verse, today=today)

    @staticmethod
    def get_due_reviews(learner_id: str, limit: Optional[int] = None,
                        today: Optional[datetime.date] = None) -> List[MemorizationItem]:
        return SchedulerService.get_due_reviews(learner_id, limit=limit, today=today)

    @staticmethod
    def record_review(learner_id: str, verse_key: str, quality: int,
                      today: Optional[datetime.date] = None) -> ReviewResultDTO:
        return SchedulerService.record_review(learner_id, verse_key, quality, today=today)

    @staticmethod
    def get_progress(learner_id: str, today: Optional[datetime.date] = None) -> ProgressSummaryDTO:
        return ProgressService.get_progress(learner_id, today=today)

    @staticmethod
    def get_chapter_progress(learner_id: str, chapter: int) -> ChapterProgressDTO:
        return ProgressService.get_chapter_progress(learner_id, chapter)

    @staticmethod
    def get_item(learner_id: str, verse_key: str) -> Optional[MemorizationItem]:
        """Look up a queued verse. Returns None when it is not queued."""
        chapter, verse = parse_verse_key(verse_key)
        return ItemStore.get(learner_id, make_verse_key(chapter, verse))

    @staticmethod
    def get_quality_ratings() -> Dict[str, int]:
        return ReviewQuality.as_dict()
