"""Verse Range Loader: queues single verses or whole ranges for memorization."""

from __future__ import annotations

import datetime
import logging
from typing import List, Optional

from tartil_app.core.extensions import db
from tartil_app.core.signals import verse_added
from ..exceptions import InvalidVerseError
from ..logics.chapters import validate_chapter, validate_verse
from ..models import MemorizationItem
from .item_store import ItemStore

logger = logging.getLogger(__name__)


class VerseLoaderService:

    @staticmethod
    def add_verse(
        learner_id: str,
        chapter: int,
        verse: int,
        today: Optional[datetime.date] = None
    ) -> MemorizationItem:
        """
        Queue one verse. Adding a verse that is already queued returns the
        stored item untouched.
        """
        validate_chapter(chapter)
        validate_verse(verse)
        if today is None:
            today = datetime.datetime.now(datetime.timezone.utc).date()

        item, created = ItemStore.insert_if_absent(learner_id, chapter, verse, today)

        if created:
            logger.info(f"Added verse {item.verse_key} to hifz queue for learner {learner_id}")
            verse_added.send(
                VerseLoaderService,
                learner_id=learner_id,
                verse_key=item.verse_key,
                item=item.to_dict()
            )
        return item

    @staticmethod
    def add_range(
        learner_id: str,
        chapter: int,
        start_verse: int,
        end_verse: int,
        today: Optional[datetime.date] = None
    ) -> List[MemorizationItem]:
        """
        Queue every verse in [start_verse, end_verse]. Each verse is added on
        its own; one failing verse is logged and skipped.
        """
        validate_chapter(chapter)
        validate_verse(start_verse)
        validate_verse(end_verse)
        if start_verse > end_verse:
            raise InvalidVerseError(
                f"Invalid verse range {start_verse}-{end_verse}: start must not exceed end",
                errors={'start_verse': start_verse, 'end_verse': end_verse}
            )
        if today is None:
            today = datetime.datetime.now(datetime.timezone.utc).date()

        items = []
        for verse in range(start_verse, end_verse + 1):
            try:
                items.append(VerseLoaderService.add_verse(learner_id, chapter, verse, today=today))
            except Exception as e:
                db.session.rollback()
                logger.error(
                    f"Failed to add verse {chapter}:{verse} for learner {learner_id}: {e}",
                    exc_info=True
                )

        logger.info(
            f"Range {chapter}:{start_verse}-{end_verse} loaded for learner {learner_id} "
            f"({len(items)}/{end_verse - start_verse + 1} verses)"
        )
        return items
