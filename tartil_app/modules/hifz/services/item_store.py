"""
Memorization Item Store.

Keyed access to MemorizationItem rows by (learner_id, verse_key). Callers only
rely on two guarantees: insert-if-absent returns exactly one row per key, and
update_atomically applies a full read-modify-write for one key without
interleaving with another writer of the same key.
"""

import datetime
import logging
import random
import threading
import time
from typing import Callable, List, Optional, Tuple, TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm.exc import StaleDataError

from tartil_app.core.extensions import db
from ..config import HifzDefaultConfig
from ..exceptions import VerseNotQueuedError
from ..logics.chapters import make_verse_key
from ..models import MemorizationItem
from ..schemas import ScheduleState

logger = logging.getLogger(__name__)

T = TypeVar('T')

LOCKED_MESSAGES = ("database is locked", "database is busy")


def _is_lock_error(error: OperationalError) -> bool:
    message = str(error).lower()
    return any(token in message for token in LOCKED_MESSAGES)


class KeyedLockRegistry:
    """
    Striped in-process locks. The same key always maps to the same lock,
    so memory stays bounded no matter how many verses are queued.
    """

    STRIPES = 256
    _locks = [threading.Lock() for _ in range(STRIPES)]

    @classmethod
    def lock_for(cls, learner_id: str, verse_key: str) -> threading.Lock:
        return cls._locks[hash((learner_id, verse_key)) % cls.STRIPES]


class ItemStore:
    """Database access for memorization items."""

    @staticmethod
    def _fresh_query(learner_id: str, verse_key: str):
        # populate_existing: never trust a copy cached in this session's identity map
        return MemorizationItem.query.filter_by(
            learner_id=learner_id, verse_key=verse_key
        ).populate_existing()

    @staticmethod
    def get(learner_id: str, verse_key: str) -> Optional[MemorizationItem]:
        return ItemStore._fresh_query(learner_id, verse_key).first()

    @staticmethod
    def insert_if_absent(
        learner_id: str,
        chapter: int,
        verse: int,
        today: datetime.date
    ) -> Tuple[MemorizationItem, bool]:
        """
        Create the item for (learner, chapter:verse) unless it already exists.
        Returns (item, created).
        """
        verse_key = make_verse_key(chapter, verse)

        with KeyedLockRegistry.lock_for(learner_id, verse_key):
            existing = ItemStore.get(learner_id, verse_key)
            if existing:
                return existing, False

            item = MemorizationItem(
                learner_id=learner_id,
                verse_key=verse_key,
                chapter_number=chapter,
                verse_number=verse,
                next_review_date=today,
                last_review_date=None,
            )
            item.apply_schedule(ScheduleState(
                interval_days=HifzDefaultConfig.INITIAL_INTERVAL_DAYS,
                ease_factor=HifzDefaultConfig.INITIAL_EASE_FACTOR,
                repetitions=0,
            ))
            db.session.add(item)
            try:
                db.session.commit()
                return item, True
            except IntegrityError:
                # Another process won the insert; hand back its row
                db.session.rollback()
                winner = ItemStore.get(learner_id, verse_key)
                if winner is None:
                    raise
                logger.info(f"[Hifz] Concurrent add of {verse_key} for learner {learner_id} resolved to existing row")
                return winner, False

    @staticmethod
    def update_atomically(
        learner_id: str,
        verse_key: str,
        mutate: Callable[[MemorizationItem], T]
    ) -> Tuple[MemorizationItem, T]:
        """
        Lock the item, apply `mutate` to it and commit as one unit.
        Raises VerseNotQueuedError when the item does not exist.

        The keyed lock only covers this process. Writers in other processes
        are caught by the row's version counter: a stale write is rolled
        back and the whole read-compute-write is run again on fresh state,
        so `mutate` must derive everything from the item it is given.
        """
        delay = HifzDefaultConfig.UPDATE_RETRY_INITIAL_DELAY
        attempts = HifzDefaultConfig.UPDATE_RETRY_ATTEMPTS

        with KeyedLockRegistry.lock_for(learner_id, verse_key):
            for attempt in range(1, attempts + 1):
                item = ItemStore._fresh_query(learner_id, verse_key).with_for_update().first()
                if item is None:
                    db.session.rollback()
                    raise VerseNotQueuedError(learner_id, verse_key)

                try:
                    result = mutate(item)
                    db.session.add(item)
                    db.session.commit()
                    return item, result
                except (StaleDataError, OperationalError) as e:
                    db.session.rollback()
                    if isinstance(e, OperationalError) and not _is_lock_error(e):
                        raise
                    if attempt == attempts:
                        logger.error(f"[Hifz] Gave up updating {verse_key} for learner {learner_id} after {attempts} attempts")
                        raise
                    logger.debug(f"[Hifz] Concurrent write on {verse_key} (attempt {attempt}), retrying")
                    time.sleep(delay * random.uniform(0.5, 1.5))
                    delay = min(delay * 2, HifzDefaultConfig.UPDATE_RETRY_MAX_DELAY)
                except Exception:
                    db.session.rollback()
                    raise

    @staticmethod
    def list_for_learner(learner_id: str, chapter: Optional[int] = None) -> List[MemorizationItem]:
        query = MemorizationItem.query.filter_by(learner_id=learner_id)
        if chapter is not None:
            query = query.filter_by(chapter_number=chapter)
            return query.order_by(MemorizationItem.verse_number).all()
        return query.order_by(MemorizationItem.item_id).all()
