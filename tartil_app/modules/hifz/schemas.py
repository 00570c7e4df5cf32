# File: tartil_app/modules/hifz/schemas.py
import datetime
from dataclasses import dataclass, field
from typing import Optional, List


class ReviewQuality:
    """Self-assessed recall score (0-5). 3 and above counts as a successful recall."""
    COMPLETE_BLACKOUT = 0
    WRONG_SERIOUS = 1
    WRONG_HESITATED = 2
    CORRECT_DIFFICULTY = 3
    CORRECT_HESITATION = 4
    PERFECT = 5

    @classmethod
    def as_dict(cls) -> dict:
        return {
            'COMPLETE_BLACKOUT': cls.COMPLETE_BLACKOUT,
            'WRONG_SERIOUS': cls.WRONG_SERIOUS,
            'WRONG_HESITATED': cls.WRONG_HESITATED,
            'CORRECT_DIFFICULTY': cls.CORRECT_DIFFICULTY,
            'CORRECT_HESITATION': cls.CORRECT_HESITATION,
            'PERFECT': cls.PERFECT,
        }


class VerseStatus:
    NEW = 'new'
    LEARNING = 'learning'
    REVIEW = 'review'
    MATURE = 'mature'

    # Due items surface least-consolidated first
    PRIORITY = {NEW: 0, LEARNING: 1, REVIEW: 2, MATURE: 3}
    ALL = (NEW, LEARNING, REVIEW, MATURE)
    MEMORIZED = (REVIEW, MATURE)


class RewardInstruction:
    MEMORIZATION_CREDIT = 'award_memorization_credit'
    PERFECT_RECALL_BONUS = 'award_perfect_recall_bonus'


@dataclass
class ScheduleState:
    """Numeric SM-2 state of one item, independent of storage."""
    interval_days: int = 1
    ease_factor: float = 2.5
    repetitions: int = 0


@dataclass
class ReviewResultDTO:
    """Result of recording one review."""
    new_interval: int
    new_ease: float
    new_repetitions: int
    new_status: str
    next_review_date: datetime.date
    reward_instructions: List[str] = field(default_factory=list)
    xp_awarded: int = 0

    def to_dict(self) -> dict:
        return {
            'new_interval': self.new_interval,
            'new_ease': self.new_ease,
            'new_repetitions': self.new_repetitions,
            'new_status': self.new_status,
            'next_review_date': self.next_review_date.isoformat(),
            'reward_instructions': list(self.reward_instructions),
            'xp_awarded': self.xp_awarded,
        }


@dataclass
class ProgressSummaryDTO:
    total: int = 0
    new: int = 0
    learning: int = 0
    review: int = 0
    mature: int = 0
    due_today: int = 0


@dataclass
class ChapterProgressDTO:
    chapter_number: int
    total_verses: int
    memorized_verses: int
    percent_complete: float
    items: list = field(default_factory=list)
    last_reviewed: Optional[datetime.date] = None
