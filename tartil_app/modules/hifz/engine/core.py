from __future__ import annotations
import datetime
import logging
import math
from typing import List, Tuple

from ..config import HifzDefaultConfig as C
from ..schemas import ScheduleState, VerseStatus, RewardInstruction

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; intervals round .5 upwards
    return int(math.floor(value + 0.5))


class SM2Engine:
    """
    SM-2 scheduler for verse memorization.
    Pure Logic Layer: No Database, No Flask Context.
    """

    @staticmethod
    def clamp_quality(quality: int) -> int:
        return max(0, min(5, int(quality)))

    @staticmethod
    def clamp_ease(ease: float) -> float:
        return max(C.MIN_EASE_FACTOR, min(C.MAX_EASE_FACTOR, ease))

    @staticmethod
    def derive_status(repetitions: int, interval_days: int) -> str:
        """Classify an item from its repetition count and interval."""
        if repetitions == 0:
            return VerseStatus.NEW
        if repetitions < C.LEARNING_REPETITIONS:
            return VerseStatus.LEARNING
        if interval_days < C.MATURE_INTERVAL_DAYS:
            return VerseStatus.REVIEW
        return VerseStatus.MATURE

    @staticmethod
    def calculate_next_review(state: ScheduleState, quality: int) -> ScheduleState:
        """
        Compute the next interval, ease factor and repetition count.

        A failed recall (quality < 3) resets repetitions and interval but
        leaves the ease factor untouched. A successful recall follows the
        1 -> 6 -> interval * ease progression, using the ease factor held
        before this review.
        """
        q = SM2Engine.clamp_quality(quality)

        if q < C.PASSING_QUALITY:
            new_repetitions = 0
            new_interval = C.INITIAL_INTERVAL_DAYS
            new_ease = state.ease_factor
        else:
            new_repetitions = state.repetitions + 1

            if new_repetitions == 1:
                new_interval = 1
            elif new_repetitions == 2:
                new_interval = 6
            else:
                new_interval = _round_half_up(state.interval_days * state.ease_factor)

            new_ease = state.ease_factor + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
            new_ease = SM2Engine.clamp_ease(new_ease)

        new_interval = max(C.INITIAL_INTERVAL_DAYS, min(new_interval, C.MAX_INTERVAL_DAYS))

        return ScheduleState(
            interval_days=new_interval,
            ease_factor=new_ease,
            repetitions=new_repetitions,
        )

    @staticmethod
    def reward_instructions(quality: int) -> List[str]:
        q = SM2Engine.clamp_quality(quality)
        instructions = []
        if q >= C.PASSING_QUALITY:
            instructions.append(RewardInstruction.MEMORIZATION_CREDIT)
        if q == 5:
            instructions.append(RewardInstruction.PERFECT_RECALL_BONUS)
        return instructions

    @staticmethod
    def review(
        state: ScheduleState,
        quality: int,
        today: datetime.date
    ) -> Tuple[ScheduleState, str, datetime.date, List[str]]:
        """
        Process a review and return the new state, its status, next due date and reward instructions.
        """
        new_state = SM2Engine.calculate_next_review(state, quality)
        status = SM2Engine.derive_status(new_state.repetitions, new_state.interval_days)
        next_review_date = today + datetime.timedelta(days=new_state.interval_days)

        logger.debug(
            f"[SM2] q={quality} reps {state.repetitions}->{new_state.repetitions} "
            f"ivl {state.interval_days}->{new_state.interval_days} "
            f"ef {state.ease_factor:.2f}->{new_state.ease_factor:.2f} status={status}"
        )
        return new_state, status, next_review_date, SM2Engine.reward_instructions(quality)
