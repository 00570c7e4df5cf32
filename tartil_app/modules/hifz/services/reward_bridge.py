"""
Reward Bridge.

The scheduler tells an outside collaborator that a learner earned memorization
credit or a perfect-recall bonus. Point values and goal bookkeeping belong to
that collaborator. Delivery happens after the schedule is committed and a
failed delivery is only logged.
"""

import logging
from typing import Iterable

from flask import current_app

from tartil_app.core.extensions import db
from ..exceptions import RewardDeliveryError
from ..schemas import RewardInstruction
from .settings_service import HifzSettingsService

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'hifz_reward_bridge'


class RewardBridge:
    """Contract the scheduler calls. Implementations return the XP granted."""

    def award_memorization_credit(self, learner_id: str) -> int:
        raise NotImplementedError

    def award_perfect_recall_bonus(self, learner_id: str) -> int:
        raise NotImplementedError


class GamificationRewardBridge(RewardBridge):
    """Default bridge backed by the gamification and goals modules."""

    def award_memorization_credit(self, learner_id: str) -> int:
        from tartil_app.modules.gamification import interface as gamification
        from tartil_app.modules.goals import interface as goals

        try:
            xp = gamification.award_xp(learner_id, 'MEMORIZE_VERSE', reason='Verse reviewed successfully')
        except Exception as e:
            raise RewardDeliveryError(
                f"Memorization credit failed for learner {learner_id}: {e}",
                instruction=RewardInstruction.MEMORIZATION_CREDIT
            ) from e

        # XP is already committed; a goal failure must not hide it
        try:
            goals.increment_by_category(learner_id, 'verses', 1)
        except Exception as e:
            db.session.rollback()
            logger.warning(f"[Hifz] Verse goals not updated for learner {learner_id}: {e}")
        return xp

    def award_perfect_recall_bonus(self, learner_id: str) -> int:
        from tartil_app.modules.gamification import interface as gamification

        multiplier = float(HifzSettingsService.get('HIFZ_PERFECT_BONUS_MULTIPLIER'))
        try:
            return gamification.award_xp(
                learner_id, 'PERFECT_TAJWEED', multiplier=multiplier, reason='Perfect recall bonus'
            )
        except Exception as e:
            raise RewardDeliveryError(
                f"Perfect recall bonus failed for learner {learner_id}: {e}",
                instruction=RewardInstruction.PERFECT_RECALL_BONUS
            ) from e


class RewardDispatcher:
    """Delivers reward instructions through whichever bridge the app holds."""

    @staticmethod
    def get_bridge() -> RewardBridge:
        bridge = current_app.extensions.get(EXTENSION_KEY)
        if bridge is None:
            bridge = GamificationRewardBridge()
            current_app.extensions[EXTENSION_KEY] = bridge
        return bridge

    @staticmethod
    def deliver(learner_id: str, instructions: Iterable[str]) -> int:
        """Send each instruction independently. Returns the XP actually granted."""
        bridge = RewardDispatcher.get_bridge()
        handlers = {
            RewardInstruction.MEMORIZATION_CREDIT: bridge.award_memorization_credit,
            RewardInstruction.PERFECT_RECALL_BONUS: bridge.award_perfect_recall_bonus,
        }

        total_xp = 0
        for instruction in instructions:
            try:
                total_xp += handlers[instruction](learner_id) or 0
            except Exception as e:
                # Anything the collaborator left half-written must not leak into later work
                db.session.rollback()
                logger.warning(f"[Hifz] Reward '{instruction}' for learner {learner_id} not delivered: {e}")
        return total_xp
