"""Create learner goals and feed activity into them."""

from __future__ import annotations

import datetime
import logging
from typing import List, Optional

from tartil_app.core.error_handlers import ValidationError
from tartil_app.core.extensions import db
from ..constants import GOAL_CATEGORIES, PERIOD_DAYS
from ..models import LearnerGoal

logger = logging.getLogger(__name__)


def _today() -> datetime.date:
    return datetime.datetime.now(datetime.timezone.utc).date()


class GoalService:

    @staticmethod
    def create_goal(
        learner_id: str,
        category: str,
        target: int,
        period: str = 'daily',
        today: Optional[datetime.date] = None
    ) -> LearnerGoal:
        if category not in GOAL_CATEGORIES:
            raise ValidationError(f"Unknown goal category '{category}'", errors={'category': category})
        if period not in PERIOD_DAYS:
            raise ValidationError(f"Unknown goal period '{period}'", errors={'period': period})
        if isinstance(target, bool) or not isinstance(target, int) or target < 1:
            raise ValidationError("Goal target must be a positive integer", errors={'target': target})

        start_date = today or _today()
        goal = LearnerGoal(
            learner_id=learner_id,
            category=category,
            period=period,
            target_value=target,
            current_value=0,
            start_date=start_date,
            end_date=start_date + datetime.timedelta(days=PERIOD_DAYS[period]),
            is_completed=False,
        )
        db.session.add(goal)
        db.session.commit()

        logger.info(f"Goal {goal.goal_id} created for learner {learner_id}: {category} x{target} ({period})")
        return goal

    @staticmethod
    def get_active_goals(learner_id: str, today: Optional[datetime.date] = None) -> List[LearnerGoal]:
        """Goals whose window has not ended, completed or not."""
        today = today or _today()
        return LearnerGoal.query.filter(
            LearnerGoal.learner_id == learner_id,
            LearnerGoal.end_date > today
        ).order_by(LearnerGoal.goal_id).all()

    @staticmethod
    def increment_by_category(
        learner_id: str,
        category: str,
        amount: int = 1,
        today: Optional[datetime.date] = None
    ) -> List[LearnerGoal]:
        """
        Add `amount` to every open, not yet completed goal of `category`.
        Progress is capped at the target. Returns the goals that were updated.
        """
        today = today or _today()
        goals = LearnerGoal.query.filter(
            LearnerGoal.learner_id == learner_id,
            LearnerGoal.category == category,
            LearnerGoal.is_completed.is_(False),
            LearnerGoal.end_date > today
        ).all()

        newly_completed = []
        for goal in goals:
            goal.current_value = min(goal.current_value + amount, goal.target_value)
            if goal.current_value >= goal.target_value:
                goal.is_completed = True
                goal.completed_at = datetime.datetime.now(datetime.timezone.utc)
                newly_completed.append(goal)

        if goals:
            db.session.commit()

        for goal in newly_completed:
            logger.info(f"Goal {goal.goal_id} completed by learner {learner_id}")
            GoalService._award_completion(learner_id, goal)

        return goals

    @staticmethod
    def _award_completion(learner_id: str, goal: LearnerGoal) -> None:
        from tartil_app.modules.gamification import interface as gamification

        try:
            gamification.award_xp(learner_id, 'COMPLETE_GOAL', reason=f'Goal {goal.goal_id} completed')
        except Exception as e:
            db.session.rollback()
            logger.warning(f"Could not award XP for goal {goal.goal_id} completion: {e}")
