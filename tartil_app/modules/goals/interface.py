from typing import List, Optional
import datetime
from .models import LearnerGoal
from .services.goal_service import GoalService


def create_goal(learner_id: str, category: str, target: int, period: str = 'daily',
                today: Optional[datetime.date] = None) -> LearnerGoal:
    """Create a new daily or weekly goal for a learner."""
    return GoalService.create_goal(learner_id, category, target, period=period, today=today)


def increment_by_category(learner_id: str, category: str, amount: int = 1,
                          today: Optional[datetime.date] = None) -> List[LearnerGoal]:
    """Record activity against every open goal of a category."""
    return GoalService.increment_by_category(learner_id, category, amount=amount, today=today)


def get_active_goals(learner_id: str, today: Optional[datetime.date] = None) -> List[LearnerGoal]:
    return GoalService.get_active_goals(learner_id, today=today)
