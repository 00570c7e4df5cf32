from typing import Dict, List, Optional
from .constants import XP_REWARDS
from .models import ScoreLog
from .services.scoring_service import ScoreService


def award_xp(learner_id: str, action: str, multiplier: float = 1.0, reason: Optional[str] = None) -> int:
    """Public API to award XP for an action. Returns the XP granted."""
    return ScoreService.award_xp(learner_id, action, multiplier=multiplier, reason=reason)


def get_total_xp(learner_id: str) -> int:
    return ScoreService.get_total_xp(learner_id)


def get_xp_rewards() -> Dict[str, int]:
    """The XP table, copied so callers cannot change it."""
    return dict(XP_REWARDS)


def get_history(learner_id: str, limit: int = 20) -> List[ScoreLog]:
    return ScoreService.get_history(learner_id, limit=limit)
