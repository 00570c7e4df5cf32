"""
Score Service
XP bookkeeping: awards, totals and history.
"""
import logging
import math
from datetime import datetime, timezone

from sqlalchemy import func

from tartil_app.core.extensions import db
from tartil_app.core.signals import xp_awarded
from ..constants import XP_REWARDS
from ..models import ScoreLog

logger = logging.getLogger(__name__)


class ScoreService:

    @staticmethod
    def award_xp(learner_id, action, multiplier=1.0, reason=None):
        """
        Award the XP configured for `action`, scaled by `multiplier` and floored.
        Returns the amount awarded. Unknown actions raise ValueError.
        """
        if action not in XP_REWARDS:
            raise ValueError(
                f"Invalid action '{action}'. Valid actions: {', '.join(XP_REWARDS)}"
            )

        amount = int(math.floor(XP_REWARDS[action] * multiplier))

        try:
            log = ScoreLog(
                learner_id=learner_id,
                action=action,
                score_change=amount,
                reason=reason or action,
                timestamp=datetime.now(timezone.utc)
            )
            db.session.add(log)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.error(f"Failed to award {action} XP to learner {learner_id}: {e}", exc_info=True)
            raise

        new_total = ScoreService.get_total_xp(learner_id)
        logger.info(f"Awarded {amount} XP to learner {learner_id} for {action} (total {new_total})")

        xp_awarded.send(
            None,
            learner_id=learner_id,
            action=action,
            amount=amount,
            new_total=new_total
        )
        return amount

    @staticmethod
    def get_total_xp(learner_id):
        total = db.session.query(func.sum(ScoreLog.score_change)).filter(
            ScoreLog.learner_id == learner_id
        ).scalar()
        return int(total or 0)

    @staticmethod
    def get_history(learner_id, limit=20):
        """Most recent score logs first."""
        return ScoreLog.query.filter_by(learner_id=learner_id)\
            .order_by(ScoreLog.timestamp.desc(), ScoreLog.log_id.desc())\
            .limit(limit).all()
