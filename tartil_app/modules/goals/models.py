"""Goal management models."""

from __future__ import annotations

from datetime import datetime, timezone
from tartil_app.core.extensions import db


class LearnerGoal(db.Model):
    """
    A learner's target for one activity category over a daily or weekly window.
    The window is [start_date, end_date).
    """
    __tablename__ = 'learner_goals'

    goal_id = db.Column(db.Integer, primary_key=True)
    learner_id = db.Column(db.String(64), nullable=False, index=True)

    category = db.Column(db.String(20), nullable=False)  # verses, minutes, pages, lessons, practice
    period = db.Column(db.String(20), nullable=False)  # daily, weekly
    target_value = db.Column(db.Integer, nullable=False)
    current_value = db.Column(db.Integer, nullable=False, default=0)

    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    is_completed = db.Column(db.Boolean, nullable=False, default=False)
    completed_at = db.Column(db.DateTime(timezone=True), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        db.Index('ix_learner_goals_learner_category', 'learner_id', 'category'),
    )

    def to_dict(self):
        return {
            'goal_id': self.goal_id,
            'learner_id': self.learner_id,
            'category': self.category,
            'period': self.period,
            'target_value': self.target_value,
            'current_value': self.current_value,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'end_date': self.end_date.isoformat() if self.end_date else None,
            'is_completed': self.is_completed,
            'completed_at': self.completed_at.isoformat() if self.completed_at else None,
        }

    def __repr__(self):
        return f'<LearnerGoal {self.goal_id} {self.category}/{self.period}>'
