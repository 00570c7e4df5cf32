from tartil_app.core.extensions import db
from sqlalchemy.sql import func


class ScoreLog(db.Model):
    """History of XP awarded to a learner."""
    __tablename__ = 'score_logs'

    log_id = db.Column(db.Integer, primary_key=True)
    learner_id = db.Column(db.String(64), nullable=False)
    action = db.Column(db.String(50), nullable=False)
    score_change = db.Column(db.Integer, nullable=False)
    reason = db.Column(db.String(100))
    timestamp = db.Column(db.DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        db.Index('ix_score_logs_learner_timestamp', 'learner_id', 'timestamp'),
    )

    def to_dict(self):
        return {
            'log_id': self.log_id,
            'action': self.action,
            'score_change': self.score_change,
            'reason': self.reason,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None
        }

    def __repr__(self):
        return f'<ScoreLog {self.learner_id} {self.action} {self.score_change}>'
