from datetime import datetime, timezone
from tartil_app.core.extensions import db
from .config import HifzDefaultConfig
from .engine.core import SM2Engine
from .schemas import ScheduleState, VerseStatus


class MemorizationItem(db.Model):
    """
    Scheduling record for one verse a learner is memorizing (SM-2 parameters).
    One row per (learner_id, verse_key).
    """
    __tablename__ = 'hifz_memorization_items'

    item_id = db.Column(db.Integer, primary_key=True)
    learner_id = db.Column(db.String(64), nullable=False, index=True)
    verse_key = db.Column(db.String(16), nullable=False)

    # Immutable address
    chapter_number = db.Column(db.Integer, nullable=False)
    verse_number = db.Column(db.Integer, nullable=False)

    # SM-2 State
    interval_days = db.Column(db.Integer, nullable=False, default=HifzDefaultConfig.INITIAL_INTERVAL_DAYS)
    ease_factor = db.Column(db.Float, nullable=False, default=HifzDefaultConfig.INITIAL_EASE_FACTOR)
    repetitions = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(db.String(16), nullable=False, default=VerseStatus.NEW, index=True)

    # Scheduling (calendar days)
    next_review_date = db.Column(db.Date, nullable=False, index=True)
    last_review_date = db.Column(db.Date, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Bumped on every UPDATE; a write based on an older row fails with StaleDataError
    version_id = db.Column(db.Integer, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('learner_id', 'verse_key', name='uq_learner_verse'),
        db.Index('ix_hifz_learner_due', 'learner_id', 'next_review_date'),
        db.Index('ix_hifz_learner_chapter', 'learner_id', 'chapter_number'),
    )
    __mapper_args__ = {
        'version_id_col': version_id,
    }

    @property
    def schedule_state(self) -> ScheduleState:
        return ScheduleState(
            interval_days=self.interval_days,
            ease_factor=self.ease_factor,
            repetitions=self.repetitions,
        )

    def apply_schedule(self, state: ScheduleState) -> None:
        """Write a full SM-2 state and re-derive status from it."""
        self.interval_days = state.interval_days
        self.ease_factor = state.ease_factor
        self.repetitions = state.repetitions
        self.status = SM2Engine.derive_status(state.repetitions, state.interval_days)

    def to_dict(self):
        return {
            'item_id': self.item_id,
            'learner_id': self.learner_id,
            'verse_key': self.verse_key,
            'chapter_number': self.chapter_number,
            'verse_number': self.verse_number,
            'interval_days': self.interval_days,
            'ease_factor': self.ease_factor,
            'repetitions': self.repetitions,
            'status': self.status,
            'next_review_date': self.next_review_date.isoformat() if self.next_review_date else None,
            'last_review_date': self.last_review_date.isoformat() if self.last_review_date else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<MemorizationItem {self.learner_id} {self.verse_key} {self.status}>'
