import os
import sys
import datetime
import threading

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from tartil_app import create_app, db
from tartil_app.config import Config
from tartil_app.modules.hifz.services.reward_bridge import EXTENSION_KEY, RewardBridge


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    LOG_TO_FILE = False
    HIFZ_DUE_LIMIT = 20
    HIFZ_PERFECT_BONUS_MULTIPLIER = 0.5


class RecordingBridge(RewardBridge):
    """Reward bridge that only remembers what it was asked to do."""

    def __init__(self, fail_on=()):
        self.calls = []
        self.fail_on = set(fail_on)
        self._lock = threading.Lock()

    def _record(self, name, learner_id, xp):
        with self._lock:
            self.calls.append((name, learner_id))
        if name in self.fail_on:
            raise RuntimeError(f"{name} unavailable")
        return xp

    def award_memorization_credit(self, learner_id):
        return self._record('credit', learner_id, 25)

    def award_perfect_recall_bonus(self, learner_id):
        return self._record('bonus', learner_id, 37)


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def bridge(app):
    recording = RecordingBridge()
    app.extensions[EXTENSION_KEY] = recording
    return recording


@pytest.fixture
def today():
    return datetime.date(2024, 3, 1)
