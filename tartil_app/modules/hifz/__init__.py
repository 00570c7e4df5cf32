module_metadata = {
    'name': 'Hifz Scheduler',
    'icon': 'book-open',
    'category': 'Learning',
    'enabled': True
}


def setup_module(app):
    """Initialize the Hifz module."""
    from . import models  # noqa: F401
    from .services.reward_bridge import EXTENSION_KEY, GamificationRewardBridge

    # Tests or hosts may install their own bridge before setup
    app.extensions.setdefault(EXTENSION_KEY, GamificationRewardBridge())
