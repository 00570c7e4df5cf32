"""Learner goals: daily and weekly targets fed by learning activity."""

module_metadata = {
    'name': 'Goals',
    'icon': 'bullseye',
    'category': 'Engagement',
    'enabled': True
}


def setup_module(app):
    """Initialize the goals module."""
    from . import models  # noqa: F401
