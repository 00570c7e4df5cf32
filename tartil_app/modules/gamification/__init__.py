module_metadata = {
    'name': 'Gamification',
    'icon': 'trophy',
    'category': 'Engagement',
    'enabled': True
}


def setup_module(app):
    """Initialize the gamification module."""
    from . import models  # noqa: F401
