"""
Central Signal Registry for Event-Driven Architecture.

Uses blinker so modules can observe each other without importing
each other's internals.

Usage:
    # Publisher (sender)
    from tartil_app.core.signals import verse_reviewed
    verse_reviewed.send(SchedulerService, learner_id='s1', verse_key='1:1', ...)

    # Subscriber (receiver)
    @verse_reviewed.connect
    def on_verse_reviewed(sender, **kwargs):
        ...
"""
from blinker import Namespace

hifz_signals = Namespace()

# Signal: Fired when a verse is newly queued for memorization (not on idempotent re-add)
# Payload: learner_id, verse_key, item (dict)
verse_added = hifz_signals.signal('verse_added')

# Signal: Fired after a review has been committed
# Payload: learner_id, verse_key, quality, new_state (dict)
verse_reviewed = hifz_signals.signal('verse_reviewed')

# ============================================
# Gamification Signals
# ============================================
gamification_signals = Namespace()

# Signal: Fired when XP is awarded to a learner
# Payload: learner_id, action, amount, new_total
xp_awarded = gamification_signals.signal('xp_awarded')
