"""Shared configuration for learner goals."""

from __future__ import annotations

GOAL_CATEGORIES: dict[str, dict[str, str]] = {
    'verses': {'label': 'Verses Memorized', 'unit': 'verses'},
    'minutes': {'label': 'Practice Time', 'unit': 'minutes'},
    'pages': {'label': 'Pages Reviewed', 'unit': 'pages'},
    'lessons': {'label': 'Lessons Completed', 'unit': 'lessons'},
    'practice': {'label': 'Practice Sessions', 'unit': 'sessions'},
}

# Days a goal stays open after its start date
PERIOD_DAYS: dict[str, int] = {
    'daily': 1,
    'weekly': 7,
}
