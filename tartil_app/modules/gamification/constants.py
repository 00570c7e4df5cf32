"""XP granted per learner action."""

XP_REWARDS = {
    'COMPLETE_LESSON': 50,
    'SUBMIT_ASSIGNMENT': 30,
    'CORRECT_ANSWER': 10,
    'ATTENDANCE': 20,
    'STREAK_BONUS_7_DAYS': 100,
    'STREAK_BONUS_30_DAYS': 500,
    'MEMORIZE_VERSE': 25,
    'MEMORIZE_PAGE': 250,
    'MEMORIZE_JUZ': 2500,
    'PERFECT_TAJWEED': 75,
    'COMPETITION_WIN': 300,
    'COMPETITION_TOP_3': 150,
    'DAILY_LOGIN': 5,
    'COMPLETE_GOAL': 100,
}
