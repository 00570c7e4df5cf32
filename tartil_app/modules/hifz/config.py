# modules/hifz/config.py


class HifzDefaultConfig:
    # SM-2 constants, kept as observed in production scheduling
    INITIAL_EASE_FACTOR = 2.5
    MIN_EASE_FACTOR = 1.3
    MAX_EASE_FACTOR = 2.5
    INITIAL_INTERVAL_DAYS = 1
    MAX_INTERVAL_DAYS = 365
    PASSING_QUALITY = 3
    MATURE_INTERVAL_DAYS = 21
    LEARNING_REPETITIONS = 3

    # Verse addressing
    MIN_CHAPTER = 1
    MAX_CHAPTER = 114

    # Optimistic retries when another process wrote the same item first
    UPDATE_RETRY_ATTEMPTS = 30
    UPDATE_RETRY_INITIAL_DELAY = 0.01
    UPDATE_RETRY_MAX_DELAY = 0.5

    # Tunable through app config
    HIFZ_DUE_LIMIT = 20
    HIFZ_PERFECT_BONUS_MULTIPLIER = 0.5
