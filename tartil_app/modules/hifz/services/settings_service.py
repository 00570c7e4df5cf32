# File: tartil_app/modules/hifz/services/settings_service.py
from __future__ import annotations
from typing import Any, Dict
from flask import current_app, has_app_context
from ..config import HifzDefaultConfig


class HifzSettingsService:
    """Reads tunable Hifz settings: app config first, module defaults second."""

    DEFAULTS: Dict[str, Any] = {
        'HIFZ_DUE_LIMIT': HifzDefaultConfig.HIFZ_DUE_LIMIT,
        'HIFZ_PERFECT_BONUS_MULTIPLIER': HifzDefaultConfig.HIFZ_PERFECT_BONUS_MULTIPLIER,
    }

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        if has_app_context() and key in current_app.config:
            return current_app.config[key]
        if key in cls.DEFAULTS:
            return cls.DEFAULTS[key]
        return default
