"""Utilities for declaratively registering application modules.

Each feature module under ``tartil_app.modules`` exposes ``module_metadata``
and a ``setup_module(app)`` hook. The registry imports the module and runs
the hook so models are known to SQLAlchemy before ``create_all`` and
collaborators are attached to the app.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Iterable, Sequence

from flask import Flask
from werkzeug.utils import import_string


@dataclass(frozen=True)
class ModuleDefinition:
    """Describe how a feature module is wired into the app."""

    import_path: str
    version: str = "1.0"

    def load_module(self) -> ModuleType:
        """Import and return the module described by this definition."""

        module = import_string(self.import_path)
        if not callable(getattr(module, "setup_module", None)):
            raise TypeError(
                "Expected '%s' to define a callable setup_module(app), got %r instead"
                % (self.import_path, getattr(module, "setup_module", None))
            )
        return module


def register_modules(app: Flask, modules: Sequence[ModuleDefinition]) -> None:
    """Run the setup hook of every module in the provided iterable."""

    for definition in modules:
        module = definition.load_module()
        module.setup_module(app)
        metadata = getattr(module, "module_metadata", {})
        app.logger.debug(
            "Registered module %s (version %s): %s",
            definition.import_path,
            definition.version,
            metadata.get("name", "<unnamed>"),
        )


def register_default_modules(app: Flask) -> None:
    """Convenience helper that registers the built-in Tartil modules."""

    register_modules(app, DEFAULT_MODULES)


# Collaborators first so the hifz module can bind its reward bridge to them.
DEFAULT_MODULES: Iterable[ModuleDefinition] = (
    ModuleDefinition("tartil_app.modules.gamification", version="1.0"),
    ModuleDefinition("tartil_app.modules.goals", version="1.0"),
    ModuleDefinition("tartil_app.modules.hifz", version="1.0"),
)
