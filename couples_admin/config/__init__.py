"""
Configuration package for the couples admin panel.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    QuestionSettings,
    TranslationWritePolicy,
    MissingCountStrategy,
    CategoryDeletePolicy,
    settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "QuestionSettings",
    "TranslationWritePolicy",
    "MissingCountStrategy",
    "CategoryDeletePolicy",
    "settings",
    "get_settings",
    "reload_settings",
]
