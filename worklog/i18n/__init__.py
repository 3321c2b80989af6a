# -*- coding: utf-8 -*-
"""
Internationalization (i18n) module for Work Log.

This module provides translation functions and language management.
Supports Japanese and English with automatic system locale detection.
"""

import locale

from worklog.i18n.translations import TRANSLATIONS

# Supported languages
SUPPORTED_LANGUAGES = ["ja", "en"]

# Current language (default to Japanese)
_current_language = "ja"


def detect_system_language() -> str:
    """
    Detect the system language and return a supported language code.

    Returns:
        'en' if English is detected, 'ja' otherwise.
    """
    try:
        system_locale = locale.getlocale()[0]
    except ValueError:
        system_locale = None
    if system_locale and system_locale.lower().startswith('en'):
        return 'en'
    return 'ja'


def get_language() -> str:
    """Get the current language code."""
    return _current_language


def set_language(lang: str) -> None:
    """
    Set the current language.

    Args:
        lang: Language code ('ja', 'en' or 'auto')
    """
    global _current_language
    if lang == 'auto':
        lang = detect_system_language()
    if lang not in SUPPORTED_LANGUAGES:
        lang = 'ja'
    _current_language = lang


def tr(key: str, **kwargs) -> str:
    """
    Get the translated string for the given key.

    Args:
        key: Translation key (e.g., 'csv.date')
        **kwargs: Format arguments for string interpolation

    Returns:
        Translated string, or the key itself if not found.
    """
    translations = TRANSLATIONS.get(_current_language, TRANSLATIONS.get('ja', {}))
    text = translations.get(key, key)

    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, ValueError):
            pass

    return text
