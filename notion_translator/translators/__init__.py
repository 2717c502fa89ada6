"""
Translation modules.

Usage:
    from notion_translator.translators import TextTranslator, LanguagePair

    translator = TextTranslator(get_client(api_key))
    pair = LanguagePair()            # detect on first text
    pair = LanguagePair("EN", "JA")  # fixed
"""

from .languages import (
    LanguagePair,
    SUPPORTED_FROM_LANGS,
    SUPPORTED_TO_LANGS,
    same_language,
)
from .deepl import TextTranslator, get_client, write_run_text

__all__ = [
    'LanguagePair',
    'SUPPORTED_FROM_LANGS',
    'SUPPORTED_TO_LANGS',
    'same_language',
    'TextTranslator',
    'get_client',
    'write_run_text',
]
