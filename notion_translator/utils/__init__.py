"""Utility modules for notion-translator."""
from .config import Config, NotionConfig, TranslationConfig
from .logger import get_logger, setup_logging, set_level
from .exceptions import (
    NotionTranslatorError,
    ConfigError,
    TranslationError,
    PageAccessError,
    UnsupportedPageTypeError,
    SubmissionError,
)

__all__ = [
    # Config
    'Config',
    'NotionConfig',
    'TranslationConfig',
    # Logger
    'get_logger',
    'setup_logging',
    'set_level',
    # Exceptions
    'NotionTranslatorError',
    'ConfigError',
    'TranslationError',
    'PageAccessError',
    'UnsupportedPageTypeError',
    'SubmissionError',
]
