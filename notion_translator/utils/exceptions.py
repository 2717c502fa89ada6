"""
Custom exceptions for notion-translator.

Usage:
    from notion_translator.utils.exceptions import PageAccessError, TranslationError

    raise PageAccessError("Failed to read the page content", page_id=page_id, cause=e)
"""
from typing import Optional, Dict, Any


class NotionTranslatorError(Exception):
    """Base exception for all notion-translator errors."""

    def __init__(
        self,
        message: str,
        *,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)


class ConfigError(NotionTranslatorError):
    """Missing credentials or invalid configuration."""

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        signup_url: Optional[str] = None,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, cause=cause, details=details)
        self.config_key = config_key
        self.signup_url = signup_url
        if config_key:
            self.details["config_key"] = config_key


class TranslationError(NotionTranslatorError):
    """Error from the translation service."""

    def __init__(
        self,
        message: str,
        *,
        source_lang: Optional[str] = None,
        target_lang: Optional[str] = None,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, cause=cause, details=details)
        self.source_lang = source_lang
        self.target_lang = target_lang
        if source_lang:
            self.details["source_lang"] = source_lang
        if target_lang:
            self.details["target_lang"] = target_lang


class PageAccessError(NotionTranslatorError):
    """The source page could not be read (missing, not shared, bad token)."""

    def __init__(
        self,
        message: str,
        *,
        page_id: Optional[str] = None,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, cause=cause, details=details)
        self.page_id = page_id
        if page_id:
            self.details["page_id"] = page_id


class UnsupportedPageTypeError(PageAccessError):
    """The identifier resolves to something other than a page (e.g. a database)."""


class SubmissionError(NotionTranslatorError):
    """Appending translated blocks to the new page failed."""

    def __init__(
        self,
        message: str,
        *,
        page_id: Optional[str] = None,
        batch_index: Optional[int] = None,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, cause=cause, details=details)
        self.page_id = page_id
        self.batch_index = batch_index
        if page_id:
            self.details["page_id"] = page_id
        if batch_index is not None:
            self.details["batch_index"] = batch_index
