"""
DeepL adapter for Notion rich text.

Translates lists of rich text runs in place. The language pair is either
given up front (CLI with --from/--to) or detected from the first non-empty
run and pinned for the remainder of the run.

Usage:
    from notion_translator.translators.deepl import get_client, TextTranslator
    translator = TextTranslator(get_client(api_key))
    pair = LanguagePair()
    translator.translate_runs(block["paragraph"]["rich_text"], pair)
"""
from typing import Any, List, Optional, Sequence

import deepl

from .languages import LanguagePair, same_language
from ..utils.exceptions import ConfigError, TranslationError
from ..utils.logger import get_logger

logger = get_logger(__name__)

NOTICE_SOURCE_LANG = "EN"


def get_client(api_key: str) -> deepl.Translator:
    """Get DeepL client."""
    if not api_key:
        raise ConfigError("DEEPL_API_TOKEN not set. Add to .env file.", config_key="DEEPL_API_TOKEN")
    return deepl.Translator(api_key)


def write_run_text(run: dict, text: str) -> None:
    """Set a run's display text, keeping text.content in sync."""
    run["plain_text"] = text
    if isinstance(run.get("text"), dict):
        run["text"]["content"] = text


class TextTranslator:
    """Rich-text translator with one-shot source language detection."""

    def __init__(
        self,
        backend: deepl.Translator,
        *,
        detection_target: str = "EN-US",
        counterpart: str = "JA",
    ):
        self.backend = backend
        self.detection_target = detection_target.upper()
        self.counterpart = counterpart.upper()

    def _translate(self, texts: Sequence[str], source: Optional[str], target: str) -> List[Any]:
        try:
            results = self.backend.translate_text(list(texts), source_lang=source, target_lang=target)
        except deepl.DeepLException as e:
            raise TranslationError("DeepL request failed", source_lang=source, target_lang=target, cause=e) from e
        if not isinstance(results, list):
            results = [results]
        return results

    def detect(self, pair: LanguagePair, sample: str) -> LanguagePair:
        """Detect the source language of `sample` and pin the pair."""
        result = self._translate([sample], None, self.detection_target)[0]
        detected = (result.detected_source_lang or "").upper()
        pair.detections += 1
        if detected == "EN":
            pair.pin(detected, self.counterpart)
        else:
            pair.pin(detected, self.detection_target)
        logger.info(f"Detected source language: {pair}")
        return pair

    def ensure_pinned(self, pair: LanguagePair, sample: str = "") -> LanguagePair:
        """Pin the pair, detecting from `sample` or assuming English when there is none."""
        if pair.pinned:
            return pair
        if sample and sample.strip():
            return self.detect(pair, sample)
        pair.pin(NOTICE_SOURCE_LANG, self.counterpart)
        logger.info(f"No text to detect from, assuming {pair}")
        return pair

    def translate_runs(self, runs: List[dict], pair: LanguagePair) -> LanguagePair:
        """
        Translate every non-empty run in place.

        Args:
            runs: rich_text / caption / table cell list
            pair: the run's language pair; pinned on first use when undetermined

        Returns:
            The (now pinned) pair
        """
        pending = [run for run in runs if run.get("plain_text")]
        if not pending:
            return pair
        if not pair.pinned:
            self.detect(pair, pending[0]["plain_text"])
        if same_language(pair.source, pair.target):
            return pair
        results = self._translate([run["plain_text"] for run in pending], pair.source, pair.target)
        for run, result in zip(pending, results):
            write_run_text(run, result.text)
        return pair

    def translate_notice(self, runs: List[dict], pair: LanguagePair) -> None:
        """Translate an English notice into the pinned target language."""
        if not pair.pinned:
            raise TranslationError("Language pair must be pinned before translating notices")
        pending = [run for run in runs if run.get("plain_text")]
        if not pending or same_language(NOTICE_SOURCE_LANG, pair.target):
            return
        results = self._translate([run["plain_text"] for run in pending], NOTICE_SOURCE_LANG, pair.target)
        for run, result in zip(pending, results):
            write_run_text(run, result.text)
