"""
DeepL language codes and the per-run language pair.

https://www.deepl.com/docs-api/translating-text/request/
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

SUPPORTED_FROM_LANGS = [
    "BG",  # Bulgarian
    "CS",  # Czech
    "DA",  # Danish
    "DE",  # German
    "EL",  # Greek
    "EN",  # English
    "ES",  # Spanish
    "ET",  # Estonian
    "FI",  # Finnish
    "FR",  # French
    "HU",  # Hungarian
    "ID",  # Indonesian
    "IT",  # Italian
    "JA",  # Japanese
    "LT",  # Lithuanian
    "LV",  # Latvian
    "NL",  # Dutch
    "PL",  # Polish
    "PT",  # Portuguese (all Portuguese varieties mixed)
    "RO",  # Romanian
    "RU",  # Russian
    "SK",  # Slovak
    "SL",  # Slovenian
    "SV",  # Swedish
    "TR",  # Turkish
    "ZH",  # Chinese
]

SUPPORTED_TO_LANGS = [
    "BG",  # Bulgarian
    "CS",  # Czech
    "DA",  # Danish
    "DE",  # German
    "EL",  # Greek
    "EN-GB",  # English (British)
    "EN-US",  # English (American)
    "ES",  # Spanish
    "ET",  # Estonian
    "FI",  # Finnish
    "FR",  # French
    "HU",  # Hungarian
    "ID",  # Indonesian
    "IT",  # Italian
    "JA",  # Japanese
    "LT",  # Lithuanian
    "LV",  # Latvian
    "NL",  # Dutch
    "PL",  # Polish
    "PT-PT",  # Portuguese (all Portuguese varieties excluding Brazilian Portuguese)
    "PT-BR",  # Portuguese (Brazilian)
    "RO",  # Romanian
    "RU",  # Russian
    "SK",  # Slovak
    "SL",  # Slovenian
    "SV",  # Swedish
    "TR",  # Turkish
    "ZH",  # Chinese
]


def printable(langs: list[str]) -> str:
    return ",".join(lang.lower() for lang in langs)


def normalize_lang(code: Optional[str]) -> Optional[str]:
    if code is None:
        return None
    return code.strip().upper()


def base_lang(code: Optional[str]) -> str:
    """EN-US -> EN"""
    return (normalize_lang(code) or "").split("-")[0]


def same_language(a: Optional[str], b: Optional[str]) -> bool:
    return bool(a) and bool(b) and base_lang(a) == base_lang(b)


@dataclass
class LanguagePair:
    """
    Source/target pair for one page translation.

    Starts out undetermined unless the caller knows both codes. Once pinned it
    is reused for every text run of the run and never re-detected.
    """
    source: Optional[str] = None
    target: Optional[str] = None
    detections: int = 0

    def __post_init__(self):
        self.source = normalize_lang(self.source)
        self.target = normalize_lang(self.target)

    @property
    def pinned(self) -> bool:
        return bool(self.source and self.target)

    def pin(self, source: str, target: str) -> None:
        self.source = normalize_lang(source)
        self.target = normalize_lang(target)

    def reset(self) -> None:
        self.source = None
        self.target = None

    def __str__(self) -> str:
        return f"{self.source or '?'} -> {self.target or '?'}"
