"""
Page translation pipeline.

    source page ──► walk + translate children (depth 0..) ──► translate notices
                └─► draft "<title> (<lang>)" under the source ──► create ──► append in batches

Usage:
    from notion_translator.pipeline import translate_page

    result = translate_page(notion, translator, page_id)              # detect language
    result = translate_page(notion, translator, page_id, source_lang="EN", target_lang="JA")
    print(result.url)
"""

from __future__ import annotations

import json
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Optional

from notion_client import Client
from notion_client.errors import APIResponseError

from .notion.blocks import block_type, plain_text, payload
from .notion.pages import draft_translation_target
from .notion.rules import TranslationPolicy, CHUNKED
from .notion.sync import REQUEST_ERRORS, create_page, is_database, retrieve_page, submit_blocks
from .notion.walker import collect_translated_children
from .translators.deepl import TextTranslator
from .translators.languages import LanguagePair
from .utils.exceptions import (
    ConfigError,
    PageAccessError,
    SubmissionError,
    UnsupportedPageTypeError,
)
from .utils.logger import get_logger

logger = get_logger(__name__)

UUID_RE = re.compile(r"^[0-9a-f]{8}-?[0-9a-f]{4}-?[0-9a-f]{4}-?[0-9a-f]{4}-?[0-9a-f]{12}$", re.IGNORECASE)
TRAILING_ID_RE = re.compile(r"([0-9a-f]{32})$", re.IGNORECASE)


@dataclass
class RunReport:
    """What happened to the source blocks during one run."""
    pages_fetched: int = 0
    kept: int = 0
    dropped: Counter = field(default_factory=Counter)
    replaced: Counter = field(default_factory=Counter)
    unresolved_references: list[dict] = field(default_factory=list)
    batches_submitted: int = 0

    def drop(self, reason: str, block: dict) -> None:
        self.dropped[reason] += 1
        logger.debug(f"Dropped {block_type(block)} block {block.get('id')} ({reason})")

    def replace(self, kind: str) -> None:
        self.replaced[kind] += 1

    def unresolved(self, kind: str, block_id: Optional[str], error: str) -> None:
        self.dropped["unresolved_reference"] += 1
        self.unresolved_references.append({"type": kind, "id": block_id, "error": error})

    def summary(self) -> str:
        parts = [f"{self.kept} blocks", f"{self.pages_fetched} pages fetched"]
        if self.replaced:
            parts.append("replaced: " + ", ".join(f"{k}={v}" for k, v in sorted(self.replaced.items())))
        if self.dropped:
            parts.append("dropped: " + ", ".join(f"{k}={v}" for k, v in sorted(self.dropped.items())))
        return "; ".join(parts)


class TranslationRun:
    """
    State of one page translation.

    Everything the walk mutates lives here, including the language pair,
    so concurrent runs in one process never share a pinned pair.
    """

    def __init__(
        self,
        client: Client,
        translator: TextTranslator,
        *,
        pair: Optional[LanguagePair] = None,
        policy: TranslationPolicy = CHUNKED,
        progress: Optional[Callable[[], None]] = None,
    ):
        self.client = client
        self.translator = translator
        self.pair = pair or LanguagePair()
        self.policy = policy
        self.progress = progress
        self.report = RunReport()
        self._notices: list[dict] = []

    def add_notice(self, block: dict) -> None:
        self._notices.append(block)

    def is_notice(self, block: dict) -> bool:
        return any(block is notice for notice in self._notices)

    def page_fetched(self) -> None:
        self.report.pages_fetched += 1
        if self.progress:
            self.progress()

    def translate_notices(self, sample: str = "") -> None:
        """Pin the pair if the walk found no text, then localize the notices."""
        self.translator.ensure_pinned(self.pair, sample)
        for notice in self._notices:
            self.translator.translate_notice(payload(notice)["rich_text"], self.pair)


@dataclass
class TranslationResult:
    url: Optional[str]
    page_id: str
    language_pair: LanguagePair
    report: RunReport


def extract_page_id(url_or_id: str) -> str:
    """
    https://www.notion.so/workspace/My-Page-0123abcd... -> 0123abcd...

    A bare id, dashed or not, is returned unchanged.
    """
    value = url_or_id.strip().split("?")[0].split("#")[0].rstrip("/")
    segment = value.split("/")[-1]
    if UUID_RE.match(segment):
        return segment
    m = TRAILING_ID_RE.search(segment)
    if m:
        return m.group(1)
    return segment.split("-")[-1]


def page_title(page: dict) -> str:
    return plain_text(((page.get("properties") or {}).get("title") or {}).get("title") or [])


def load_source_page(client: Client, page_id: str) -> dict:
    """
    Raises:
        UnsupportedPageTypeError: the id belongs to a database
        PageAccessError: anything else that makes the page unreadable
    """
    try:
        return retrieve_page(client, page_id)
    except REQUEST_ERRORS as e:
        if isinstance(e, APIResponseError) and is_database(client, page_id):
            raise UnsupportedPageTypeError(
                "This URL is a database. This tool currently supports only pages.",
                page_id=page_id,
            ) from e
        raise PageAccessError("Failed to read the page content!", page_id=page_id, cause=e) from e


def translate_page(
    client: Client,
    translator: TextTranslator,
    page_id: str,
    *,
    source_lang: Optional[str] = None,
    target_lang: Optional[str] = None,
    policy: TranslationPolicy = CHUNKED,
    progress: Optional[Callable[[], None]] = None,
) -> TranslationResult:
    """
    Copy a page into a new translated child page.

    Args:
        client: Notion client
        translator: DeepL adapter
        page_id: source page id
        source_lang, target_lang: both or neither; neither means detect once
        policy: API limits and block handling choices
        progress: called once per fetched page of blocks

    Returns:
        TranslationResult with the new page URL and the run report
    """
    if bool(source_lang) != bool(target_lang):
        raise ConfigError("Pass both source and target languages, or neither to auto-detect")

    original = load_source_page(client, page_id)
    logger.debug(f"The page metadata: {json.dumps(original, ensure_ascii=False, indent=2)}")

    run = TranslationRun(
        client,
        translator,
        pair=LanguagePair(source_lang, target_lang),
        policy=policy,
        progress=progress,
    )
    try:
        blocks = collect_translated_children(run, original["id"], 0)
        run.translate_notices(sample=page_title(original))

        draft = draft_translation_target(original, run.pair.target, policy)
        logger.debug(f"New page creation request params: {json.dumps(draft, ensure_ascii=False, indent=2)}")
        try:
            new_page = create_page(client, draft)
        except REQUEST_ERRORS as e:
            raise SubmissionError("Failed to create the translated page", page_id=original["id"], cause=e) from e

        run.report.batches_submitted = submit_blocks(
            client, new_page["id"], blocks, batch_size=policy.batch_size
        )
        logger.info(f"Translated {run.pair}: {run.report.summary()}")
        if run.report.unresolved_references:
            logger.warning(f"{len(run.report.unresolved_references)} linked pages/databases could not be resolved")

        return TranslationResult(
            url=new_page.get("url"),
            page_id=new_page["id"],
            language_pair=LanguagePair(run.pair.source, run.pair.target, run.pair.detections),
            report=run.report,
        )
    finally:
        run.pair.reset()
