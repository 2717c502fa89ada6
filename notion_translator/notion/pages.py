"""
Draft of the page that receives the translated blocks.
"""

from __future__ import annotations

import copy

from .blocks import sanitize, text_run
from .rules import TranslationPolicy, CHUNKED
from ..utils.exceptions import PageAccessError


def draft_translation_target(original_page: dict, target_lang: str, policy: TranslationPolicy = CHUNKED) -> dict:
    """
    Build the pages.create payload for the translated copy.

    The copy is created as a child of the original page and titled
    "<original title> (<target_lang>)".

    Raises:
        PageAccessError: the page has no title and policy.missing_title == "fail"
    """
    new_page = copy.deepcopy(original_page)
    new_page["parent"] = {"page_id": original_page["id"]}

    properties = new_page.setdefault("properties", {})
    title_runs = (properties.get("title") or {}).get("title") or []
    if not title_runs:
        if policy.missing_title == "fail":
            raise PageAccessError("The page has no title property", page_id=original_page.get("id"))
        title_runs = [text_run(policy.fallback_title)]
        properties["title"] = {"title": title_runs}

    suffix = f" ({target_lang})"
    title = title_runs[0]
    text = title.setdefault("text", {"content": title.get("plain_text") or ""})
    text["content"] = (text.get("content") or "") + suffix
    title["plain_text"] = (title.get("plain_text") or "") + suffix

    sanitize(new_page)
    return new_page
