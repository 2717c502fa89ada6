"""
Recursive, paginated walk over a page's block tree.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Optional

from .blocks import iter_translatable_text, sanitize, set_children
from .rules import apply_rules
from .sync import iter_children_pages
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from ..pipeline import TranslationRun

logger = get_logger(__name__)


def collect_translated_children(run: "TranslationRun", parent_id: str, depth: int) -> list[dict]:
    """
    Fetch, rewrite and translate all children of `parent_id`.

    Args:
        run: per-run context (client, translator, language pair, policy)
        parent_id: page or block id
        depth: 0 for the page's direct children

    Returns:
        Blocks ready for creation, in source order
    """
    translated: list[dict] = []
    for results in iter_children_pages(run.client, parent_id, page_size=run.policy.page_size):
        logger.debug(f"Fetched original blocks: {json.dumps(results, ensure_ascii=False, indent=2)}")
        run.page_fetched()
        for original in results:
            block = build_block(run, original, depth)
            if block is not None:
                translated.append(block)
    return translated


def build_block(run: "TranslationRun", block: dict, depth: int) -> Optional[dict]:
    """Rewrite one block, resolve its children and translate its text."""
    block = apply_rules(run, block, depth)
    if block is None:
        return None

    if block.get("has_children"):
        if depth >= run.policy.max_depth:
            run.report.drop("depth_limit", block)
            return None
        set_children(block, collect_translated_children(run, block["id"], depth + 1))

    sanitize(block)

    # Notices are translated from English once the pair is known
    if not run.is_notice(block):
        for runs in iter_translatable_text(block):
            run.translator.translate_runs(runs, run.pair)

    run.report.kept += 1
    return block
