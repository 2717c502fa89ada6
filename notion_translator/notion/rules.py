"""
Per-type rewrite rules applied to every fetched block.

Each rule may keep, reshape, replace or drop the block. They run in a
fixed order and the first rule that drops or replaces a block wins.
Recursion into children and the final text pass live in walker.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .blocks import (
    FILE_REMOVED,
    IMAGE_REMOVED,
    TABLE_REMOVED,
    block_type,
    notice_paragraph,
    payload,
)
from .sync import REQUEST_ERRORS, retrieve_database, retrieve_page
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from ..pipeline import TranslationRun

logger = get_logger(__name__)


@dataclass(frozen=True)
class TranslationPolicy:
    """
    Limits of the target API and the handling choices that depend on them.

    https://developers.notion.com/reference/patch-block-children
    > For blocks that allow children, we allow up to two levels of nesting in a single request.
    """
    page_size: int = 100             # children per list request (API max)
    batch_size: Optional[int] = 10   # blocks per append request, None = one request
    flatten_depth: int = 2           # from this depth on, blocks report no children
    column_list_depth: int = 1       # column lists at this depth are dropped
    max_depth: int = 3               # blocks with children at this depth are dropped
    table_mode: str = "preserve"     # "preserve" rows or replace with a "notice"
    missing_title: str = "fallback"  # "fallback" title or "fail" for title-less pages
    fallback_title: str = "Translated page"


CHUNKED = TranslationPolicy()
SINGLE_REQUEST = TranslationPolicy(batch_size=None, table_mode="notice")


def _notice(run: "TranslationRun", block: dict, message: str) -> dict:
    notice = notice_paragraph(message)
    run.add_notice(notice)
    run.report.replace(block_type(block))
    return notice


def _is_blank(url: Optional[str]) -> bool:
    return not url or not url.strip()


def drop_unsupported(run, block, depth) -> Optional[dict]:
    if block_type(block) == "unsupported":
        run.report.drop("unsupported", block)
        return None
    return block


def flatten_deep(run, block, depth) -> Optional[dict]:
    if depth >= run.policy.flatten_depth:
        block["has_children"] = False
    return block


def drop_nested_column_list(run, block, depth) -> Optional[dict]:
    # Columns inside an already nested column_list cannot carry children
    if depth == run.policy.column_list_depth and block_type(block) == "column_list":
        payload(block)["children"] = []
        run.report.drop("nested_column_list", block)
        return None
    return block


def rewrite_file(run, block, depth) -> Optional[dict]:
    if block_type(block) != "file":
        return block
    file_obj = payload(block)
    if file_obj.get("type") == "external":
        # The API rejects an empty external URL even though such blocks exist
        if _is_blank((file_obj.get("external") or {}).get("url")):
            run.report.drop("empty_external_file", block)
            return None
        return block
    # Notion-hosted files do not work in a copied page
    return _notice(run, block, FILE_REMOVED)


def rewrite_table(run, block, depth) -> Optional[dict]:
    kind = block_type(block)
    if kind == "table":
        # A table cannot be created without its rows, so deep tables become notices
        if run.policy.table_mode != "preserve" or depth >= run.policy.flatten_depth:
            return _notice(run, block, TABLE_REMOVED)
        table = payload(block)
        return {
            "type": "table",
            "table": {
                "table_width": table.get("table_width"),
                "has_column_header": table.get("has_column_header", False),
                "has_row_header": table.get("has_row_header", False),
            },
            "has_children": True,
            "id": block.get("id"),
        }
    if kind == "table_row":
        cells = payload(block).get("cells") or []
        for cell in cells:
            run.translator.translate_runs(cell, run.pair)
        return {
            "type": "table_row",
            "has_children": False,
            "archived": False,
            "table_row": {"cells": cells},
        }
    return block


def rewrite_image(run, block, depth) -> Optional[dict]:
    if block_type(block) != "image":
        return block
    if payload(block).get("type") != "external":
        # Images with Notion-hosted URLs may not work in a copied page
        return _notice(run, block, IMAGE_REMOVED)
    return block


def _link_to(run, block, kind: str) -> Optional[dict]:
    """Replace a child_page / child_database block with a link_to_page block."""
    original_type = block_type(block)
    try:
        if kind == "page":
            target = retrieve_page(run.client, block["id"])
            link = {"type": "page_id", "page_id": target["id"]}
        else:
            target = retrieve_database(run.client, block["id"])
            link = {"type": "database_id", "database_id": target["id"]}
    except REQUEST_ERRORS as e:
        logger.warning(f"Failed to load a {kind} (error: {e}) - Skipped this block.")
        run.report.unresolved(original_type, block.get("id"), str(e))
        return None
    block.pop(original_type, None)
    block["type"] = "link_to_page"
    block["link_to_page"] = link
    block["has_children"] = False
    return block


def convert_child_page(run, block, depth) -> Optional[dict]:
    if block_type(block) != "child_page":
        return block
    return _link_to(run, block, "page")


def convert_child_database(run, block, depth) -> Optional[dict]:
    if block_type(block) != "child_database":
        return block
    return _link_to(run, block, "database")


RULES = (
    drop_unsupported,
    flatten_deep,
    drop_nested_column_list,
    rewrite_file,
    rewrite_table,
    rewrite_image,
    convert_child_page,
    convert_child_database,
)


def apply_rules(run: "TranslationRun", block: dict, depth: int) -> Optional[dict]:
    """Run every rule in order; None means the block is dropped."""
    for rule in RULES:
        result = rule(run, block, depth)
        if result is None:
            return None
        block = result
    return block
