"""
Notion API access.

Reusable API:
- get_client: Notion client factory
- iter_children_pages: cursor pagination over a block's children
- retrieve_page / retrieve_database
- submit_blocks: ordered, size-bounded append of translated blocks
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from notion_client import Client
from notion_client.errors import APIResponseError, HTTPResponseError, RequestTimeoutError

from ..utils.config import DEFAULT_NOTION_VERSION
from ..utils.exceptions import ConfigError, PageAccessError, SubmissionError
from ..utils.logger import get_logger

logger = get_logger(__name__)

MAX_PAGE_SIZE = 100

# Everything notion-client raises for a failed or unanswered request
REQUEST_ERRORS = (APIResponseError, HTTPResponseError, RequestTimeoutError)


def get_client(api_key: str, *, notion_version: str = DEFAULT_NOTION_VERSION, debug: bool = False) -> Client:
    """Create Notion client; debug mode also turns on the client's request logging."""
    from notion_client.client import ClientOptions
    return Client(ClientOptions(
        auth=api_key,
        notion_version=notion_version,
        log_level=logging.DEBUG if debug else logging.WARNING,
    ))


# =============================================================================
# READ OPERATIONS
# =============================================================================

def iter_children_pages(client: Client, block_id: str, *, page_size: int = MAX_PAGE_SIZE) -> Iterator[list[dict]]:
    """
    Yield one list of child blocks per API page, in source order.

    Raises:
        PageAccessError: a listing request failed
    """
    cursor = None
    while True:
        kwargs = {"block_id": block_id, "page_size": min(page_size, MAX_PAGE_SIZE)}
        if cursor:
            kwargs["start_cursor"] = cursor
        try:
            res = client.blocks.children.list(**kwargs)
        except REQUEST_ERRORS as e:
            raise PageAccessError(f"Failed to list the children of {block_id}", page_id=block_id, cause=e) from e
        yield res.get("results") or []
        if not res.get("has_more"):
            return
        cursor = res.get("next_cursor")


def retrieve_page(client: Client, page_id: str) -> dict:
    return client.pages.retrieve(page_id=page_id)


def retrieve_database(client: Client, database_id: str) -> dict:
    return client.databases.retrieve(database_id=database_id)


def is_database(client: Client, content_id: str) -> bool:
    """True when the id can be read as a database."""
    try:
        retrieve_database(client, content_id)
    except APIResponseError:
        return False
    return True


# =============================================================================
# WRITE OPERATIONS
# =============================================================================

def create_page(client: Client, draft: dict) -> dict:
    return client.pages.create(**draft)


def submit_blocks(
    client: Client,
    page_id: str,
    blocks: list[dict],
    *,
    batch_size: Optional[int] = 10,
) -> int:
    """
    Append blocks to a page in order, `batch_size` blocks per request.

    A batch_size of None sends everything in one request. The first failing
    request aborts the remaining batches; already appended batches stay.

    Returns:
        Number of append requests made
    """
    if batch_size is not None and batch_size < 1:
        raise ConfigError(f"batch_size must be at least 1, got {batch_size}", config_key="batch_size")
    if not blocks:
        return 0
    step = batch_size or len(blocks)
    calls = 0
    for i in range(0, len(blocks), step):
        chunk = blocks[i : i + step]
        try:
            res = client.blocks.children.append(block_id=page_id, children=chunk)
        except REQUEST_ERRORS as e:
            raise SubmissionError(
                f"Failed to append blocks {i + 1}-{i + len(chunk)} of {len(blocks)}",
                page_id=page_id,
                batch_index=calls,
                cause=e,
            ) from e
        calls += 1
        logger.debug(f"Appended batch {calls} ({len(chunk)} blocks): {res}")
    return calls
