"""
Notion modules.

Usage:
    from notion_translator.notion import get_client, collect_translated_children
"""

from .sync import (
    get_client,
    iter_children_pages,
    retrieve_page,
    retrieve_database,
    is_database,
    create_page,
    submit_blocks,
)
from .blocks import sanitize, payload, notice_paragraph, text_run
from .rules import TranslationPolicy, CHUNKED, SINGLE_REQUEST, apply_rules
from .walker import collect_translated_children, build_block
from .pages import draft_translation_target

__all__ = [
    'get_client',
    'iter_children_pages',
    'retrieve_page',
    'retrieve_database',
    'is_database',
    'create_page',
    'submit_blocks',
    'sanitize',
    'payload',
    'notice_paragraph',
    'text_run',
    'TranslationPolicy',
    'CHUNKED',
    'SINGLE_REQUEST',
    'apply_rules',
    'collect_translated_children',
    'build_block',
    'draft_translation_target',
]
