"""
Block helpers: sanitizing, typed payload access, rich text.
"""

from __future__ import annotations

from typing import Iterator

# Server-assigned fields that must not be sent back when creating content
AUDIT_FIELDS = (
    "id",
    "created_time",
    "last_edited_time",
    "created_by",
    "last_edited_by",
)

TRANSLATABLE_FIELDS = ("rich_text", "caption")

FILE_REMOVED = "(The file was removed from this page)"
IMAGE_REMOVED = "(The image was removed from this page)"
TABLE_REMOVED = "(The table was removed from this page)"


def sanitize(obj: dict) -> dict:
    """Remove identity and audit fields in place. Idempotent."""
    for key in AUDIT_FIELDS:
        obj.pop(key, None)
    return obj


def block_type(block: dict) -> str:
    return block.get("type", "")


def payload(block: dict) -> dict:
    """The type-specific object of a block, e.g. block["paragraph"]."""
    value = block.get(block_type(block))
    if not isinstance(value, dict):
        value = {}
        block[block_type(block)] = value
    return value


def set_children(block: dict, children: list[dict]) -> None:
    payload(block)["children"] = children


def text_run(content: str) -> dict:
    """A single plain text rich text run."""
    return {
        "type": "text",
        "text": {"content": content},
        "plain_text": content,
    }


def notice_paragraph(message: str) -> dict:
    """Paragraph block standing in for content that cannot be copied."""
    return {
        "type": "paragraph",
        "paragraph": {
            "color": "default",
            "rich_text": [text_run(message)],
        },
    }


def iter_translatable_text(block: dict) -> Iterator[list[dict]]:
    """
    Yield every caption and rich_text list one level inside the block.

    Nested children are not visited; they are translated when they are
    built. Code bodies are never translated.
    """
    is_code = block_type(block) == "code"
    for value in list(block.values()):
        if not isinstance(value, dict):
            continue
        for key, runs in value.items():
            if key not in TRANSLATABLE_FIELDS or not isinstance(runs, list):
                continue
            if key == "rich_text" and is_code:
                continue
            yield runs


def plain_text(runs: list[dict]) -> str:
    return "".join(run.get("plain_text") or "" for run in runs)
