"""
Shared fixtures: in-memory Notion and DeepL stand-ins (no API calls).
"""
import copy
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from notion_client.errors import APIResponseError

sys.path.insert(0, str(Path(__file__).parent.parent))

from notion_translator.notion.rules import CHUNKED
from notion_translator.pipeline import TranslationRun
from notion_translator.translators.deepl import TextTranslator
from notion_translator.translators.languages import LanguagePair


class FakeAPIError(APIResponseError):
    """APIResponseError without an HTTP response behind it."""

    def __init__(self, message="Could not find block", code="object_not_found"):
        Exception.__init__(self, message)
        self.message = message
        self.code = code
        self.status = 404

    def __str__(self):
        return self.message


class _Endpoint:
    def __init__(self, **methods):
        for name, fn in methods.items():
            setattr(self, name, fn)


class FakeNotion:
    """Just enough of notion_client.Client for the translator."""

    def __init__(self):
        self.pages_by_id = {}
        self.databases_by_id = {}
        self.children_by_id = {}
        self.list_calls = []
        self.append_calls = []
        self.created = []
        self.fail_append_at = None
        self.fail_list_for = set()

        self.pages = _Endpoint(retrieve=self._retrieve_page, create=self._create_page)
        self.databases = _Endpoint(retrieve=self._retrieve_database)
        self.blocks = _Endpoint(children=_Endpoint(list=self._list, append=self._append))

    # -- setup helpers --------------------------------------------------

    def add_page(self, page_id, title="Original", children=None, **extra):
        page = {
            "object": "page",
            "id": page_id,
            "created_time": "2024-01-01T00:00:00.000Z",
            "last_edited_time": "2024-01-02T00:00:00.000Z",
            "created_by": {"object": "user", "id": "user-1"},
            "last_edited_by": {"object": "user", "id": "user-1"},
            "parent": {"type": "workspace", "workspace": True},
            "url": f"https://www.notion.so/{page_id}",
            "properties": {
                "title": {
                    "id": "title",
                    "type": "title",
                    "title": [text(title)] if title is not None else [],
                }
            },
        }
        page.update(extra)
        self.pages_by_id[page_id] = page
        self.children_by_id[page_id] = children or []
        return page

    def add_database(self, database_id):
        self.databases_by_id[database_id] = {"object": "database", "id": database_id}

    def set_children(self, block_id, children):
        self.children_by_id[block_id] = children

    # -- endpoints ------------------------------------------------------

    def _retrieve_page(self, page_id):
        if page_id not in self.pages_by_id:
            raise FakeAPIError(f"Could not find page with ID: {page_id}")
        return copy.deepcopy(self.pages_by_id[page_id])

    def _retrieve_database(self, database_id):
        if database_id not in self.databases_by_id:
            raise FakeAPIError(f"Could not find database with ID: {database_id}")
        return copy.deepcopy(self.databases_by_id[database_id])

    def _list(self, block_id, page_size=100, start_cursor=None):
        self.list_calls.append({"block_id": block_id, "page_size": page_size, "start_cursor": start_cursor})
        if block_id in self.fail_list_for:
            raise FakeAPIError(f"Could not find block with ID: {block_id}")
        children = self.children_by_id.get(block_id, [])
        start = int(start_cursor) if start_cursor else 0
        end = start + page_size
        has_more = end < len(children)
        return {
            "object": "list",
            "results": copy.deepcopy(children[start:end]),
            "has_more": has_more,
            "next_cursor": str(end) if has_more else None,
        }

    def _append(self, block_id, children):
        if self.fail_append_at is not None and len(self.append_calls) == self.fail_append_at:
            raise FakeAPIError("body failed validation", code="validation_error")
        self.append_calls.append({"block_id": block_id, "children": children})
        return {"object": "list", "results": []}

    def _create_page(self, **kwargs):
        self.created.append(kwargs)
        return {"object": "page", "id": "new-page", "url": "https://www.notion.so/new-page"}


class FakeDeepL:
    """deepl.Translator stand-in: prefixes text with the target code."""

    def __init__(self, detected="EN"):
        self.detected = detected
        self.calls = []

    def translate_text(self, text, *, source_lang=None, target_lang=None, **kwargs):
        self.calls.append({"text": text, "source_lang": source_lang, "target_lang": target_lang})
        texts = text if isinstance(text, list) else [text]
        results = [
            SimpleNamespace(text=f"[{target_lang}] {t}", detected_source_lang=source_lang or self.detected)
            for t in texts
        ]
        return results if isinstance(text, list) else results[0]

    @property
    def detection_calls(self):
        return [c for c in self.calls if c["source_lang"] is None]


# -- block builders -------------------------------------------------------

def text(content):
    return {
        "type": "text",
        "text": {"content": content, "link": None},
        "plain_text": content,
        "href": None,
    }


def block(block_id, kind, has_children=False, **data):
    payload = {"rich_text": [], "color": "default"}
    payload.update(data)
    return {
        "object": "block",
        "id": block_id,
        "type": kind,
        kind: payload,
        "has_children": has_children,
        "archived": False,
        "created_time": "2024-01-01T00:00:00.000Z",
        "last_edited_time": "2024-01-02T00:00:00.000Z",
        "created_by": {"object": "user", "id": "user-1"},
        "last_edited_by": {"object": "user", "id": "user-1"},
    }


def paragraph(block_id, content, has_children=False):
    return block(block_id, "paragraph", has_children, rich_text=[text(content)])


def toggle(block_id, content):
    return block(block_id, "toggle", True, rich_text=[text(content)])


def image(block_id, hosted="file", url="https://example.com/cat.png", caption="A cat"):
    data = {"type": hosted, hosted: {"url": url}, "caption": [text(caption)]}
    return {**block(block_id, "image"), "image": data}


def file_block(block_id, hosted="file", url="https://example.com/a.pdf"):
    data = {"type": hosted, hosted: {"url": url}, "caption": []}
    return {**block(block_id, "file"), "file": data}


# -- fixtures -------------------------------------------------------------

@pytest.fixture
def notion():
    return FakeNotion()


@pytest.fixture
def deepl_backend():
    return FakeDeepL()


@pytest.fixture
def translator(deepl_backend):
    return TextTranslator(deepl_backend)


@pytest.fixture
def make_run(notion, translator):
    def _make(source=None, target=None, policy=CHUNKED, progress=None):
        return TranslationRun(
            notion,
            translator,
            pair=LanguagePair(source, target),
            policy=policy,
            progress=progress,
        )
    return _make
