"""
End-to-end tests for translate_page (fake Notion + fake DeepL).

Run with: pytest tests/test_pipeline.py -v
"""
import pytest

from conftest import FakeDeepL, image, paragraph, toggle

from notion_translator.notion.rules import SINGLE_REQUEST
from notion_translator.pipeline import extract_page_id, translate_page
from notion_translator.translators.deepl import TextTranslator
from notion_translator.utils.exceptions import (
    ConfigError,
    PageAccessError,
    SubmissionError,
    UnsupportedPageTypeError,
)


def appended(notion):
    return [b for call in notion.append_calls for b in call["children"]]


class TestTranslatePage:
    """Tests for the whole run."""

    def test_internal_image_only_page(self, notion, translator):
        """An image-only page should become a single translated notice."""
        notion.add_page("orig", children=[image("img")])

        result = translate_page(notion, translator, "orig", source_lang="EN", target_lang="JA")

        blocks = appended(notion)
        assert len(blocks) == 1
        assert blocks[0]["type"] == "paragraph"
        runs = blocks[0]["paragraph"]["rich_text"]
        assert [r["plain_text"] for r in runs] == ["[JA] (The image was removed from this page)"]
        assert runs[0]["text"]["content"] == runs[0]["plain_text"]
        assert result.url == "https://www.notion.so/new-page"

    def test_creates_child_page_with_suffixed_title(self, notion, translator):
        """The new page should sit under the source with a suffixed title."""
        notion.add_page("orig", title="Notes", children=[paragraph("a", "Hello")])

        translate_page(notion, translator, "orig", source_lang="EN", target_lang="DE")

        draft = notion.created[0]
        assert draft["parent"] == {"page_id": "orig"}
        assert draft["properties"]["title"]["title"][0]["plain_text"] == "Notes (DE)"
        assert notion.append_calls[0]["block_id"] == "new-page"

    def test_detects_language_once_per_run(self, notion):
        """Detection should run once and pin the pair for the whole run."""
        backend = FakeDeepL(detected="EN")
        translator = TextTranslator(backend)
        notion.add_page("orig", children=[toggle("t", "One"), paragraph("b", "Two")])
        notion.set_children("t", [paragraph("c", "Three")])

        result = translate_page(notion, translator, "orig")

        assert len(backend.detection_calls) == 1
        assert (result.language_pair.source, result.language_pair.target) == ("EN", "JA")
        translations = [c for c in backend.calls if c["source_lang"] is not None]
        assert all((c["source_lang"], c["target_lang"]) == ("EN", "JA") for c in translations)
        assert notion.created[0]["properties"]["title"]["title"][0]["plain_text"] == "Original (JA)"

    def test_consecutive_runs_do_not_share_pair(self, notion):
        """Each run should detect its own language pair."""
        backend = FakeDeepL(detected="EN")
        translator = TextTranslator(backend)
        notion.add_page("orig", children=[paragraph("a", "Hello")])

        translate_page(notion, translator, "orig")
        backend.detected = "DE"
        second = translate_page(notion, translator, "orig")

        assert len(backend.detection_calls) == 2
        assert second.language_pair.target == "EN-US"

    def test_empty_page_pins_from_title(self, notion):
        """A page without blocks should pin the pair from its title."""
        backend = FakeDeepL(detected="DE")
        notion.add_page("orig", title="Notizen", children=[])

        result = translate_page(notion, TextTranslator(backend), "orig")

        assert result.language_pair.target == "EN-US"
        assert notion.append_calls == []

    def test_batches_25_blocks(self, notion, translator):
        """25 blocks should go out as 10, 10 and 5."""
        notion.add_page("orig", children=[paragraph(str(i), f"t{i}") for i in range(25)])

        result = translate_page(notion, translator, "orig", source_lang="EN", target_lang="JA")

        assert [len(c["children"]) for c in notion.append_calls] == [10, 10, 5]
        assert [b["paragraph"]["rich_text"][0]["plain_text"] for b in appended(notion)] == \
            [f"[JA] t{i}" for i in range(25)]
        assert result.report.batches_submitted == 3

    def test_single_request_policy(self, notion, translator):
        """The single request policy should append everything at once."""
        notion.add_page("orig", children=[paragraph(str(i), f"t{i}") for i in range(25)])
        translate_page(notion, translator, "orig", source_lang="EN", target_lang="JA", policy=SINGLE_REQUEST)
        assert len(notion.append_calls) == 1

    def test_database_id_is_rejected(self, notion, translator):
        """A database id should be rejected as the wrong kind."""
        notion.add_database("db")
        with pytest.raises(UnsupportedPageTypeError):
            translate_page(notion, translator, "db")

    def test_unreadable_page(self, notion, translator):
        """A missing page should be reported as unreadable."""
        with pytest.raises(PageAccessError) as exc:
            translate_page(notion, translator, "missing")
        assert not isinstance(exc.value, UnsupportedPageTypeError)
        assert exc.value.page_id == "missing"

    def test_half_language_pair_rejected(self, notion, translator):
        """Passing only one language should be a configuration error."""
        with pytest.raises(ConfigError):
            translate_page(notion, translator, "orig", source_lang="EN")

    def test_submission_failure_propagates(self, notion, translator):
        """An append failure should propagate as SubmissionError."""
        notion.add_page("orig", children=[paragraph(str(i), f"t{i}") for i in range(15)])
        notion.fail_append_at = 0
        with pytest.raises(SubmissionError):
            translate_page(notion, translator, "orig", source_lang="EN", target_lang="JA")

    def test_listing_failure_is_page_access_error(self, notion, translator):
        """A failed listing mid-walk should abort before any page is created."""
        notion.add_page("orig", children=[toggle("t", "One")])
        notion.fail_list_for.add("t")

        with pytest.raises(PageAccessError) as exc:
            translate_page(notion, translator, "orig", source_lang="EN", target_lang="JA")

        assert exc.value.page_id == "t"
        assert notion.created == []

    def test_progress_hook(self, notion, translator):
        """The progress hook should fire once per fetched page."""
        notion.add_page("orig", children=[toggle("t", "One")])
        notion.set_children("t", [paragraph("c", "Two")])
        ticks = []

        translate_page(notion, translator, "orig", source_lang="EN", target_lang="JA",
                       progress=lambda: ticks.append(1))

        assert len(ticks) == 2


class TestExtractPageId:
    """Tests for URL parsing."""

    @pytest.mark.parametrize("value, expected", [
        ("https://www.notion.so/team/My-Page-0123456789abcdef0123456789abcdef",
         "0123456789abcdef0123456789abcdef"),
        ("https://www.notion.so/0123456789abcdef0123456789abcdef?pvs=4",
         "0123456789abcdef0123456789abcdef"),
        ("0123456789abcdef0123456789abcdef", "0123456789abcdef0123456789abcdef"),
        ("0123abcd-4567-89ab-cdef-0123456789ab", "0123abcd-4567-89ab-cdef-0123456789ab"),
        ("https://www.notion.so/team/0123abcd-4567-89ab-cdef-0123456789ab",
         "0123abcd-4567-89ab-cdef-0123456789ab"),
        ("https://www.notion.so/team/My-Page-0123456789ABCDEF0123456789ABCDEF#heading",
         "0123456789ABCDEF0123456789ABCDEF"),
        ("https://www.notion.so/team/Page-abc/", "abc"),
    ])
    def test_extract(self, value, expected):
        """Page ids should be taken from URLs and bare ids alike."""
        assert extract_page_id(value) == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
