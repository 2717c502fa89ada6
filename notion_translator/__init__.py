"""
Notion page translation library.

Structure:
    notion_translator/
    ├── notion/         - Notion API access, block rewrite rules, tree walker, page draft
    ├── translators/    - DeepL adapter and language codes
    ├── utils/          - Configuration, logging, exceptions
    ├── pipeline.py     - One page translation run
    └── translate.py    - CLI

Quick Usage:
    from notion_translator.notion import get_client
    from notion_translator.translators import TextTranslator, get_client as get_deepl
    from notion_translator.pipeline import translate_page

    result = translate_page(get_client(token), TextTranslator(get_deepl(key)), page_id)
    print(result.url)

CLI:
    python -m notion_translator.translate -u https://www.notion.so/... -f en -t ja
"""

__version__ = "1.0.0"
