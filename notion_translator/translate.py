#!/usr/bin/env python3
"""
Translate a Notion page into a new child page.

Usage:
    python -m notion_translator.translate -u https://www.notion.so/My-Page-0123abcd -f en -t ja
    python -m notion_translator.translate -u https://www.notion.so/My-Page-0123abcd      # auto-detect
    python -m notion_translator.translate -u ... --single-request --debug
"""

import argparse
import sys
import webbrowser
from dataclasses import replace
from typing import List, Optional

from tqdm import tqdm

from .notion.rules import CHUNKED, SINGLE_REQUEST
from .notion.sync import get_client as get_notion_client
from .pipeline import extract_page_id, translate_page
from .translators.deepl import TextTranslator, get_client as get_deepl_client
from .translators.languages import SUPPORTED_FROM_LANGS, SUPPORTED_TO_LANGS, printable
from .utils.config import Config
from .utils.exceptions import (
    ConfigError,
    NotionTranslatorError,
    PageAccessError,
    UnsupportedPageTypeError,
)
from .utils.logger import setup_logging

DISCLAIMER = (
    "Disclaimer:\n"
    "Some parts might not be perfect.\n"
    "If the generated page is missing something, please adjust the details on your own.\n"
)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notion-translator",
        description="CLI to translate a Notion page to a different language",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Omit both --from and --to to detect the source language from the page
(English pages go to the counterpart language, everything else to English).
        """
    )
    parser.add_argument("-u", "--url", required=True, metavar="https://www.notion.so/...",
                        help="Page URL or id")
    parser.add_argument("-f", "--from", dest="source_lang", metavar=f"<{printable(SUPPORTED_FROM_LANGS)}>")
    parser.add_argument("-t", "--to", dest="target_lang", metavar=f"<{printable(SUPPORTED_TO_LANGS)}>")
    parser.add_argument("-d", "--debug", action="store_true", help="Log API requests and responses")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--batch-size", type=positive_int, help="Blocks per append request")
    parser.add_argument("--single-request", action="store_true",
                        help="Append all blocks in one request (small pages only); tables become notices")
    parser.add_argument("--open", action="store_true", help="Open the translated page in the browser")
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser


def validate_langs(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    if bool(args.source_lang) != bool(args.target_lang):
        parser.error("pass both --from and --to, or neither to auto-detect")
    if not args.source_lang:
        return
    source = args.source_lang.upper()
    target = args.target_lang.upper()
    if source not in SUPPORTED_FROM_LANGS:
        parser.error(f"{source} is not a supported language code. Pass any of {','.join(SUPPORTED_FROM_LANGS)}")
    if target not in SUPPORTED_TO_LANGS:
        parser.error(f"{target} is not a supported language code. Pass any of {','.join(SUPPORTED_TO_LANGS)}")
    args.source_lang = source
    args.target_lang = target


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    validate_langs(parser, args)

    setup_logging(level="DEBUG" if args.debug else "WARNING", log_file=args.log_file)

    try:
        config = Config.load(args.config)
        config.require_credentials()
    except ConfigError as e:
        print(f"\nERROR: {e.message}\n", file=sys.stderr)
        if args.open and e.signup_url:
            webbrowser.open(e.signup_url)
        return 1

    if args.single_request:
        policy = replace(SINGLE_REQUEST, page_size=config.notion.page_size)
    else:
        policy = replace(
            CHUNKED,
            page_size=config.notion.page_size,
            batch_size=args.batch_size or config.notion.batch_size,
        )

    notion = get_notion_client(
        config.notion.api_key,
        notion_version=config.notion.notion_version,
        debug=args.debug,
    )
    translator = TextTranslator(
        get_deepl_client(config.translation.api_key),
        detection_target=config.translation.detection_target,
        counterpart=config.translation.counterpart,
    )

    print(f"\nWait a minute! Now translating the following Notion page:\n{args.url}\n\n(this may take some time) ...")
    with tqdm(desc="Fetching blocks", unit="page") as bar:
        try:
            result = translate_page(
                notion,
                translator,
                extract_page_id(args.url),
                source_lang=args.source_lang,
                target_lang=args.target_lang,
                policy=policy,
                progress=lambda: bar.update(1),
            )
        except UnsupportedPageTypeError as e:
            bar.close()
            print(f"\nERROR: {e.message}\n", file=sys.stderr)
            return 1
        except PageAccessError as e:
            bar.close()
            print(
                f"\nERROR: {e.message}\n\nError details: {e.cause}\n\n"
                "Please make sure the following:\n"
                " * The page is shared with your app\n"
                " * The API token is the one for this workspace\n",
                file=sys.stderr,
            )
            return 1
        except NotionTranslatorError as e:
            bar.close()
            print(f"\nERROR: {e}\n", file=sys.stderr)
            return 1

    print(f"... Done!\n\n{DISCLAIMER}")
    for ref in result.report.unresolved_references:
        print(f"Skipped a linked {ref['type']} that could not be loaded: {ref['id']}")
    print(f"Here is the translated Notion page:\n{result.url}\n")
    if args.open and result.url:
        webbrowser.open(result.url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
