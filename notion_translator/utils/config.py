"""
Configuration for notion-translator.

Supports:
- Environment variables
- .env file (auto-loaded)
- YAML config file (optional)

Usage:
    from notion_translator.utils.config import Config

    config = Config.load("config.yaml")
    config.require_credentials()
"""
import os
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigError

# =============================================================================
# PATH CONSTANTS
# =============================================================================

SCRIPT_DIR: str = os.path.dirname(os.path.abspath(__file__))
PACKAGE_DIR: str = os.path.dirname(SCRIPT_DIR)   # notion_translator/
REPO_ROOT: str = os.path.dirname(PACKAGE_DIR)


# =============================================================================
# ENV FILE LOADING
# =============================================================================

# Existing environment variables win over .env values
load_dotenv(Path(REPO_ROOT) / ".env")
load_dotenv()


def _env(*names: str) -> str:
    for name in names:
        value = os.environ.get(name, "")
        if value:
            return value
    return ""


# =============================================================================
# API KEYS
# =============================================================================

NOTION_SIGNUP_URL = "https://www.notion.so/my-integrations"
DEEPL_SIGNUP_URL = "https://www.deepl.com/pro-api"

NOTION_TOKEN_HELP = (
    "This tool requires a valid Notion API token. Head to https://www.notion.so/my-integrations, "
    "create a new app with \"Read Content\" and \"Insert Content\" in \"Content Capabilities\" section, "
    "plus \"Read user information without email addresses\" in \"User Capabilities\" section, "
    "and then share your Notion page with the app. Once you get a token, "
    "set NOTION_API_TOKEN env variable to the token value."
)
DEEPL_TOKEN_HELP = (
    "This tool requires a DeepL API token. Head to https://www.deepl.com/pro-api, sign up, "
    "and grab your API token. Once you get a token, set DEEPL_API_TOKEN env variable to the token value."
)

DEFAULT_NOTION_VERSION: str = "2022-06-28"


# =============================================================================
# CONFIG CLASSES
# =============================================================================

@dataclass
class NotionConfig:
    """Notion API settings."""
    api_key: str = ""
    notion_version: str = DEFAULT_NOTION_VERSION
    page_size: int = 100  # API max
    batch_size: Optional[int] = 10


@dataclass
class TranslationConfig:
    """DeepL settings."""
    api_key: str = ""
    detection_target: str = "EN-US"
    counterpart: str = "JA"


@dataclass
class Config:
    """Main configuration class."""

    notion: NotionConfig = field(default_factory=NotionConfig)
    translation: TranslationConfig = field(default_factory=TranslationConfig)

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        """
        Load configuration from the environment and an optional YAML file.

        Args:
            config_path: Path to YAML config file. If None, uses defaults.

        Raises:
            ConfigError: the YAML file exists but cannot be parsed
        """
        config = cls()
        config.notion.api_key = _env("NOTION_API_TOKEN", "NOTION_API_KEY")
        config.translation.api_key = _env("DEEPL_API_TOKEN", "DEEPL_API_KEY")

        if config_path is None:
            return config

        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}", config_key="config")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}", config_key="config", cause=e)

        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping at the top of {path}", config_key="config")

        if 'notion' in data:
            n = data['notion'] or {}
            config.notion.notion_version = n.get('notion_version', config.notion.notion_version)
            config.notion.page_size = int(n.get('page_size', config.notion.page_size))
            if 'batch_size' in n:
                config.notion.batch_size = n['batch_size']
            batch_size = config.notion.batch_size
            if batch_size is not None and (isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1):
                raise ConfigError("notion.batch_size must be a positive integer or null", config_key="notion.batch_size")
            if not 1 <= config.notion.page_size <= 100:
                raise ConfigError("notion.page_size must be between 1 and 100", config_key="notion.page_size")

        if 'translation' in data:
            t = data['translation'] or {}
            config.translation.detection_target = t.get('detection_target', config.translation.detection_target)
            config.translation.counterpart = t.get('counterpart', config.translation.counterpart)

        return config

    def require_credentials(self) -> None:
        """Fail fast when either API token is missing."""
        if not self.notion.api_key:
            raise ConfigError(NOTION_TOKEN_HELP, config_key="NOTION_API_TOKEN", signup_url=NOTION_SIGNUP_URL)
        if not self.translation.api_key:
            raise ConfigError(DEEPL_TOKEN_HELP, config_key="DEEPL_API_TOKEN", signup_url=DEEPL_SIGNUP_URL)
