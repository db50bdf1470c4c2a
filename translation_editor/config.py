"""Settings for the translation editor.

Loaded, highest precedence first, from constructor arguments, environment
variables prefixed with ``TRANSLATION_EDITOR_`` and a ``.env`` file in the
working directory (or the one named by ``TRANSLATION_EDITOR_ENV_FILE``).
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import pydantic
import pydantic_settings

from .errors import ConfigurationError

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _get_env_file() -> Optional[str]:
    env_file = os.environ.get('TRANSLATION_EDITOR_ENV_FILE')
    if env_file:
        return env_file if Path(env_file).exists() else None
    return '.env' if Path('.env').exists() else None


def _default_storage_dir() -> Path:
    return Path.home() / '.config' / 'translation-editor'


class EditorSettings(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix='TRANSLATION_EDITOR_',
        env_file=_get_env_file(),
        env_file_encoding='utf-8',
        extra='ignore',
    )

    app_identifier: str = 'com.example.translation-editor'
    """Prefix for stored files; a reverse-domain identifier you control."""

    api_url: str = 'http://localhost:8000/create-pr'
    """Endpoint that turns a submitted change-set into a pull request."""

    data_file: Path = Path('data.json')
    """Translation catalogue to edit."""

    storage_dir: Path = pydantic.Field(default_factory=_default_storage_dir)

    revision_file: Optional[Path] = None
    """JSON file with githubOrg/repoName/baseBranch; read from git when unset."""

    debug_mode: bool = False
    log_level: str = 'INFO'
    request_timeout: float = 30.0

    @pydantic.field_validator('app_identifier')
    @classmethod
    def _check_app_identifier(cls, value: str) -> str:
        value = value.strip()
        if not value or os.sep in value:
            raise ValueError("app_identifier must be a non-empty name without path separators")
        return value

    @pydantic.field_validator('log_level')
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return value

    @pydantic.field_validator('request_timeout')
    @classmethod
    def _check_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout must be positive")
        return value

    @property
    def effective_log_level(self) -> int:
        return logging.DEBUG if self.debug_mode else getattr(logging, self.log_level)


def load_settings(**overrides) -> EditorSettings:
    try:
        return EditorSettings(**overrides)
    except pydantic.ValidationError as exc:
        raise ConfigurationError(f"Invalid translation editor settings:\n{exc}") from exc
