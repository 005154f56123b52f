"""
Configuration for enumbind localization.

Settings come from an optional TOML file with an ``[enumbind]`` table,
overridden by environment variables:

    ENUMBIND_LOCALE          Current locale (default: en)
    ENUMBIND_DEFAULT_LOCALE  Fallback locale (default: en)
    ENUMBIND_LOCALE_PATHS    Locale files or directories, separated by os.pathsep

Usage:
    from enumbind.config import configure, load_settings

    configure(load_settings(Path("enumbind.toml")))
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigurationError
from .i18n import Translator, set_translator

logger = logging.getLogger(__name__)

LOCALE_ENV_VAR = "ENUMBIND_LOCALE"
DEFAULT_LOCALE_ENV_VAR = "ENUMBIND_DEFAULT_LOCALE"
LOCALE_PATHS_ENV_VAR = "ENUMBIND_LOCALE_PATHS"


@dataclass
class Settings:
    """Localization settings."""

    locale: str = "en"
    default_locale: str = "en"
    locale_paths: list[Path] = field(default_factory=list)


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings from a TOML file and the environment.

    Args:
        path: Optional TOML file; relative ``locale_paths`` in it are
            resolved against the file's directory

    Returns:
        Settings with environment variables taking precedence

    Raises:
        ConfigurationError: If the TOML file cannot be parsed
    """
    settings = Settings()

    if path is not None:
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e

        section = data.get("enumbind", {})
        settings.locale = section.get("locale", settings.locale)
        settings.default_locale = section.get("default_locale", settings.default_locale)
        settings.locale_paths = [path.parent / p for p in section.get("locale_paths", [])]

    env_locale = os.environ.get(LOCALE_ENV_VAR, "").strip()
    if env_locale:
        settings.locale = env_locale
    env_default = os.environ.get(DEFAULT_LOCALE_ENV_VAR, "").strip()
    if env_default:
        settings.default_locale = env_default
    env_paths = os.environ.get(LOCALE_PATHS_ENV_VAR, "").strip()
    if env_paths:
        settings.locale_paths = [Path(p) for p in env_paths.split(os.pathsep) if p]

    return settings


def configure(settings: Settings | None = None) -> Translator:
    """
    Build a translator from *settings* and install it process-wide.

    Returns:
        The installed translator
    """
    settings = settings or load_settings()
    translator = Translator(locale=settings.locale, default_locale=settings.default_locale)
    for locale_path in settings.locale_paths:
        translator.load_path(locale_path)
    set_translator(translator)
    logger.debug(
        "Configured translator: locale=%s default=%s locales=%s",
        translator.locale,
        translator.default_locale,
        translator.available_locales,
    )
    return translator
