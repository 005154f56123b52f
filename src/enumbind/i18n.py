"""
Localization lookup for enumeration labels.

Translations live in YAML files, one per locale, using the same layout as
Rails locale files:

    # locales/en.yml
    en:
      enumerations:
        civil_status:
          married: Married
          single: Single

Labels are looked up at ``enumerations.<enum_name>.<key>`` in the current
locale, falling back to the default locale.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

ENUMERATIONS_NAMESPACE = "enumerations"

# Locale chosen by use_locale() for the current thread or task
_current_locale: ContextVar[str | None] = ContextVar("enumbind_current_locale", default=None)


class Translator:
    """
    In-memory store of translations keyed by locale.

    Lookups never raise: a missing locale, missing path or non-string leaf
    all resolve to ``None``.
    """

    def __init__(self, locale: str = "en", default_locale: str = "en") -> None:
        self.locale = locale
        self.default_locale = default_locale
        self._translations: dict[str, dict[str, Any]] = {}

    @property
    def available_locales(self) -> list[str]:
        return sorted(self._translations)

    def store(self, locale: str, data: Mapping[str, Any]) -> None:
        """Deep-merge *data* into the translations for *locale*."""
        current = self._translations.get(locale, {})
        # Swap in the merged tree in one assignment so readers never see a half-built one
        self._translations = {**self._translations, locale: _deep_merge(current, data)}

    def load_file(self, path: Path) -> None:
        """
        Load one YAML locale file.

        The document must be a mapping whose top-level keys are locales.

        Raises:
            ConfigurationError: If the YAML is invalid or not a mapping
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in locale file {path}: {e}") from e

        if data is None:
            logger.debug("Locale file %s is empty", path)
            return
        if not isinstance(data, dict):
            raise ConfigurationError(f"Locale file {path} must contain a mapping of locales")

        for locale, tree in data.items():
            if not isinstance(tree, dict):
                raise ConfigurationError(f"Locale '{locale}' in {path} must be a mapping")
            self.store(str(locale), tree)
        logger.debug("Loaded locale file %s (%s)", path, ", ".join(map(str, data)))

    def load_path(self, path: Path) -> None:
        """Load a locale file, or every ``*.yml``/``*.yaml`` file in a directory."""
        if path.is_dir():
            for file in sorted([*path.glob("*.yml"), *path.glob("*.yaml")]):
                self.load_file(file)
        elif path.exists():
            self.load_file(path)
        else:
            logger.warning("Locale path not found: %s", path)

    def resolve(self, path: str, locale: str | None = None) -> str | None:
        """
        Resolve a dotted path to a translated string.

        Args:
            path: Dotted key path, e.g. ``enumerations.civil_status.married``
            locale: Locale to look in (default: the use_locale() locale, then
                the translator locale)

        Returns:
            The translated string, or None if there is no translation
        """
        current = locale or _current_locale.get() or self.locale
        for candidate in dict.fromkeys((current, self.default_locale)):
            node: Any = self._translations.get(candidate)
            for part in path.split("."):
                if not isinstance(node, dict):
                    node = None
                    break
                node = node.get(part)
            if isinstance(node, str):
                return node
        return None

    def resolve_enumeration(self, enum_name: str, key: str) -> str | None:
        """Resolve the label at ``enumerations.<enum_name>.<key>``."""
        return self.resolve(f"{ENUMERATIONS_NAMESPACE}.{enum_name}.{key}")


def _deep_merge(base: Mapping[str, Any], extra: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in extra.items():
        key = str(key)
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _deep_merge(merged[key], value)
        elif isinstance(value, Mapping):
            merged[key] = _deep_merge({}, value)
        else:
            merged[key] = value
    return merged


_translator = Translator()


def get_translator() -> Translator:
    """Return the process-wide translator used for enumeration labels."""
    return _translator


def set_translator(translator: Translator) -> Translator:
    """Install *translator* as the process-wide translator and return the previous one."""
    global _translator
    previous = _translator
    _translator = translator
    return previous


@contextmanager
def use_locale(locale: str) -> Iterator[Translator]:
    """
    Temporarily switch the locale used for enumeration labels.

    The switch only applies to the current thread or task; other readers of
    the process-wide translator keep its own locale.

    Usage:
        with use_locale("pt"):
            CivilStatus.t(1)
    """
    token = _current_locale.set(locale)
    try:
        yield get_translator()
    finally:
        _current_locale.reset(token)
