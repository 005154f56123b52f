"""
enumbind - declarative enumerations for model attributes.

Declare a closed set of named codes once, then bind it to an attribute of
a model class to get constants, localized labels, predicate and mutator
helpers, query scopes and validations.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .binding import AttributeBinding, bindings, enumeration_for, enumerations, has_enumeration_for
from .capabilities import SupportsInclusionValidation, SupportsPresenceValidation, SupportsScopes
from .config import Settings, configure, load_settings
from .entries import EnumEntry, build_entries
from .enumeration import Enumeration
from .errors import (
    ConfigurationError,
    EnumBindError,
    EnumerationNotFoundError,
    UnknownKeyError,
    UnsupportedOperationError,
)
from .i18n import Translator, get_translator, set_translator, use_locale
from .model import Query, Record
from .registry import EnumerationRegistry, registry


def _get_version() -> str:
    try:
        return _metadata_version("enumbind")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    # Enumerations
    "Enumeration",
    "EnumEntry",
    "build_entries",
    "EnumerationRegistry",
    "registry",
    # Binding
    "AttributeBinding",
    "has_enumeration_for",
    "enumeration_for",
    "enumerations",
    "bindings",
    "SupportsPresenceValidation",
    "SupportsInclusionValidation",
    "SupportsScopes",
    "Record",
    "Query",
    # Localization and configuration
    "Translator",
    "get_translator",
    "set_translator",
    "use_locale",
    "Settings",
    "load_settings",
    "configure",
    # Errors
    "EnumBindError",
    "ConfigurationError",
    "EnumerationNotFoundError",
    "UnsupportedOperationError",
    "UnknownKeyError",
]
