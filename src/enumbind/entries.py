"""
Enumeration entries and the normalizer that builds them.

An enumeration is declared in one of three shapes:

    # key -> (code, label)
    {"married": (1, "Married"), "single": (2, "Single")}

    # key -> code, label derived later
    {"married": 1, "single": 2}

    # bare keys, code is the key itself
    ["married", "single"]

A sequence of ``(key, value)`` pairs is accepted wherever a mapping is, so
that repeated keys can be detected.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from .errors import ConfigurationError, ErrorContext
from .strings import is_identifier

Code = int | str


class EnumEntry(BaseModel):
    """A single member of an enumeration."""

    key: str
    value: Code
    label: str | None = None

    model_config = ConfigDict(frozen=True)


def build_entries(spec: Any, owner: str = "Enumeration") -> tuple[EnumEntry, ...]:
    """
    Normalize an enumeration declaration into ordered entries.

    Args:
        spec: Mapping, sequence of pairs, or sequence of bare keys
        owner: Name used in error messages

    Returns:
        Entries in declaration order

    Raises:
        ConfigurationError: If a key repeats, two keys map to the same
            constant name, a code repeats, int and str codes are mixed, a key
            is not an identifier, or a value has an unsupported shape
    """
    context = ErrorContext(owner)
    entries: list[EnumEntry] = []
    seen_constants: dict[str, str] = {}
    seen_codes: dict[Code, str] = {}

    for key, value in _iter_pairs(spec, context):
        if not isinstance(key, str) or not is_identifier(key):
            raise ConfigurationError(f"Key {key!r} is not a valid identifier", context)
        constant = key.upper()
        if constant in seen_constants:
            if seen_constants[constant] == key:
                raise ConfigurationError(f"Key '{key}' is declared more than once", context)
            raise ConfigurationError(
                f"Keys '{seen_constants[constant]}' and '{key}' both define constant {constant}",
                context,
            )

        code, label = _split_value(key, value, context)
        if code in seen_codes:
            raise ConfigurationError(
                f"Code {code!r} is used by both '{seen_codes[code]}' and '{key}'", context
            )
        if entries and isinstance(code, str) != isinstance(entries[0].value, str):
            raise ConfigurationError(
                f"Code for '{key}' is a {type(code).__name__} but earlier codes are "
                f"{type(entries[0].value).__name__}; int and str codes cannot be mixed",
                context,
            )

        seen_constants[constant] = key
        seen_codes[code] = key
        entries.append(EnumEntry(key=key, value=code, label=label))

    return tuple(entries)


def _iter_pairs(spec: Any, context: ErrorContext) -> Iterable[tuple[Any, Any]]:
    if isinstance(spec, Mapping):
        return list(spec.items())
    if isinstance(spec, str | bytes) or not isinstance(spec, Iterable):
        raise ConfigurationError(
            f"Expected a mapping or a sequence of keys, got {type(spec).__name__}", context
        )

    pairs: list[tuple[Any, Any]] = []
    for item in spec:
        if isinstance(item, str):
            # Bare key: the code is the key itself
            pairs.append((item, item))
        elif isinstance(item, tuple | list) and len(item) == 2:
            pairs.append((item[0], item[1]))
        else:
            raise ConfigurationError(f"Cannot read entry {item!r}", context)
    return pairs


def _split_value(key: str, value: Any, context: ErrorContext) -> tuple[Code, str | None]:
    label: Any = None
    if isinstance(value, tuple | list):
        if len(value) != 2:
            raise ConfigurationError(
                f"Entry '{key}' must be a code or a [code, label] pair", context
            )
        value, label = value

    if isinstance(value, bool) or not isinstance(value, int | str):
        raise ConfigurationError(
            f"Code for '{key}' must be an int or a str, got {type(value).__name__}", context
        )
    if label is not None and not isinstance(label, str):
        raise ConfigurationError(f"Label for '{key}' must be a str", context)
    return value, label
