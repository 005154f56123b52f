"""
Declarative enumerations.

Usage:
    class CivilStatus(Enumeration):
        pass

    CivilStatus.associate_values(married=(1, "Married"), single=2, divorced=3)

    CivilStatus.MARRIED              # 1
    CivilStatus.list()               # [1, 2, 3]
    CivilStatus.to_a()               # [("Divorced", 3), ("Married", 1), ("Single", 2)]
    CivilStatus.key_for(2)           # "single"
    CivilStatus.t(2)                 # localized label, explicit label or "Single"

Bare keys use the key itself as the code:

    class Color(Enumeration):
        pass

    Color.associate_values("red", "green")
    Color.value_for("red")           # "red"
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import TypeAdapter

from .entries import Code, EnumEntry, build_entries
from .errors import ConfigurationError, ErrorContext, UnknownKeyError
from .i18n import get_translator
from .registry import registry
from .strings import humanize, snake_case

logger = logging.getLogger(__name__)

SORT_OPTIONS = ("translation", "value", "name", "none")

_entries_adapter = TypeAdapter(list[EnumEntry])


@dataclass(frozen=True)
class _EntryTable:
    entries: tuple[EnumEntry, ...] = ()
    by_key: Mapping[str, EnumEntry] = field(default_factory=dict)
    by_value: Mapping[Code, EnumEntry] = field(default_factory=dict)

    @classmethod
    def build(cls, entries: tuple[EnumEntry, ...]) -> _EntryTable:
        return cls(
            entries=entries,
            by_key={e.key: e for e in entries},
            by_value={e.value: e for e in entries},
        )


class Enumeration:
    """
    Base class for declarative enumerations.

    Subclasses declare their members once with associate_values(); the
    members never change afterwards. Each key also becomes an uppercase
    class constant holding its code.

    Class attributes:
        sort_by: Ordering of to_a(): "translation" (default), "value",
            "name" or "none"
        i18n_name: Name used in the localization path
            ``enumerations.<i18n_name>.<key>`` (default: snake_case class name)
    """

    sort_by: str = "translation"
    i18n_name: str | None = None

    _table: _EntryTable = _EntryTable()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        registry.register(cls)

    def __new__(cls, *args: Any, **kwargs: Any) -> Enumeration:
        raise TypeError(f"{cls.__name__} is an enumeration and cannot be instantiated")

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    @classmethod
    def associate_values(cls, *args: Any, **kwargs: Any) -> type[Enumeration]:
        """
        Declare the members of this enumeration.

        Accepts keyword arguments (``married=1`` or ``married=(1, "Married")``),
        bare keys (``"married", "single"``), or a single mapping or sequence
        of ``(key, value)`` pairs.

        Returns:
            The enumeration class

        Raises:
            ConfigurationError: On duplicate keys or codes, invalid keys, an
                unknown sort_by, or if values were already associated
        """
        context = ErrorContext(cls.__name__)
        if "_table" in cls.__dict__:
            raise ConfigurationError("Values are already associated", context)
        if cls.sort_by not in SORT_OPTIONS:
            raise ConfigurationError(
                f"Invalid sort_by '{cls.sort_by}'. Must be one of: {', '.join(SORT_OPTIONS)}",
                context,
            )
        if args and kwargs:
            raise ConfigurationError("Use either positional keys or keyword values, not both", context)

        spec: Any
        if kwargs:
            spec = kwargs
        elif len(args) == 1 and not isinstance(args[0], str):
            spec = args[0]
        else:
            spec = list(args)

        entries = build_entries(spec, owner=cls.__name__)
        for entry in entries:
            setattr(cls, entry.key.upper(), entry.value)
        cls._table = _EntryTable.build(entries)

        logger.debug("Defined enumeration %s with keys %s", cls.__name__, [e.key for e in entries])
        return cls

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    @classmethod
    def entries(cls) -> tuple[EnumEntry, ...]:
        """Entries in declaration order."""
        return cls._table.entries

    @classmethod
    def list(cls) -> list[Code]:
        """Codes in declaration order."""
        return [e.value for e in cls._table.entries]

    @classmethod
    def keys(cls) -> list[str]:
        """Keys in declaration order."""
        return [e.key for e in cls._table.entries]

    @classmethod
    def length(cls) -> int:
        return len(cls._table.entries)

    @classmethod
    def enumeration(cls) -> dict[str, tuple[Code, str | None]]:
        """
        Raw declaration as ``{key: (code, label)}``.

        Returns a new dict on every call; changing it does not affect the
        enumeration.
        """
        return {e.key: (e.value, e.label) for e in cls._table.entries}

    @classmethod
    def translations(cls) -> list[str]:
        """Display labels in declaration order."""
        return [cls._label(e) for e in cls._table.entries]

    @classmethod
    def to_a(cls) -> list[tuple[str, Code]]:
        """
        ``(label, code)`` pairs for populating a select widget.

        Sorted by label, case-insensitively, unless sort_by says otherwise.
        """
        options = [(cls._label(e), e.value, e.key) for e in cls._table.entries]
        if cls.sort_by == "translation":
            options.sort(key=lambda option: option[0].casefold())
        elif cls.sort_by == "value":
            options.sort(key=lambda option: option[1])
        elif cls.sort_by == "name":
            options.sort(key=lambda option: option[2])
        return [(label, value) for label, value, _ in options]

    to_options = to_a

    @classmethod
    def to_range(cls) -> tuple[int, int]:
        """
        Smallest and largest code of an integer enumeration.

        Raises:
            ConfigurationError: If the enumeration is empty or has string codes
        """
        values = cls.list()
        if not values or not all(isinstance(v, int) for v in values):
            raise ConfigurationError(
                "to_range() needs a non-empty enumeration of integer codes",
                ErrorContext(cls.__name__),
            )
        return min(values), max(values)

    @classmethod
    def to_json(cls) -> str:
        """JSON array of ``{"key", "value", "label"}`` objects with resolved labels."""
        resolved = [e.model_copy(update={"label": cls._label(e)}) for e in cls._table.entries]
        return _entries_adapter.dump_json(resolved).decode()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @classmethod
    def value_for(cls, key: str) -> Code | None:
        """Code for *key*, or None if the key is not declared."""
        entry = cls._table.by_key.get(key)
        return entry.value if entry else None

    @classmethod
    def value_from_key(cls, key: str | None) -> Code | None:
        """Like value_for() but ignores the case of *key*."""
        if key is None:
            return None
        folded = str(key).casefold()
        for entry in cls._table.entries:
            if entry.key.casefold() == folded:
                return entry.value
        return None

    @classmethod
    def values_for(cls, keys: Iterable[str]) -> list[Code]:
        """
        Codes for *keys*, in the order given.

        Raises:
            UnknownKeyError: If any key is not declared
        """
        values = []
        for key in keys:
            entry = cls._table.by_key.get(key)
            if entry is None:
                raise UnknownKeyError(key, ErrorContext(cls.__name__))
            values.append(entry.value)
        return values

    @classmethod
    def key_for(cls, value: Any) -> str | None:
        """Key whose code equals *value*, or None."""
        entry = cls._entry_for_value(value)
        return entry.key if entry else None

    @classmethod
    def _entry_for_value(cls, value: Any) -> EnumEntry | None:
        # True == 1 and hash(True) == hash(1), but bools are never codes
        if isinstance(value, bool):
            return None
        return cls._table.by_value.get(value)

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    @classmethod
    def enum_name(cls) -> str:
        return cls.i18n_name or snake_case(cls.__name__)

    @classmethod
    def translate(cls, value: Any) -> Any:
        """
        Display label for *value*.

        Precedence: translation at ``enumerations.<enum_name>.<key>``, then
        the declared label, then the humanized key. Values that are not a
        declared code are returned unchanged.
        """
        entry = cls._entry_for_value(value)
        if entry is None:
            return value
        return cls._label(entry)

    t = translate

    @classmethod
    def _label(cls, entry: EnumEntry) -> str:
        translated = get_translator().resolve_enumeration(cls.enum_name(), entry.key)
        if translated is not None:
            return translated
        if entry.label is not None:
            return entry.label
        return humanize(entry.key)
