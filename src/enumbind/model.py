"""
Reference host class.

Record implements every capability a binding can use, with plain
in-memory behaviour: validation rules are kept on the class and checked by
validate(), and scopes filter any iterable of records through Query.

    class Person(Record):
        pass

    Person.has_enumeration_for("civil_status", with_=CivilStatus, create_scopes=True, required=True)

    Person(civil_status=99).validate()   # {"civil_status": ["is not included in the list"]}
    Person.query(people).married().all()
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any

from .binding import AttributeBinding, enumerations, has_enumeration_for
from .capabilities import SupportsInclusionValidation, SupportsPresenceValidation, SupportsScopes
from .enumeration import Enumeration
from .errors import ConfigurationError, ErrorContext

BLANK_MESSAGE = "can't be blank"
INCLUSION_MESSAGE = "is not included in the list"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class Record(SupportsPresenceValidation, SupportsInclusionValidation, SupportsScopes):
    """Attribute bag with class-level validation rules and scopes."""

    _presence_rules: tuple[str, ...] = ()
    _inclusion_rules: dict[str, tuple[Any, ...]] = {}
    _scopes: dict[str, Callable[[Any], bool]] = {}

    def __init__(self, **attributes: Any) -> None:
        for name, value in attributes.items():
            setattr(self, name, value)

    def __repr__(self) -> str:
        attrs = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({attrs})"

    # Capabilities. Each rule set is replaced rather than mutated so
    # subclasses never write into their parent's rules.

    @classmethod
    def register_presence_rule(cls, attribute_name: str) -> None:
        if attribute_name not in cls._presence_rules:
            cls._presence_rules = (*cls._presence_rules, attribute_name)

    @classmethod
    def register_inclusion_rule(cls, attribute_name: str, allowed: Iterable[Any]) -> None:
        cls._inclusion_rules = {**cls._inclusion_rules, attribute_name: tuple(allowed)}

    @classmethod
    def register_scope(cls, name: str, predicate: Callable[[Any], bool]) -> None:
        if name in cls.reserved_scope_names():
            raise ConfigurationError(
                f"Scope '{name}' clashes with a Query method", ErrorContext(cls.__name__)
            )
        cls._scopes = {**cls._scopes, name: predicate}

    @classmethod
    def reserved_scope_names(cls) -> frozenset[str]:
        return frozenset(name for name in dir(Query) if not name.startswith("_")) | {"model"}

    # Enumerations

    @classmethod
    def has_enumeration_for(cls, attribute_name: str, **options: Any) -> AttributeBinding:
        """See enumbind.binding.has_enumeration_for()."""
        return has_enumeration_for(cls, attribute_name, **options)

    @classmethod
    def enumerations(cls) -> dict[str, type[Enumeration]]:
        return enumerations(cls)

    # Validation

    def validate(self) -> dict[str, list[str]]:
        """
        Check presence and inclusion rules.

        Returns:
            Error messages by attribute name; empty when valid
        """
        errors: dict[str, list[str]] = {}
        for name in self._presence_rules:
            if _is_blank(getattr(self, name, None)):
                errors.setdefault(name, []).append(BLANK_MESSAGE)
        for name, allowed in self._inclusion_rules.items():
            value = getattr(self, name, None)
            # Blank values are left to the presence rule
            if not _is_blank(value) and (isinstance(value, bool) or value not in allowed):
                errors.setdefault(name, []).append(INCLUSION_MESSAGE)
        return errors

    def is_valid(self) -> bool:
        return not self.validate()

    # Querying

    @classmethod
    def scopes(cls) -> list[str]:
        return list(cls._scopes)

    @classmethod
    def query(cls, items: Iterable[Any]) -> Query:
        return Query(cls, items)


class Query:
    """
    Chainable filter over records of one host class.

    Registered scopes are available as methods:

        Person.query(people).married().where(name="Ana").first()
    """

    def __init__(self, model: type[Record], items: Iterable[Any]) -> None:
        self.model = model
        self._items = list(items)

    def scope(self, name: str) -> Query:
        """Apply a registered scope by name."""
        try:
            predicate = self.model._scopes[name]
        except KeyError:
            raise AttributeError(f"{self.model.__name__} has no scope '{name}'") from None
        return Query(self.model, (item for item in self._items if predicate(item)))

    def where(self, **conditions: Any) -> Query:
        return Query(
            self.model,
            (
                item
                for item in self._items
                if all(getattr(item, k, None) == v for k, v in conditions.items())
            ),
        )

    def all(self) -> list[Any]:
        return list(self._items)

    def first(self) -> Any | None:
        return self._items[0] if self._items else None

    def count(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getattr__(self, name: str) -> Callable[[], Query]:
        if name.startswith("_") or name == "model":
            raise AttributeError(name)
        if name not in self.model._scopes:
            raise AttributeError(f"{self.model.__name__} has no scope '{name}'")
        return lambda: self.scope(name)
