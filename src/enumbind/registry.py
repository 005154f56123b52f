"""
Process-wide registry of enumeration classes.

Every Enumeration subclass registers itself here by class name when it is
defined, so that a binding declared without an explicit enumeration can be
resolved from its attribute name.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .errors import EnumerationNotFoundError, ErrorContext
from .strings import pascal_case, singularize

if TYPE_CHECKING:
    from .enumeration import Enumeration

logger = logging.getLogger(__name__)


def candidate_names(attribute_name: str) -> list[str]:
    """
    Class names tried when resolving an enumeration for *attribute_name*.

    Examples:
        >>> candidate_names("civil_status")
        ['CivilStatus']
        >>> candidate_names("categories")
        ['Categories', 'Category']
    """
    names = [pascal_case(attribute_name), pascal_case(singularize(attribute_name))]
    return list(dict.fromkeys(names))


class EnumerationRegistry:
    """
    Registry of Enumeration classes by class name.

    Supports:
    - Registration on class definition via register()
    - Lookup by name
    - Resolution from an attribute name (snake_case -> PascalCase)
    """

    def __init__(self) -> None:
        self._enumerations: dict[str, type[Enumeration]] = {}

    def register(self, enumeration: type[Enumeration]) -> None:
        """
        Register an enumeration class under its class name.

        A later class with the same name replaces the earlier one; this is
        what happens when a module is reloaded.
        """
        name = enumeration.__name__
        existing = self._enumerations.get(name)
        if existing is not None and existing.__qualname__ != enumeration.__qualname__:
            logger.warning(
                "Enumeration name '%s' is defined by both %s.%s and %s.%s; using the latter",
                name,
                existing.__module__,
                existing.__qualname__,
                enumeration.__module__,
                enumeration.__qualname__,
            )
        self._enumerations = {**self._enumerations, name: enumeration}

    def unregister(self, name: str) -> None:
        """Remove an enumeration by name (no-op if absent)."""
        self._enumerations = {k: v for k, v in self._enumerations.items() if k != name}

    def get(self, name: str) -> type[Enumeration] | None:
        """Get an enumeration class by name, or None."""
        return self._enumerations.get(name)

    def resolve(self, attribute_name: str, owner: str = "host") -> type[Enumeration]:
        """
        Resolve the enumeration conventionally named after *attribute_name*.

        Raises:
            EnumerationNotFoundError: If no candidate name is registered
        """
        names = candidate_names(attribute_name)
        for name in names:
            enumeration = self._enumerations.get(name)
            if enumeration is not None:
                return enumeration
        raise EnumerationNotFoundError(
            f"No enumeration given and none registered as {' or '.join(names)}",
            ErrorContext(owner, attribute_name),
        )

    def list_names(self) -> list[str]:
        """List registered enumeration names."""
        return sorted(self._enumerations)

    def __contains__(self, name: object) -> bool:
        return name in self._enumerations


registry = EnumerationRegistry()
