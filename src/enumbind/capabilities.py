"""
Capabilities a host class opts into to receive validations and scopes.

A binding checks these with issubclass() when it is declared, so a host
that has not opted into a capability fails at class-definition time rather
than at first use.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any


class SupportsPresenceValidation(ABC):
    """Host can require an attribute to be present."""

    @classmethod
    @abstractmethod
    def register_presence_rule(cls, attribute_name: str) -> None:
        pass


class SupportsInclusionValidation(ABC):
    """Host can restrict an attribute to a list of allowed values."""

    @classmethod
    @abstractmethod
    def register_inclusion_rule(cls, attribute_name: str, allowed: Iterable[Any]) -> None:
        pass


class SupportsScopes(ABC):
    """Host can register named query scopes."""

    @classmethod
    @abstractmethod
    def register_scope(cls, name: str, predicate: Callable[[Any], bool]) -> None:
        """
        Register a scope.

        Args:
            name: Scope name, exposed on the host's query interface
            predicate: Called with one record; True keeps it
        """
        pass

    @classmethod
    def reserved_scope_names(cls) -> frozenset[str]:
        """Names that cannot be used as scopes because the query interface already has them."""
        return frozenset()
