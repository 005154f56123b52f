"""
Binding enumerations to attributes of host classes.

Usage:
    class Person(Record):
        pass

    has_enumeration_for(Person, "civil_status", with_=CivilStatus, create_helpers=True)

    person = Person(civil_status=CivilStatus.MARRIED)
    person.civil_status_humanize()   # "Married"
    person.is_married()              # True
    person.set_single()              # person.civil_status == 2

Or as a class decorator:

    @enumeration_for("civil_status", create_helpers=True)
    class Person(Record):
        pass

Everything is generated once, when the binding is declared. Declaration
errors (unresolvable enumeration, missing host capability, duplicate
binding) are raised immediately.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from .capabilities import SupportsInclusionValidation, SupportsPresenceValidation, SupportsScopes
from .entries import Code
from .enumeration import Enumeration
from .errors import ConfigurationError, ErrorContext, UnsupportedOperationError
from .registry import registry

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

BINDINGS_ATTR = "__enumbind_bindings__"


@dataclass(frozen=True)
class AttributeBinding:
    """An enumeration bound to one attribute of a host class."""

    attribute_name: str
    enumeration: type[Enumeration]
    create_helpers: bool = False
    create_scopes: bool = False
    required: bool = False
    skip_validation: bool = False
    prefix_helpers: bool = False
    prefix_scopes: bool = False

    def member_name(self, key: str, prefixed: bool) -> str:
        return f"{self.attribute_name}_{key}" if prefixed else key


def has_enumeration_for(
    host: type,
    attribute_name: str,
    *,
    with_: type[Enumeration] | None = None,
    create_helpers: bool | Mapping[str, Any] = False,
    create_scopes: bool | Mapping[str, Any] = False,
    required: bool = False,
    skip_validation: bool = False,
) -> AttributeBinding:
    """
    Bind an enumeration to *attribute_name* on *host*.

    Args:
        host: Class whose attribute holds the enumeration code
        attribute_name: Attribute name on host instances
        with_: Enumeration class; resolved from the attribute name if omitted
        create_helpers: Generate ``is_<key>()``/``set_<key>()``; pass
            ``{"prefix": True}`` for ``is_<attr>_<key>()``/``set_<attr>_<key>()``
        create_scopes: Register a scope per key (``<key>`` or ``<attr>_<key>``)
        required: Register a presence rule
        skip_validation: Do not register the inclusion rule

    Returns:
        The registered binding

    Raises:
        EnumerationNotFoundError: with_ omitted and nothing resolves
        UnsupportedOperationError: Host lacks a requested capability
        ConfigurationError: Attribute already bound on this host class, or
            with_ is not an Enumeration subclass
    """
    context = ErrorContext(host.__name__, attribute_name)

    enumeration = with_ if with_ is not None else registry.resolve(attribute_name, host.__name__)
    if not (isinstance(enumeration, type) and issubclass(enumeration, Enumeration)):
        raise ConfigurationError(f"{enumeration!r} is not an Enumeration subclass", context)

    helpers, prefix_helpers = _read_flag(create_helpers, "create_helpers", context)
    scopes, prefix_scopes = _read_flag(create_scopes, "create_scopes", context)

    if scopes and not issubclass(host, SupportsScopes):
        raise UnsupportedOperationError(
            "create_scopes needs a host that implements SupportsScopes", context
        )
    if required and not issubclass(host, SupportsPresenceValidation):
        raise UnsupportedOperationError(
            "required needs a host that implements SupportsPresenceValidation", context
        )
    if attribute_name in host.__dict__.get(BINDINGS_ATTR, {}):
        raise ConfigurationError("Enumeration is already bound to this attribute", context)
    if scopes:
        scope_names = [
            f"{attribute_name}_{key}" if prefix_scopes else key for key in enumeration.keys()
        ]
        reserved = host.reserved_scope_names()  # type: ignore[attr-defined]
        taken = [name for name in scope_names if name in reserved]
        if taken:
            raise ConfigurationError(
                f"Scope name(s) {', '.join(taken)} clash with the host's query interface; "
                "use create_scopes={\"prefix\": True}",
                context,
            )

    binding = AttributeBinding(
        attribute_name=attribute_name,
        enumeration=enumeration,
        create_helpers=helpers,
        create_scopes=scopes,
        required=required,
        skip_validation=skip_validation,
        prefix_helpers=prefix_helpers,
        prefix_scopes=prefix_scopes,
    )

    # Inherited bindings are copied so the parent class keeps its own mapping
    bindings = {**getattr(host, BINDINGS_ATTR, {}), attribute_name: binding}
    setattr(host, BINDINGS_ATTR, bindings)

    for name, method in _build_methods(binding).items():
        setattr(host, name, method)

    if scopes:
        for entry in enumeration.entries():
            host.register_scope(  # type: ignore[attr-defined]
                binding.member_name(entry.key, prefix_scopes),
                _make_scope(attribute_name, entry.value),
            )

    if not skip_validation and issubclass(host, SupportsInclusionValidation):
        host.register_inclusion_rule(attribute_name, enumeration.list())

    if required:
        host.register_presence_rule(attribute_name)  # type: ignore[attr-defined]

    logger.debug(
        "Bound %s to %s.%s (helpers=%s, scopes=%s, required=%s)",
        enumeration.__name__,
        host.__name__,
        attribute_name,
        helpers,
        scopes,
        required,
    )
    return binding


def enumeration_for(attribute_name: str, **options: Any) -> Callable[[T], T]:
    """Class decorator form of has_enumeration_for()."""

    def decorator(host: T) -> T:
        has_enumeration_for(host, attribute_name, **options)
        return host

    return decorator


def enumerations(host: type) -> dict[str, type[Enumeration]]:
    """Enumerations bound on *host* (including inherited ones) by attribute name."""
    return {name: b.enumeration for name, b in bindings(host).items()}


def bindings(host: type) -> dict[str, AttributeBinding]:
    """Bindings on *host* (including inherited ones) by attribute name."""
    return dict(getattr(host, BINDINGS_ATTR, {}))


def _read_flag(
    value: bool | Mapping[str, Any], option: str, context: ErrorContext
) -> tuple[bool, bool]:
    """Split an option given as bool or ``{"prefix": bool}`` into (enabled, prefix)."""
    if isinstance(value, Mapping):
        unknown = set(value) - {"prefix"}
        if unknown:
            raise ConfigurationError(
                f"Unknown {option} option(s): {', '.join(sorted(unknown))}", context
            )
        return True, bool(value.get("prefix", False))
    return bool(value), False


def _build_methods(binding: AttributeBinding) -> dict[str, Callable[..., Any]]:
    attribute_name = binding.attribute_name
    methods: dict[str, Callable[..., Any]] = {
        f"{attribute_name}_humanize": _make_humanize(attribute_name, binding.enumeration),
    }
    if binding.create_helpers:
        for entry in binding.enumeration.entries():
            name = binding.member_name(entry.key, binding.prefix_helpers)
            methods[f"is_{name}"] = _make_predicate(attribute_name, entry.value)
            methods[f"set_{name}"] = _make_mutator(attribute_name, entry.value)

    for name, method in methods.items():
        method.__name__ = name
        method.__qualname__ = name
    return methods


def _make_humanize(attribute_name: str, enumeration: type[Enumeration]) -> Callable[[Any], Any]:
    def humanize(self: Any) -> Any:
        value = getattr(self, attribute_name, None)
        if value is None:
            return None
        return enumeration.translate(value)

    return humanize


def _make_predicate(attribute_name: str, code: Code) -> Callable[[Any], bool]:
    def predicate(self: Any) -> bool:
        return _matches(getattr(self, attribute_name, None), code)

    return predicate


def _make_mutator(attribute_name: str, code: Code) -> Callable[[Any], None]:
    def mutator(self: Any) -> None:
        setattr(self, attribute_name, code)

    return mutator


def _make_scope(attribute_name: str, code: Code) -> Callable[[Any], bool]:
    def scope(record: Any) -> bool:
        return _matches(getattr(record, attribute_name, None), code)

    return scope


def _matches(value: Any, code: Code) -> bool:
    # True == 1, but a bool attribute never holds a code
    return not isinstance(value, bool) and bool(value == code)
