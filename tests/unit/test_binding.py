"""Tests for binding enumerations to host class attributes."""

from __future__ import annotations

import pytest

from enumbind import (
    ConfigurationError,
    Enumeration,
    EnumerationNotFoundError,
    Record,
    SupportsInclusionValidation,
    SupportsScopes,
    UnsupportedOperationError,
    bindings,
    enumeration_for,
    enumerations,
    has_enumeration_for,
)


class Plain:
    """Host without any capabilities."""

    def __init__(self, **attributes):
        self.__dict__.update(attributes)


class TestRegistration:
    """has_enumeration_for() records the binding on the host class."""

    def test_enumerations_registry(self, civil_status):
        class Person(Plain):
            pass

        has_enumeration_for(Person, "civil_status", with_=civil_status)
        assert enumerations(Person) == {"civil_status": civil_status}

    def test_returns_binding(self, civil_status):
        class Person(Plain):
            pass

        binding = has_enumeration_for(Person, "civil_status", with_=civil_status, required=False)
        assert binding.attribute_name == "civil_status"
        assert binding.enumeration is civil_status
        assert bindings(Person) == {"civil_status": binding}

    def test_host_without_bindings(self):
        assert enumerations(Plain) == {}

    def test_same_enumeration_on_many_attributes(self, civil_status):
        class Person(Plain):
            pass

        has_enumeration_for(Person, "civil_status", with_=civil_status)
        has_enumeration_for(Person, "previous_status", with_=civil_status)
        assert list(enumerations(Person)) == ["civil_status", "previous_status"]

    def test_duplicate_binding_rejected(self, civil_status):
        class Person(Plain):
            pass

        has_enumeration_for(Person, "civil_status", with_=civil_status)
        with pytest.raises(ConfigurationError, match="already bound"):
            has_enumeration_for(Person, "civil_status", with_=civil_status)

    def test_subclass_inherits_and_may_rebind(self, civil_status):
        class Other(Enumeration):
            pass

        Other.associate_values("x")

        class Person(Plain):
            pass

        class Employee(Person):
            pass

        has_enumeration_for(Person, "civil_status", with_=civil_status)
        assert enumerations(Employee) == {"civil_status": civil_status}

        has_enumeration_for(Employee, "civil_status", with_=Other)
        assert enumerations(Employee) == {"civil_status": Other}
        assert enumerations(Person) == {"civil_status": civil_status}

    def test_subclass_binding_does_not_leak_to_parent(self, civil_status):
        class Person(Plain):
            pass

        class Employee(Person):
            pass

        has_enumeration_for(Employee, "civil_status", with_=civil_status)
        assert enumerations(Person) == {}

    def test_with_must_be_enumeration(self):
        class Person(Plain):
            pass

        with pytest.raises(ConfigurationError, match="not an Enumeration"):
            has_enumeration_for(Person, "civil_status", with_=dict)

    def test_decorator(self, civil_status):
        @enumeration_for("civil_status", with_=civil_status, create_helpers=True)
        class Person(Plain):
            pass

        assert enumerations(Person) == {"civil_status": civil_status}
        assert Person(civil_status=1).is_married()


class TestConventionalResolution:
    """Omitting with_ resolves the enumeration from the attribute name."""

    def test_resolves_by_attribute_name(self):
        class RelationshipStatus(Enumeration):
            pass

        RelationshipStatus.associate_values(married=1)

        class Person(Plain):
            pass

        has_enumeration_for(Person, "relationship_status")
        assert enumerations(Person) == {"relationship_status": RelationshipStatus}

    def test_unresolvable(self):
        class Person(Plain):
            pass

        with pytest.raises(EnumerationNotFoundError, match="Person.favourite_flavour"):
            has_enumeration_for(Person, "favourite_flavour")
        assert enumerations(Person) == {}


class TestHumanize:
    def test_humanize_current_value(self, civil_status):
        class Person(Plain):
            pass

        has_enumeration_for(Person, "civil_status", with_=civil_status)
        assert Person(civil_status=1).civil_status_humanize() == "Married"
        assert Person(civil_status=2).civil_status_humanize() == "Single"

    def test_humanize_unset(self, civil_status):
        class Person(Plain):
            pass

        has_enumeration_for(Person, "civil_status", with_=civil_status)
        assert Person().civil_status_humanize() is None
        assert Person(civil_status=None).civil_status_humanize() is None

    def test_humanize_uses_translation(self, civil_status, fresh_translator):
        class Person(Plain):
            pass

        has_enumeration_for(Person, "civil_status", with_=civil_status)
        fresh_translator.store("en", {"enumerations": {"civil_status": {"single": "Unmarried"}}})
        assert Person(civil_status=2).civil_status_humanize() == "Unmarried"

    def test_humanize_unknown_value(self, civil_status):
        class Person(Plain):
            pass

        has_enumeration_for(Person, "civil_status", with_=civil_status)
        assert Person(civil_status=42).civil_status_humanize() == 42


class TestHelpers:
    """create_helpers generates is_<key>() and set_<key>()."""

    def test_no_helpers_by_default(self, civil_status):
        class Person(Plain):
            pass

        has_enumeration_for(Person, "civil_status", with_=civil_status)
        assert not hasattr(Person, "is_married")
        assert not hasattr(Person, "set_married")

    def test_predicates(self, civil_status):
        class Person(Plain):
            pass

        has_enumeration_for(Person, "civil_status", with_=civil_status, create_helpers=True)
        person = Person(civil_status=civil_status.MARRIED)
        assert person.is_married() is True
        assert person.is_single() is False
        assert Person().is_married() is False

    def test_predicate_ignores_bool(self, civil_status):
        class Person(Plain):
            pass

        has_enumeration_for(Person, "civil_status", with_=civil_status, create_helpers=True)
        assert Person(civil_status=True).is_married() is False

    def test_mutators(self, civil_status):
        class Person(Plain):
            pass

        has_enumeration_for(Person, "civil_status", with_=civil_status, create_helpers=True)
        person = Person(civil_status=civil_status.MARRIED)
        person.set_divorced()
        assert person.civil_status == 3
        assert person.is_divorced()
        assert not person.is_married()

    def test_prefixed_helpers(self, civil_status):
        class Person(Plain):
            pass

        has_enumeration_for(
            Person, "civil_status", with_=civil_status, create_helpers={"prefix": True}
        )
        person = Person()
        person.set_civil_status_single()
        assert person.civil_status == 2
        assert person.is_civil_status_single()
        assert not hasattr(Person, "is_single")

    def test_unknown_helper_option(self, civil_status):
        class Person(Plain):
            pass

        with pytest.raises(ConfigurationError, match="Unknown create_helpers option"):
            has_enumeration_for(
                Person, "civil_status", with_=civil_status, create_helpers={"polymorphic": True}
            )

    def test_generated_method_names(self, civil_status):
        class Person(Plain):
            pass

        has_enumeration_for(Person, "civil_status", with_=civil_status, create_helpers=True)
        assert Person.is_married.__name__ == "is_married"
        assert Person.civil_status_humanize.__name__ == "civil_status_humanize"


class TestCapabilities:
    """Declaration fails early when the host lacks a requested capability."""

    def test_scopes_need_capability(self, civil_status):
        class Person(Plain):
            pass

        with pytest.raises(UnsupportedOperationError, match="SupportsScopes"):
            has_enumeration_for(Person, "civil_status", with_=civil_status, create_scopes=True)
        assert enumerations(Person) == {}
        assert not hasattr(Person, "civil_status_humanize")

    def test_required_needs_capability(self, civil_status):
        class Person(Plain):
            pass

        with pytest.raises(UnsupportedOperationError, match="SupportsPresenceValidation"):
            has_enumeration_for(Person, "civil_status", with_=civil_status, required=True)

    def test_inclusion_registered_when_supported(self, civil_status):
        calls = []

        class Person(Plain, SupportsInclusionValidation):
            @classmethod
            def register_inclusion_rule(cls, attribute_name, allowed):
                calls.append((attribute_name, list(allowed)))

        has_enumeration_for(Person, "civil_status", with_=civil_status)
        assert calls == [("civil_status", [1, 2, 3])]

    def test_skip_validation(self, civil_status):
        calls = []

        class Person(Plain, SupportsInclusionValidation):
            @classmethod
            def register_inclusion_rule(cls, attribute_name, allowed):
                calls.append(attribute_name)

        has_enumeration_for(Person, "civil_status", with_=civil_status, skip_validation=True)
        assert calls == []

    def test_scopes_registered_per_key(self, civil_status):
        registered = {}

        class Person(Plain, SupportsScopes):
            @classmethod
            def register_scope(cls, name, predicate):
                registered[name] = predicate

        has_enumeration_for(Person, "civil_status", with_=civil_status, create_scopes=True)
        assert list(registered) == ["married", "single", "divorced"]
        assert registered["married"](Person(civil_status=1))
        assert not registered["married"](Person(civil_status=2))

    def test_prefixed_scopes(self, civil_status):
        class Person(Record):
            pass

        has_enumeration_for(
            Person, "civil_status", with_=civil_status, create_scopes={"prefix": True}
        )
        assert Person.scopes() == [
            "civil_status_married",
            "civil_status_single",
            "civil_status_divorced",
        ]
