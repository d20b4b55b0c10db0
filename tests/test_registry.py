"""
Test 2: Registration API (core.py)

Tests value, lazy, factory, instance and bulk registration.
"""

import pytest

from depreg import DependencyRegistry, EntryKind
from depreg.errors import (
    DuplicateRegistrationError,
    InvalidFactoryError,
    InvalidNameError,
    InvalidValueError,
)
from depreg.testing import SpyResolver


VALUES = [
    123,
    0,
    False,
    True,
    "",
    "hello world",
    [1, 2, 3],
    {"hello": "world"},
    object(),
    lambda: True,
    b"hello world",
]

INVALID_NAMES = [None, "", True, 123, ["a"], {"hello": "world"}]


class Greeting:
    def __init__(self, deps, last_name):
        self.deps = deps
        self.last_name = last_name

    def say(self):
        return f"Hello, {self.deps.first} {self.last_name}"


# ============================================================================
# register_value
# ============================================================================

class TestRegisterValue:

    @pytest.mark.parametrize("value", VALUES)
    def test_registers_a_value(self, registry, value):
        registry.register_value("name", value)
        assert registry.export()["name"] is value

    def test_fails_when_already_registered(self, registry):
        registry.register_value("hello", "world")

        with pytest.raises(DuplicateRegistrationError) as exc_info:
            registry.register_value("hello", "there")

        assert str(exc_info.value) == "Value is already registered: 'hello'"
        assert exc_info.value.name == "hello"
        assert registry.export().hello == "world"

    @pytest.mark.parametrize("name", INVALID_NAMES)
    def test_fails_when_name_is_invalid(self, registry, name):
        with pytest.raises(InvalidNameError, match="Invalid name"):
            registry.register_value(name, "value")
        assert len(registry) == 0

    def test_fails_when_value_is_none(self, registry):
        with pytest.raises(InvalidValueError) as exc_info:
            registry.register_value("name", None)

        assert str(exc_info.value) == "Value cannot be None: 'name'"
        assert "name" not in registry

    def test_punctuation_in_names(self, registry):
        registry.register_value("my.config-value!", 1)
        assert registry.export()["my.config-value!"] == 1

    def test_named_instance_alias(self, registry):
        instance = {"fake": "instance"}
        registry.register_named_instance("someInstance", instance)
        assert registry.export().someInstance is instance


# ============================================================================
# register_instance
# ============================================================================

class TestRegisterInstance:

    def test_registers_instance_by_class_name(self, registry):
        class MyClass:
            pass

        instance = MyClass()
        name = registry.register_instance(instance)

        assert name == "myClass"
        assert registry.export().myClass is instance

    def test_registers_class_by_its_name(self, registry):
        class MyClass:
            pass

        registry.register_instance(MyClass)
        assert registry.export().myClass is MyClass

    def test_fails_when_already_registered(self, registry):
        class MyClass:
            pass

        registry.register_instance(MyClass)

        with pytest.raises(DuplicateRegistrationError, match="Value is already registered: 'myClass'"):
            registry.register_instance(MyClass())

    def test_fails_for_none(self, registry):
        with pytest.raises(InvalidValueError):
            registry.register_instance(None)


# ============================================================================
# register_lazy
# ============================================================================

class TestRegisterLazy:

    @pytest.mark.parametrize("value", VALUES)
    def test_registers_a_lazy_value(self, registry, value):
        registry.register_lazy("name", lambda deps: value)
        assert registry.export().name is value

    def test_resolver_not_called_at_registration(self, registry):
        spy = SpyResolver()
        registry.register_lazy("name", spy)

        assert spy.call_count == 0
        assert registry.kind_of("name") is EntryKind.LAZY

    def test_resolves_once(self, registry):
        spy = SpyResolver(lambda deps: object())
        registry.register_lazy("name", spy)
        deps = registry.export()

        first = deps.name
        second = deps.name
        third = deps["name"]

        assert spy.call_count == 1
        assert first is second is third
        assert registry.kind_of("name") is EntryKind.VALUE

    def test_resolver_receives_accessor(self, registry):
        spy = SpyResolver()
        registry.register_lazy("name", spy)

        registry.export().name

        assert spy.calls == [registry.export()]

    def test_sees_sibling_dependencies(self, registry):
        registry.register_value("first", "John")
        registry.register_lazy("full", lambda deps: deps.first + " Doe")

        assert registry.export().full == "John Doe"

    def test_resolves_depth_first(self, registry):
        registry.register_lazy("fullName", lambda d: f"{d.firstName} {d.lastName}")
        registry.register_value("firstName", "John")
        registry.register_lazy("lastName", lambda d: "Doe")

        assert registry.export().fullName == "John Doe"
        assert registry.kind_of("lastName") is EntryKind.VALUE

    def test_fails_when_already_registered(self, registry):
        registry.register_lazy("hello", lambda deps: "world")

        with pytest.raises(DuplicateRegistrationError) as exc_info:
            registry.register_lazy("hello", lambda deps: "there")

        assert str(exc_info.value) == "Lazy value is already registered: 'hello'"
        assert registry.export().hello == "world"

    def test_fails_when_name_used_by_value(self, registry):
        registry.register_value("hello", "world")

        with pytest.raises(DuplicateRegistrationError, match="'hello'"):
            registry.register_lazy("hello", lambda deps: "there")

    @pytest.mark.parametrize("name", INVALID_NAMES)
    def test_fails_when_name_is_invalid(self, registry, name):
        with pytest.raises(InvalidNameError):
            registry.register_lazy(name, lambda deps: "value")

    def test_fails_when_resolver_is_none(self, registry):
        with pytest.raises(InvalidValueError, match="Lazy resolver cannot be None: 'name'"):
            registry.register_lazy("name", None)

    @pytest.mark.parametrize("resolver", [123, "value", [1, 2]])
    def test_fails_when_resolver_not_callable(self, registry, resolver):
        with pytest.raises(InvalidValueError, match="Lazy resolver is not callable: 'name'"):
            registry.register_lazy("name", resolver)


# ============================================================================
# register_factory
# ============================================================================

class TestRegisterFactory:

    @pytest.mark.parametrize("value", VALUES)
    def test_registers_a_factory(self, registry, value):
        name = registry.register_factory("name", lambda deps: value)

        assert name == "createName"
        assert registry.export().createName() is value

    def test_creates_factory_from_class(self, registry):
        registry.register_value("first", "John")
        registry.register_factory("greeting", Greeting)

        greeting = registry.export().createGreeting("Doe")

        assert isinstance(greeting, Greeting)
        assert greeting.say() == "Hello, John Doe"

    def test_class_only_derives_name(self, registry):
        registry.register_value("first", "Jane")
        name = registry.register_factory(Greeting)

        assert name == "createGreeting"
        assert registry.export().createGreeting("Roe").say() == "Hello, Jane Roe"

    def test_class_base_with_function_implementation(self, registry):
        registry.register_factory(Greeting, lambda deps, last: f"custom {last}")
        assert registry.export().createGreeting("Doe") == "custom Doe"

    def test_factory_passes_accessor_first(self, registry):
        received = []

        def make(deps, *args, **kwargs):
            received.append((deps, args, kwargs))
            return "made"

        registry.register_factory("thing", make)
        registry.export().createThing(1, True, key="value")

        assert received == [(registry.export(), (1, True), {"key": "value"})]

    def test_factory_not_memoized(self, registry):
        registry.register_factory("box", lambda deps: object())
        create_box = registry.export().createBox

        assert create_box() is not create_box()

    def test_fails_when_already_registered(self, registry):
        registry.register_factory("hello", lambda deps: "world")

        with pytest.raises(DuplicateRegistrationError) as exc_info:
            registry.register_factory("hello", lambda deps: "there")

        assert str(exc_info.value) == "Factory is already registered: 'createHello'"
        assert registry.export().createHello() == "world"

    def test_duplicate_checks_derived_name(self, registry):
        registry.register_value("createHello", "taken")

        with pytest.raises(DuplicateRegistrationError, match="'createHello'"):
            registry.register_factory("hello", lambda deps: "world")

    def test_base_name_does_not_collide(self, registry):
        registry.register_value("hello", "world")
        registry.register_factory("hello", lambda deps: "created")

        assert registry.names() == ["hello", "createHello"]

    @pytest.mark.parametrize("name", INVALID_NAMES)
    def test_fails_when_name_is_invalid(self, registry, name):
        with pytest.raises(InvalidNameError):
            registry.register_factory(name, lambda deps: "value")

    def test_fails_when_value_is_none(self, registry):
        with pytest.raises(InvalidFactoryError, match="Factory value cannot be None: 'createName'"):
            registry.register_factory("name", None)

    @pytest.mark.parametrize("value", [123, True, [1, 2, 3], "hello world", {"hello": "world"}, b"hello"])
    def test_fails_when_value_not_callable(self, registry, value):
        with pytest.raises(InvalidFactoryError) as exc_info:
            registry.register_factory("name", value)

        assert str(exc_info.value) == "Invalid factory value: 'createName'"
        assert "createName" not in registry

    @pytest.mark.parametrize("cls", [object, type, bool, int, float, complex, str, bytes,
                                     bytearray, list, tuple, dict, set, frozenset])
    def test_fails_for_builtin_constructors(self, registry, cls):
        with pytest.raises(InvalidFactoryError) as exc_info:
            registry.register_factory("name", cls)

        assert str(exc_info.value) == f"Invalid factory class: '{cls.__name__}'"

    def test_fails_for_builtin_class_as_base(self, registry):
        with pytest.raises(InvalidFactoryError, match="Invalid factory class: 'dict'"):
            registry.register_factory(dict)

    def test_invalid_factory_is_type_error(self, registry):
        with pytest.raises(TypeError):
            registry.register_factory("name", 42)


# ============================================================================
# register_bulk_values
# ============================================================================

class TestRegisterBulkValues:

    def test_registers_all_values_in_order(self, registry):
        registry.register_bulk_values({"a": 1, "b": 2, "c": 3})

        assert registry.names() == ["a", "b", "c"]
        assert registry.export().b == 2

    def test_aborts_on_first_failure_without_rollback(self, registry):
        with pytest.raises(InvalidValueError, match="Value cannot be None: 'b'"):
            registry.register_bulk_values({"a": 1, "b": None, "c": 3})

        assert "a" in registry
        assert "b" not in registry
        assert "c" not in registry
        assert registry.export().a == 1

    def test_aborts_on_duplicate(self, registry):
        registry.register_value("b", "original")

        with pytest.raises(DuplicateRegistrationError, match="Value is already registered: 'b'"):
            registry.register_bulk_values({"a": 1, "b": 2, "c": 3})

        assert registry.names() == ["b", "a"]
        assert registry.export().b == "original"

    def test_empty_mapping(self, registry):
        registry.register_bulk_values({})
        assert len(registry) == 0


# ============================================================================
# Introspection
# ============================================================================

class TestIntrospection:

    def test_describe_does_not_resolve(self, registry):
        spy = SpyResolver()
        registry.register_value("a", 1)
        registry.register_lazy("b", spy)
        registry.register_factory("c", lambda deps: None)

        assert registry.describe() == [("a", "value"), ("b", "lazy"), ("createC", "factory")]
        assert spy.call_count == 0

    def test_contains_and_len(self, registry):
        registry.register_value("a", 1)

        assert "a" in registry
        assert "b" not in registry
        assert 42 not in registry
        assert len(registry) == 1

    def test_kind_of_unknown(self, registry):
        from depreg.errors import UnknownDependencyError

        with pytest.raises(UnknownDependencyError, match="Unknown dependency: 'missing'"):
            registry.kind_of("missing")

    def test_repr(self, registry):
        registry.register_value("a", 1)
        assert repr(registry) == "<DependencyRegistry entries=1>"

    def test_export_returns_same_accessor(self):
        registry = DependencyRegistry()
        assert registry.export() is registry.export()
