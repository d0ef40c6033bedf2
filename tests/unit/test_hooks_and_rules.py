"""Unit tests for hooks.py and rules.py."""
from __future__ import annotations

import pytest

from cancan.conditions import ALWAYS, AttributeEquals
from cancan.errors import AuthorizationError
from cancan.hooks import (
    default_create_error,
    default_get_attribute,
    default_instance_of,
)
from cancan.rules import ALL, MANAGE, Rule, normalize_actions


class Animal:
    pass


class Dog(Animal):
    sound = "woof"


# ---------------------------------------------------------------------------
# default_instance_of
# ---------------------------------------------------------------------------


class TestDefaultInstanceOf:
    def test_instance(self) -> None:
        assert default_instance_of(Dog(), Dog) is True
        assert default_instance_of(Dog(), Animal) is True
        assert default_instance_of(Animal(), Dog) is False

    def test_class_itself(self) -> None:
        assert default_instance_of(Dog, Dog) is True
        assert default_instance_of(Dog, Animal) is True
        assert default_instance_of(Animal, Dog) is False

    def test_non_class_descriptor_never_matches(self) -> None:
        assert default_instance_of(Dog(), {"Instance": Dog}) is False
        assert default_instance_of(Dog(), "Dog") is False


class TestDefaultCreateError:
    def test_builds_authorization_error(self) -> None:
        error = default_create_error("alice", "read", "doc")
        assert isinstance(error, AuthorizationError)
        assert str(error) == "Authorization error"
        assert (error.performer, error.action, error.target) == ("alice", "read", "doc")


class TestDefaultGetAttribute:
    def test_mapping(self) -> None:
        assert default_get_attribute({"a": 1}, "a") == 1
        assert default_get_attribute({"a": 1}, "b") is None

    def test_object(self) -> None:
        assert default_get_attribute(Dog(), "sound") == "woof"
        assert default_get_attribute(Dog(), "colour") is None

    def test_object_with_get_method(self) -> None:
        class Model:
            def get(self, key: str) -> str:
                return key.upper()

        assert default_get_attribute(Model(), "sound") == "SOUND"

    def test_class_read_with_getattr(self) -> None:
        assert default_get_attribute(Dog, "sound") == "woof"


# ---------------------------------------------------------------------------
# rules
# ---------------------------------------------------------------------------


class TestNormalizeActions:
    def test_single_string(self) -> None:
        assert normalize_actions("read") == frozenset({"read"})

    def test_list_deduplicates(self) -> None:
        assert normalize_actions(["read", "read", "create"]) == frozenset({"read", "create"})

    def test_empty_list_raises(self) -> None:
        with pytest.raises(ValueError):
            normalize_actions([])


class TestRule:
    def test_defaults_to_always(self) -> None:
        rule = Rule(Dog, frozenset({"read"}), Animal)
        assert rule.condition is ALWAYS

    def test_frozen(self) -> None:
        rule = Rule(Dog, frozenset({"read"}), Animal)
        with pytest.raises((AttributeError, TypeError)):
            rule.target_type = Dog  # type: ignore[misc]

    def test_matches_action(self) -> None:
        rule = Rule(Dog, frozenset({"read", "bark"}), Animal)
        assert rule.matches_action("bark")
        assert not rule.matches_action("bite")

    def test_manage_matches_everything(self) -> None:
        rule = Rule(Dog, frozenset({MANAGE}), Animal)
        assert rule.matches_action("bite")

    def test_targets_all(self) -> None:
        assert Rule(Dog, frozenset({"read"}), ALL).targets_all
        assert not Rule(Dog, frozenset({"read"}), Animal).targets_all

    def test_rule_with_attribute_map_is_hashable(self) -> None:
        rule = Rule(Dog, frozenset({"read"}), Animal, AttributeEquals({"tags": ["a"]}))
        assert rule in {rule}

    def test_describe(self) -> None:
        rule = Rule(Dog, frozenset({"read", "bark"}), ALL, AttributeEquals({"a": 1}))
        summary = rule.describe()
        assert summary["performer"] == "Dog"
        assert summary["actions"] == ["bark", "read"]
        assert summary["target"] == "all"
        assert "AttributeEquals" in str(summary["condition"])

    def test_describe_wrapped_descriptor(self) -> None:
        rule = Rule({"Instance": Dog}, frozenset({"read"}), Animal)
        assert "Instance" in str(rule.describe()["performer"])
