"""Rule conditions: the closed set of ways a rule can restrict its targets.

A condition is decided once, when the rule is registered:

- ``None``      → :data:`ALWAYS` (the rule always applies)
- a mapping     → :class:`AttributeEquals` (target attributes must equal it)
- a callable    → :class:`Predicate` (called with performer, target, options)

Anything else is rejected with :class:`~cancan.errors.InvalidConditionError`.

Example
-------
>>> cond = build_condition({"published": True})
>>> cond.evaluate(None, {"published": True}, {}, lambda t, k: t.get(k))
True
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from cancan.errors import InvalidConditionError

AttributeGetter = Callable[[Any, str], Any]
PredicateFn = Callable[[Any, Any, Mapping[str, Any]], Any]


class Condition(ABC):
    """Base class of the condition variants.

    Conditions compare by identity, so rules holding them stay hashable.
    """

    @abstractmethod
    def evaluate(
        self,
        performer: Any,
        target: Any,
        options: Mapping[str, Any],
        get_attribute: AttributeGetter,
    ) -> bool:
        """Return True if the rule applies to this performer and target."""


@dataclass(frozen=True, eq=False)
class Always(Condition):
    """Condition used for rules registered without one."""

    def evaluate(
        self,
        performer: Any,
        target: Any,
        options: Mapping[str, Any],
        get_attribute: AttributeGetter,
    ) -> bool:
        return True

    def __repr__(self) -> str:
        return "ALWAYS"


ALWAYS = Always()


@dataclass(frozen=True, eq=False)
class AttributeEquals(Condition):
    """Satisfied when every listed attribute of the target equals its value.

    Attributes
    ----------
    attributes:
        Mapping of attribute name to the exact value required. Compared
        with ``==``; a missing attribute reads as ``None``.
    """

    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def evaluate(
        self,
        performer: Any,
        target: Any,
        options: Mapping[str, Any],
        get_attribute: AttributeGetter,
    ) -> bool:
        return all(
            get_attribute(target, key) == expected
            for key, expected in self.attributes.items()
        )


@dataclass(frozen=True, eq=False)
class Predicate(Condition):
    """Satisfied when ``fn(performer, target, options)`` is truthy.

    Exceptions raised by ``fn`` are not caught.
    """

    fn: PredicateFn

    def evaluate(
        self,
        performer: Any,
        target: Any,
        options: Mapping[str, Any],
        get_attribute: AttributeGetter,
    ) -> bool:
        return bool(self.fn(performer, target, options))


def build_condition(raw: object) -> Condition:
    """Classify a raw ``allow`` condition into a :class:`Condition`.

    Parameters
    ----------
    raw:
        ``None``, a mapping of attribute values, a callable predicate, or an
        already-built :class:`Condition`.

    Returns
    -------
    Condition

    Raises
    ------
    InvalidConditionError
        If ``raw`` is none of the accepted shapes.
    """
    if raw is None:
        return ALWAYS
    if isinstance(raw, Condition):
        return raw
    if isinstance(raw, Mapping):
        return AttributeEquals(dict(raw))
    if callable(raw):
        return Predicate(raw)
    raise InvalidConditionError(type(raw).__name__)
