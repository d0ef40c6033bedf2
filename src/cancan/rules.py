"""Rule records held by the engine registry.

A :class:`Rule` is created by a single ``allow`` call and never changes
afterwards. One rule may cover several actions; they share its condition.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from cancan.conditions import ALWAYS, Condition

# ---------------------------------------------------------------------------
# Sentinels
# ---------------------------------------------------------------------------

MANAGE: str = "manage"
"""Action name matching every action."""

ALL: str = "all"
"""Target type matching every target, instance or class."""


def normalize_actions(actions: str | Iterable[str]) -> frozenset[str]:
    """Turn a single action name or an iterable of names into a frozenset.

    Raises
    ------
    ValueError
        If the iterable is empty.
    """
    if isinstance(actions, str):
        return frozenset([actions])
    normalized = frozenset(actions)
    if not normalized:
        raise ValueError("allow() needs at least one action.")
    return normalized


@dataclass(frozen=True, eq=False)
class Rule:
    """A single permission grant.

    Attributes
    ----------
    performer_type:
        Type descriptor the performer must be an instance of.
    actions:
        Action names granted. Contains :data:`MANAGE` to grant all actions.
    target_type:
        Type descriptor the target must match, or :data:`ALL`.
    condition:
        Extra restriction evaluated last. :data:`~cancan.conditions.ALWAYS`
        when the rule was registered without one.
    """

    performer_type: Any
    actions: frozenset[str]
    target_type: Any
    condition: Condition = field(default=ALWAYS)

    @property
    def targets_all(self) -> bool:
        return isinstance(self.target_type, str) and self.target_type == ALL

    def matches_action(self, action: str) -> bool:
        """Return True if ``action`` is granted by this rule."""
        return action in self.actions or MANAGE in self.actions

    def describe(self) -> dict[str, object]:
        """Return a plain dict summarising the rule, for display and logs."""
        return {
            "performer": _type_label(self.performer_type),
            "actions": sorted(self.actions),
            "target": _type_label(self.target_type),
            "condition": repr(self.condition),
        }


def _type_label(descriptor: Any) -> str:
    if isinstance(descriptor, str):
        return descriptor
    return getattr(descriptor, "__name__", None) or repr(descriptor)
