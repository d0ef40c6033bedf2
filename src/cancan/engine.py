"""Authorization engine: a rule registry plus the queries that resolve it.

Rules are added with :meth:`CanCan.allow` and checked with
:meth:`CanCan.can`, :meth:`CanCan.cannot` and :meth:`CanCan.authorize`.
Rules only ever grant; a query is permitted when any single rule matches,
regardless of registration order.

Example
-------
>>> from cancan import CanCan, Record
>>> User, Product = Record.subclass("User"), Record.subclass("Product")
>>> engine = CanCan()
>>> engine.allow(User, "read", Product, {"published": True})
>>> engine.can(User(), "read", Product(published=True))
True
>>> engine.can(User(), "read", Product())
False

The query methods are ordinary bound methods, so they can be handed out on
their own::

    can, authorize = engine.can, engine.authorize
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from cancan.conditions import AttributeGetter, build_condition
from cancan.hooks import (
    ErrorFactory,
    InstanceOf,
    default_create_error,
    default_get_attribute,
    default_instance_of,
)
from cancan.rules import Rule, normalize_actions

logger = logging.getLogger(__name__)


class CanCan:
    """Holds permission rules and answers "can this performer do that?".

    Each instance owns an independent registry. Registration is expected to
    happen up front; calling :meth:`allow` from one thread while another is
    querying must be serialized by the caller.

    Parameters
    ----------
    instance_of:
        ``(value, descriptor) -> bool`` type-identity test used for both the
        performer and the target. Defaults to
        :func:`~cancan.hooks.default_instance_of`.
    create_error:
        ``(performer, action, target) -> BaseException`` used by
        :meth:`authorize`. Defaults to
        :func:`~cancan.hooks.default_create_error`.
    get_attribute:
        ``(target, key) -> value`` used by attribute-map conditions. Defaults
        to :func:`~cancan.hooks.default_get_attribute`.
    """

    def __init__(
        self,
        instance_of: InstanceOf | None = None,
        create_error: ErrorFactory | None = None,
        get_attribute: AttributeGetter | None = None,
    ) -> None:
        self._rules: list[Rule] = []
        self._instance_of: InstanceOf = instance_of or default_instance_of
        self._create_error: ErrorFactory = create_error or default_create_error
        self._get_attribute: AttributeGetter = get_attribute or default_get_attribute

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def allow(
        self,
        performer_type: Any,
        actions: str | Iterable[str],
        target_type: Any,
        condition: object = None,
    ) -> None:
        """Grant ``actions`` on ``target_type`` to performers of ``performer_type``.

        Parameters
        ----------
        performer_type:
            Type descriptor the performer must match.
        actions:
            One action name or a non-empty iterable of names. ``"manage"``
            grants every action.
        target_type:
            Type descriptor the target must match, or ``"all"``.
        condition:
            ``None``, a mapping of required target attribute values, or a
            ``(performer, target, options)`` predicate.

        Raises
        ------
        InvalidConditionError
            If ``condition`` is of any other type.
        """
        rule = Rule(
            performer_type=performer_type,
            actions=normalize_actions(actions),
            target_type=target_type,
            condition=build_condition(condition),
        )
        self._rules.append(rule)
        logger.debug("Registered rule #%d: %s", len(self._rules), rule.describe())

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Snapshot of the registered rules in registration order."""
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def can(
        self,
        performer: Any,
        action: str,
        target: Any,
        options: Mapping[str, Any] | None = None,
    ) -> bool:
        """Return True if any registered rule permits the action.

        Parameters
        ----------
        performer:
            The object attempting the action.
        action:
            Action name.
        target:
            An instance, or a class to check the action against the type
            itself.
        options:
            Extra context passed to predicate conditions only. Defaults to an
            empty dict.
        """
        effective_options: Mapping[str, Any] = options if options is not None else {}

        for rule in self._rules:
            if not rule.matches_action(action):
                continue
            if not rule.targets_all and not self._is_a(target, rule.target_type):
                continue
            if not self._is_a(performer, rule.performer_type):
                continue
            if rule.condition.evaluate(
                performer, target, effective_options, self._get_attribute
            ):
                logger.debug(
                    "Permission ALLOW: action=%s performer=%r target=%r",
                    action,
                    performer,
                    target,
                )
                return True

        logger.debug(
            "Permission DENY: action=%s performer=%r target=%r",
            action,
            performer,
            target,
        )
        return False

    def cannot(
        self,
        performer: Any,
        action: str,
        target: Any,
        options: Mapping[str, Any] | None = None,
    ) -> bool:
        """Return the negation of :meth:`can` for the same arguments."""
        return not self.can(performer, action, target, options)

    def authorize(
        self,
        performer: Any,
        action: str,
        target: Any,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        """Raise unless :meth:`can` permits the action.

        Raises
        ------
        AuthorizationError
            With the default error factory, when the action is not permitted.
        BaseException
            Whatever a custom ``create_error`` returned, unmodified. An
            exception class is raised as Python raises classes.
        TypeError
            If a custom ``create_error`` returned something that cannot be
            raised.
        """
        if self.can(performer, action, target, options):
            return

        error = self._create_error(performer, action, target)
        logger.warning(
            "Authorization denied: action=%s performer=%r target=%r",
            action,
            performer,
            target,
        )
        if not _is_raisable(error):
            raise TypeError(
                f"create_error must return an exception, got {type(error).__name__}"
            )
        raise error

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _is_a(self, value: Any, descriptor: Any) -> bool:
        return value is descriptor or bool(self._instance_of(value, descriptor))

    def __repr__(self) -> str:
        return f"CanCan(rules={len(self._rules)})"


def _is_raisable(error: object) -> bool:
    if isinstance(error, type):
        return issubclass(error, BaseException)
    return isinstance(error, BaseException)
