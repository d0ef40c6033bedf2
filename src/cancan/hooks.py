"""Default implementations of the engine's injectable hooks.

The engine talks to the host object model only through these functions.
Pass replacements to :class:`~cancan.engine.CanCan` to support model layers
whose declared "model classes" are not the classes their instances are made
from (for example descriptors that wrap the real class under ``Instance``).

Example
-------
>>> class User: ...
>>> default_instance_of(User(), User)
True
>>> default_instance_of(User, User)
True
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from cancan.conditions import AttributeGetter
from cancan.errors import AuthorizationError

InstanceOf = Callable[[Any, Any], bool]
ErrorFactory = Callable[[Any, str, Any], Any]


def default_instance_of(value: Any, descriptor: Any) -> bool:
    """Return True if ``value`` is an instance, or a subclass, of ``descriptor``.

    Descriptors that are not classes never match.
    """
    if not isinstance(descriptor, type):
        return False
    if isinstance(value, type):
        return issubclass(value, descriptor)
    return isinstance(value, descriptor)


def default_create_error(performer: Any, action: str, target: Any) -> AuthorizationError:
    """Build the generic :class:`~cancan.errors.AuthorizationError`."""
    return AuthorizationError(performer=performer, action=action, target=target)


def default_get_attribute(target: Any, key: str) -> Any:
    """Read ``key`` from a target; absent keys read as None.

    Mappings and model instances exposing a ``get(key)`` method are read
    through ``get``. Anything else, classes included, through ``getattr``.
    """
    if isinstance(target, Mapping):
        return target.get(key)
    getter = getattr(target, "get", None)
    if not isinstance(target, type) and callable(getter):
        return getter(key)
    return getattr(target, key, None)
