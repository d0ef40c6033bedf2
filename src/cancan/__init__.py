"""cancan: attribute-based authorization rules for Python objects.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import cancan
>>> User, Product = cancan.Record.subclass("User"), cancan.Record.subclass("Product")
>>> engine = cancan.CanCan()
>>> engine.allow(User, ["read", "create"], Product)
>>> engine.can(User(), "read", Product())
True
>>> engine.cannot(User(), "destroy", Product())
True
"""
from __future__ import annotations

__version__: str = "0.1.0"

from cancan.conditions import (
    ALWAYS,
    AttributeEquals,
    Condition,
    Predicate,
    build_condition,
)
from cancan.engine import CanCan
from cancan.errors import (
    AuthorizationError,
    CanCanError,
    InvalidConditionError,
    RuleConfigError,
)
from cancan.hooks import (
    default_create_error,
    default_get_attribute,
    default_instance_of,
)
from cancan.loader import RuleLoader, RulesConfig, RuleSpec
from cancan.models import Record
from cancan.rules import ALL, MANAGE, Rule

__all__ = [
    "__version__",
    "CanCan",
    # Rules
    "ALL",
    "MANAGE",
    "Rule",
    # Conditions
    "ALWAYS",
    "AttributeEquals",
    "Condition",
    "Predicate",
    "build_condition",
    # Hooks
    "default_create_error",
    "default_get_attribute",
    "default_instance_of",
    # Errors
    "AuthorizationError",
    "CanCanError",
    "InvalidConditionError",
    "RuleConfigError",
    # Loading
    "RuleLoader",
    "RuleSpec",
    "RulesConfig",
    # Models
    "Record",
]
