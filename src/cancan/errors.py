"""Exception types raised by the authorization engine.

Example
-------
>>> from cancan.errors import AuthorizationError
>>> err = AuthorizationError(performer="alice", action="read", target="doc")
>>> str(err)
'Authorization error'
"""
from __future__ import annotations


class CanCanError(Exception):
    """Base class for all errors raised by this package."""


class InvalidConditionError(CanCanError, TypeError):
    """Raised by ``allow`` when a condition is neither a mapping nor callable.

    Attributes
    ----------
    received_type:
        Name of the Python type that was supplied as the condition.
    """

    def __init__(self, received_type: str) -> None:
        self.received_type = received_type
        super().__init__(
            f"Expected condition to be object or function, got {received_type}"
        )


class AuthorizationError(CanCanError):
    """Raised by ``authorize`` when the performer may not run the action.

    Attributes
    ----------
    performer:
        The object that attempted the action.
    action:
        The action name that was checked.
    target:
        The instance or class the action was aimed at.
    """

    def __init__(
        self,
        performer: object = None,
        action: str | None = None,
        target: object = None,
        message: str = "Authorization error",
    ) -> None:
        self.performer = performer
        self.action = action
        self.target = target
        self.message = message
        super().__init__(message)


class RuleConfigError(CanCanError, ValueError):
    """Raised when a YAML rule file is malformed or references unknown types.

    Attributes
    ----------
    config_path:
        The path to the rule file that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")
