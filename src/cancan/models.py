"""Minimal attribute-bag model for hosts without a model layer of their own.

Example
-------
>>> Product = Record.subclass("Product")
>>> product = Product(published=True)
>>> product.get("published"), product.published
(True, True)
>>> product.get("price") is None
True
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class Record:
    """An object whose attributes are backed by a plain dict.

    Fields named ``get``, ``attrs`` or ``subclass`` are shadowed by the
    methods of the same name for attribute access; read them with
    ``record.get(name)``, which is also how the engine reads conditions.

    Parameters
    ----------
    attrs:
        Optional mapping of initial attributes. Positional only, so an
        ``attrs`` keyword is stored as a field.
    **kwargs:
        Additional attributes; they override keys in ``attrs``.
    """

    def __init__(self, attrs: Mapping[str, Any] | None = None, /, **kwargs: Any) -> None:
        data: dict[str, Any] = dict(attrs or {})
        data.update(kwargs)
        object.__setattr__(self, "_attrs", data)

    @classmethod
    def subclass(cls, name: str) -> type[Record]:
        """Create a new model type called ``name`` deriving from this class."""
        return type(name, (cls,), {"__module__": cls.__module__})

    def get(self, key: str, default: Any = None) -> Any:
        """Return the attribute ``key``, or ``default`` if it is not set."""
        return self._attrs.get(key, default)

    @property
    def attrs(self) -> dict[str, Any]:
        """Copy of all attributes."""
        return dict(self._attrs)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        attrs = self.__dict__.get("_attrs", {})
        if name in attrs:
            return attrs[name]
        raise AttributeError(f"{type(self).__name__!r} record has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        self._attrs[name] = value

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._attrs == other._attrs  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._attrs.items())
        return f"{type(self).__name__}({fields})"
