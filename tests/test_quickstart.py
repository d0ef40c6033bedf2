"""Test that the quickstart API works for cancan."""
from __future__ import annotations


def test_quickstart_import() -> None:
    import cancan

    assert cancan.__version__ == "0.1.0"
    assert cancan.CanCan is not None


def test_quickstart_read_product() -> None:
    from cancan import CanCan, Record

    User, Product = Record.subclass("User"), Record.subclass("Product")
    engine = CanCan()
    engine.allow(User, "read", Product)

    assert engine.can(User(), "read", Product()) is True
    assert engine.can(User(), "create", Product()) is False


def test_quickstart_published_products() -> None:
    from cancan import CanCan, Record

    User, Product = Record.subclass("User"), Record.subclass("Product")
    engine = CanCan()
    engine.allow(User, "read", Product, {"published": True})

    assert engine.cannot(User(), "read", Product())
    assert engine.can(User(), "read", Product(published=True))


def test_quickstart_authorize() -> None:
    import pytest

    from cancan import AuthorizationError, CanCan, Record

    User, Product = Record.subclass("User"), Record.subclass("Product")
    engine = CanCan()

    with pytest.raises(AuthorizationError):
        engine.authorize(User(), "read", Product())
