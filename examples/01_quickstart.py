#!/usr/bin/env python3
"""Example: Quickstart — cancan

Minimal working example: register rules for a small shop, check a few
permissions, and authorize an action.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install cancan
"""
from __future__ import annotations

import cancan


class User(cancan.Record):
    pass


class Product(cancan.Record):
    pass


def main() -> None:
    print(f"cancan version: {cancan.__version__}")

    # Step 1: Register rules
    engine = cancan.CanCan()
    engine.allow(User, "read", Product, {"published": True})
    engine.allow(User, ["update", "destroy"], Product, lambda user, product, options: (
        product.get("owner") == user.get("id")
    ))
    engine.allow(User, "manage", "all", lambda user, target, options: user.get("admin"))
    print(f"Engine ready: {len(engine)} rules registered")

    # Step 2: Check permissions
    alice = User(id="alice")
    admin = User(id="root", admin=True)
    queries = [
        (alice, "read", Product(published=True)),
        (alice, "read", Product(published=False)),
        (alice, "update", Product(owner="alice")),
        (alice, "update", Product(owner="bob")),
        (admin, "destroy", Product(owner="bob")),
        (alice, "create", Product),
    ]

    print("\nPermission checks:")
    for performer, action, target in queries:
        icon = "ALLOW" if engine.can(performer, action, target) else "DENY"
        print(f"  [{icon}] {performer!r} {action} {target!r}")

    # Step 3: Authorize
    try:
        engine.authorize(alice, "destroy", Product(owner="bob"))
    except cancan.AuthorizationError as exc:
        print(f"\nauthorize() raised: {exc} (action={exc.action})")


if __name__ == "__main__":
    main()
