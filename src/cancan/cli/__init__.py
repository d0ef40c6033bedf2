"""Command line interface for cancan."""
