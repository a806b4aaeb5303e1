"""Fixture classes for a small web shop, used by the introspection tests."""
