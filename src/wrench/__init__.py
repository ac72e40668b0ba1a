"""WRENCH multi-tenant training platform backend."""

__version__ = "1.0.0"
