"""Errors raised while reading gymdesk settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a ``GYMDESK_*`` setting holds a value that cannot be used."""
