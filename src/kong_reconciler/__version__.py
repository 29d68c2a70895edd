"""Version information for kong_reconciler."""

__version__ = "0.1.0"
