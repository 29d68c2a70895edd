"""Declarative reconciliation of Kong consumers and credentials."""

from kong_reconciler.__version__ import __version__

__all__ = ["__version__"]
