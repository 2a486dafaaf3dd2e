"""Storefront: product catalog view with a locally persisted shopping cart."""

__version__ = "1.0.0"
