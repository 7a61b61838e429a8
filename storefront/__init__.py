"""Storefront: product catalog and cart backed by a headless CMS."""

__version__ = "1.0.0"
