"""Catalog service: product lookup, atomic stock updates and stock-change events."""

__version__ = "0.1.0"
