"""Resolve media page URLs into direct download links through a chain of upstream providers."""

__version__ = "1.0.0"
