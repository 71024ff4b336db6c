"""Upstream asset store connectors."""

from .cloudinary import CloudinaryProvider

__all__ = ["CloudinaryProvider"]
