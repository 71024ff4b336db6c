"""Cloudinary search connector."""

from .provider import CloudinaryProvider

__all__ = ["CloudinaryProvider"]
