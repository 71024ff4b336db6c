"""HTTP surface for the listing endpoint."""

from .app import create_app, resolve_base_url, run_server

__all__ = ["create_app", "resolve_base_url", "run_server"]
