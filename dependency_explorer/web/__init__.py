"""HTTP API for dependency analysis (requires the ``web`` extra)."""

from dependency_explorer.web.app import create_app

__all__ = ["create_app"]
