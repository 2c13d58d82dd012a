"""HTTP API package."""

from genoquery.api.server import create_app, router

__all__ = ["create_app", "router"]
