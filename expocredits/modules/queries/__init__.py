"""Read-side query service."""

from .service import QueryService

__all__ = ["QueryService"]
