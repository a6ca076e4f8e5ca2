"""History analysis endpoints."""

from endsong_api.history.router import router

__all__ = ["router"]
