"""HTTP API for Trip OS."""
from .routes import router

__all__ = ["router"]
