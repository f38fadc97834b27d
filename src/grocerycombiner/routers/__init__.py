"""API routers for the grocery combiner service."""

from grocerycombiner.routers.grocery import router as grocery_router

__all__ = ["grocery_router"]
