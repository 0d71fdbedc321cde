# Exports all routers for easy importing
from .query import router as query_router

__all__ = ["query_router"]
