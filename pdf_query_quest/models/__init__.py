"""
Request and response models for the query API.
"""

from .query_models import (
    QueryRequest,
    QueryResponse,
    ErrorResponse,
    RetrievedMatch,
)

__all__ = [
    "QueryRequest",
    "QueryResponse",
    "ErrorResponse",
    "RetrievedMatch",
]
