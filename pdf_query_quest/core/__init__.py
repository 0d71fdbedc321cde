"""
Core clients for the query pipeline.

Modules:
- embeddings: hosted embedding models and dimension checks
- vectorstore: Qdrant document storage and nearest-neighbour lookup
- llm: hosted chat completion
- prompts: system prompt template
"""

from .embeddings import DocumentEmbedder, EmbeddingDimensionError, build_embedding_function
from .llm import ChatCompletionClient, CompletionError
from .prompts import QueryPrompt
from .vectorstore import QdrantStore

__all__ = [
    "DocumentEmbedder",
    "EmbeddingDimensionError",
    "build_embedding_function",
    "ChatCompletionClient",
    "CompletionError",
    "QueryPrompt",
    "QdrantStore",
]
