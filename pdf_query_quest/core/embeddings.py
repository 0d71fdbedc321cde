import logging
from typing import List, Optional

from langchain_core.embeddings import Embeddings

from pdf_query_quest.config.settings import Settings

logger = logging.getLogger(__name__)


class EmbeddingDimensionError(ValueError):
    """Embedding provider returned a vector of the wrong length."""

    def __init__(self, label: str, expected: int, actual: int):
        self.label = label
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Embedding dimension mismatch for {label}: expected {expected}, got {actual}. "
            "Check that EMBEDDING_MODEL and EMBEDDING_DIMENSION match the vector index."
        )


def build_embedding_function(settings: Settings) -> Embeddings:
    """
    Create the hosted embedding client for the configured provider.

    Args:
        settings: Application settings

    Returns:
        A LangChain embeddings implementation
    """
    provider = settings.embedding_provider.lower()

    if provider == "huggingface":
        from langchain_huggingface import HuggingFaceEndpointEmbeddings

        return HuggingFaceEndpointEmbeddings(
            model=settings.embedding_model,
            huggingfacehub_api_token=settings.huggingfacehub_api_token or None,
        )

    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        return OpenAIEmbeddings(
            model=settings.embedding_model,
            dimensions=settings.embedding_dimension,
            api_key=settings.openai_api_key or None,
            base_url=settings.openai_base_url,
        )

    raise ValueError(f"Unsupported embedding provider: {settings.embedding_provider}")


class DocumentEmbedder:
    """
    Embeds the document and the question, checking every vector against the
    dimension the vector index was created with.
    """

    def __init__(self, embedding_function: Embeddings, dimension: int):
        """
        Initialize the embedder.

        Args:
            embedding_function: Embedding client
            dimension: Expected vector length
        """
        if embedding_function is None:
            raise ValueError("Embedding function is required")
        if dimension <= 0:
            raise ValueError(f"Embedding dimension must be positive, got {dimension}")

        self.embedding_function = embedding_function
        self.dimension = dimension

    def embed_document(self, text: str) -> List[float]:
        """Embed the document text."""
        vector = self.embedding_function.embed_documents([text])[0]
        return self._check(vector, "document")

    def embed_question(self, text: str) -> List[float]:
        """Embed the question text."""
        vector = self.embedding_function.embed_query(text)
        return self._check(vector, "question")

    def _check(self, vector: Optional[List[float]], label: str) -> List[float]:
        actual = len(vector) if vector is not None else 0
        if actual != self.dimension:
            logger.error(f"Embedding for {label} has {actual} dimensions, expected {self.dimension}")
            raise EmbeddingDimensionError(label, self.dimension, actual)

        logger.info(f"Embedded {label} ({actual} dimensions)")
        return [float(value) for value in vector]
