"""
Pytest configuration for the PDF Query Quest service.

This module provides fixtures and configurations used by the test suite.
"""

import os
import sys
import pytest
from types import SimpleNamespace
from typing import Generator, List, Optional
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from langchain_core.embeddings import Embeddings
from qdrant_client import QdrantClient

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pdf_query_quest.api import dependencies
from pdf_query_quest.api.main import app
from pdf_query_quest.core.embeddings import DocumentEmbedder
from pdf_query_quest.core.llm import ChatCompletionClient
from pdf_query_quest.core.vectorstore import QdrantStore

TEST_DIMENSION = 8


class CharacterEmbeddings(Embeddings):
    """
    Deterministic embeddings built from character counts, so that texts
    sharing words end up close together.
    """

    def __init__(self, size: int = TEST_DIMENSION):
        self.size = size
        self.documents_calls = []
        self.query_calls = []

    def _vector(self, text: str) -> List[float]:
        vector = [1.0] * self.size
        for char in text.lower():
            if char.isalnum():
                vector[ord(char) % self.size] += 1.0
        return vector

    def embed_documents(self, texts: List[str]) -> List[List[float]]:
        self.documents_calls.append(list(texts))
        return [self._vector(text) for text in texts]

    def embed_query(self, text: str) -> List[float]:
        self.query_calls.append(text)
        return self._vector(text)


def make_completion(content: Optional[str]):
    """Build an object shaped like an OpenAI chat completion response."""
    message = SimpleNamespace(role="assistant", content=content)
    return SimpleNamespace(choices=[SimpleNamespace(index=0, message=message)])


@pytest.fixture
def test_client() -> Generator[TestClient, None, None]:
    """
    Create a FastAPI test client.

    Components are reset around each test so no client built by one test
    leaks into the next.
    """
    dependencies.reset_components()
    client = TestClient(app)
    yield client
    dependencies.reset_components()


@pytest.fixture
def sample_resume() -> str:
    return (
        "John Doe\n"
        "Senior Software Engineer\n"
        "Email: john@example.com\n"
        "Experience: 8 years building payment systems in Python and Go.\n"
        "Education: BSc Computer Science, University of Somewhere."
    )


@pytest.fixture
def sample_question() -> str:
    return "What is the candidate's email?"


@pytest.fixture
def completion_factory():
    return make_completion


@pytest.fixture
def openai_client() -> MagicMock:
    """
    Mock OpenAI client whose chat completion returns a padded JSON answer.
    """
    client = MagicMock()
    client.chat.completions.create.return_value = make_completion(
        '\n  {"answer": "john@example.com"}  \n'
    )
    return client


@pytest.fixture
def llm_client(openai_client: MagicMock) -> ChatCompletionClient:
    return ChatCompletionClient(client=openai_client, model="gpt-3.5-turbo", temperature=0.7)


@pytest.fixture
def embedding_function() -> CharacterEmbeddings:
    return CharacterEmbeddings()


@pytest.fixture
def embedder(embedding_function: CharacterEmbeddings) -> DocumentEmbedder:
    return DocumentEmbedder(embedding_function=embedding_function, dimension=TEST_DIMENSION)


@pytest.fixture
def mock_qdrant_client() -> QdrantClient:
    """
    Create a Qdrant client with an in-memory database for testing.
    """
    return QdrantClient(location=":memory:")


@pytest.fixture
def vector_store(mock_qdrant_client: QdrantClient) -> QdrantStore:
    return QdrantStore(
        client=mock_qdrant_client,
        collection_name="test_collection",
        dimension=TEST_DIMENSION,
    )
