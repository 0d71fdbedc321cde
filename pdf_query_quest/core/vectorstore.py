import logging
import time
import uuid
from typing import List

from qdrant_client import QdrantClient
from qdrant_client.http import models as rest

from pdf_query_quest.core.embeddings import EmbeddingDimensionError
from pdf_query_quest.models import RetrievedMatch

# Configure logging
logger = logging.getLogger(__name__)


def point_id_for(document_id: str) -> str:
    """
    Map a document identifier to a Qdrant point id.

    Qdrant only accepts unsigned integers or UUIDs, so string identifiers are
    mapped to a stable UUIDv5. The same document id always lands on the same
    point, which makes repeated upserts overwrite.
    """
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"pdf-query-quest/{document_id}"))


class QdrantStore:
    """
    Qdrant vector store holding one point per document, keyed by document id.
    """

    def __init__(
            self,
            client: QdrantClient,
            collection_name: str,
            dimension: int,
    ):
        """
        Initialize the Qdrant vector store.

        Args:
            client: QdrantClient instance
            collection_name: Name of the collection to use
            dimension: Vector size of the collection
        """
        self.client = client
        self.collection_name = collection_name
        self.dimension = dimension

        logger.info(f"Initializing QdrantStore with collection: {collection_name}")

        # Ensure collection exists
        self._ensure_collection()

    def _ensure_collection(self) -> None:
        """
        Ensure the collection exists in Qdrant, creating it if necessary.
        """
        collections = self.client.get_collections().collections
        collection_names = [collection.name for collection in collections]

        if self.collection_name not in collection_names:
            logger.info(f"Creating collection '{self.collection_name}' with {self.dimension} dimensions")

            self.client.create_collection(
                collection_name=self.collection_name,
                vectors_config=rest.VectorParams(
                    size=self.dimension,
                    distance=rest.Distance.COSINE,
                ),
            )
            logger.info(f"Collection '{self.collection_name}' created successfully")
        else:
            logger.info(f"Collection '{self.collection_name}' already exists")
            self._check_collection_dimension()

    def _check_collection_dimension(self) -> None:
        """
        Compare the existing collection's vector size with the configured one.

        Raises:
            EmbeddingDimensionError: If the collection was created with another size
        """
        vectors = self.client.get_collection(self.collection_name).config.params.vectors
        size = getattr(vectors, "size", None)
        if size is None:
            raise ValueError(f"Collection '{self.collection_name}' has no single unnamed vector")

        if size != self.dimension:
            raise EmbeddingDimensionError("collection", self.dimension, size)

    def upsert_document(self, document_id: str, vector: List[float], text: str) -> str:
        """
        Store the document vector, replacing any earlier point with the same id.

        Args:
            document_id: Caller-facing identifier of the document
            vector: Document embedding
            text: Document text kept as payload

        Returns:
            The Qdrant point id
        """
        point_id = point_id_for(document_id)
        logger.info(f"Upserting document '{document_id}' into '{self.collection_name}'")

        self.client.upsert(
            collection_name=self.collection_name,
            points=[
                rest.PointStruct(
                    id=point_id,
                    vector=vector,
                    payload={
                        "document_id": document_id,
                        "text": text,
                        "ingestion_time": time.time(),
                    },
                )
            ],
            wait=True,
        )
        return point_id

    def query(self, vector: List[float], top_k: int = 3) -> List[RetrievedMatch]:
        """
        Find the documents nearest to a vector.

        Args:
            vector: Query embedding
            top_k: Number of neighbours to return

        Returns:
            Matches ordered by descending similarity
        """
        logger.info(f"Querying '{self.collection_name}' for top {top_k} matches")

        response = self.client.query_points(
            collection_name=self.collection_name,
            query=vector,
            limit=top_k,
            with_payload=True,
        )

        matches = []
        for point in response.points:
            payload = point.payload or {}
            matches.append(RetrievedMatch(
                id=str(payload.get("document_id", point.id)),
                score=float(point.score),
                text=payload.get("text", ""),
            ))

        logger.info(f"Query returned {len(matches)} matches")
        return matches

    def ping(self) -> bool:
        """Check that the Qdrant server answers."""
        try:
            self.client.get_collections()
            return True
        except Exception as e:
            logger.warning(f"Qdrant health check failed: {str(e)}")
            return False
