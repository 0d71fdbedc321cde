"""
Create the Qdrant collection used for document vectors.

The collection is sized from EMBEDDING_DIMENSION; an existing collection is left
untouched.

Usage:
    python scripts/create_qdrant_collection.py [--collection NAME] [--dimension N]
"""

import argparse

from qdrant_client import QdrantClient

from pdf_query_quest.config.settings import settings
from pdf_query_quest.core.vectorstore import QdrantStore
from pdf_query_quest.utils.logging import setup_logger


def create_collection(client: QdrantClient, collection_name: str, dimension: int) -> QdrantStore:
    return QdrantStore(client=client, collection_name=collection_name, dimension=dimension)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Create the Qdrant document collection")
    parser.add_argument("--url", default=settings.qdrant_url, help="Qdrant URL")
    parser.add_argument("--collection", default=settings.qdrant_collection, help="Collection name")
    parser.add_argument("--dimension", type=int, default=settings.embedding_dimension, help="Vector size")
    args = parser.parse_args(argv)

    logger = setup_logger("pdf_query_quest", level=settings.log_level)
    client = QdrantClient(url=args.url, api_key=settings.qdrant_api_key)
    create_collection(client, args.collection, args.dimension)
    logger.info(f"Collection '{args.collection}' ready ({args.dimension} dimensions, cosine)")


if __name__ == "__main__":
    main()
