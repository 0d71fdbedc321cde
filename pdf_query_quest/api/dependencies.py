import logging
import threading

from qdrant_client import QdrantClient

from pdf_query_quest.config.settings import settings
from pdf_query_quest.core.embeddings import DocumentEmbedder, build_embedding_function
from pdf_query_quest.core.llm import ChatCompletionClient
from pdf_query_quest.core.prompts import QueryPrompt
from pdf_query_quest.core.vectorstore import QdrantStore
from pdf_query_quest.services.query_service import QueryService

# Configure logging
logger = logging.getLogger(__name__)

# Global instances
qdrant_client = None
vector_store = None
embedder = None
llm_client = None
query_prompt = None

# Service instances
query_service = None

# Guards first-time construction when requests arrive before startup finished
_init_lock = threading.Lock()


def init_embedder():
    """Initialize the hosted embedding client."""
    global embedder

    if embedder is None and settings.enable_embeddings:
        logger.info(f"🚀 Initializing embeddings ({settings.embedding_provider}: {settings.embedding_model})...")
        embedder = DocumentEmbedder(
            embedding_function=build_embedding_function(settings),
            dimension=settings.embedding_dimension,
        )
        logger.info("✅ Embeddings Initialized!")
    return embedder


def init_vector_store():
    """Initialize Qdrant client and vector store."""
    global qdrant_client, vector_store

    if not settings.enable_vector_store:
        return None

    if qdrant_client is None:
        logger.info("🚀 Initializing Qdrant client...")
        client_kwargs = {"url": settings.qdrant_url, "api_key": settings.qdrant_api_key}
        if settings.request_timeout is not None:
            # qdrant-client takes whole seconds
            client_kwargs["timeout"] = max(1, round(settings.request_timeout))
        qdrant_client = QdrantClient(**client_kwargs)
        logger.info("✅ Qdrant Client Initialized!")

    if vector_store is None:
        logger.info("🚀 Initializing Vector Store...")
        vector_store = QdrantStore(
            client=qdrant_client,
            collection_name=settings.qdrant_collection,
            dimension=settings.embedding_dimension,
        )
        logger.info("✅ Vector Store Initialized!")
    return vector_store


def init_llm_client():
    """Initialize the chat completion client."""
    global llm_client

    if llm_client is None:
        logger.info(f"🚀 Initializing chat completion client ({settings.chat_model})...")
        llm_client = ChatCompletionClient.from_settings(settings)
        logger.info("✅ Chat Completion Client Initialized!")
    return llm_client


def init_prompt():
    """Load the system prompt template."""
    global query_prompt

    if query_prompt is None:
        query_prompt = QueryPrompt.from_config(settings.prompt_config_path)
    return query_prompt


def init_query_service():
    """Initialize the query service and everything it depends on."""
    global query_service

    if query_service is not None:
        return query_service

    with _init_lock:
        if query_service is None:
            if settings.enable_vector_store and not settings.enable_embeddings:
                raise ValueError("ENABLE_VECTOR_STORE requires ENABLE_EMBEDDINGS")

            logger.info("🚀 Initializing Query Service...")
            query_service = QueryService(
                llm_client=init_llm_client(),
                prompt=init_prompt(),
                embedder=init_embedder(),
                vector_store=init_vector_store(),
                top_k=settings.retrieval_top_k,
                default_document_id=settings.default_document_id,
                include_retrieved_context=settings.include_retrieved_context,
            )
            logger.info("✅ Query Service Initialized!")
    return query_service


def load_all_components():
    """Initialize all components at application startup."""
    logger.info("🔄 Initializing API service components...")
    init_query_service()
    logger.info("✅ All components initialized")


def reset_components():
    """Drop all cached components so the next request rebuilds them."""
    global qdrant_client, vector_store, embedder, llm_client, query_prompt, query_service

    qdrant_client = None
    vector_store = None
    embedder = None
    llm_client = None
    query_prompt = None
    query_service = None


# Dependency getters

def get_query_service() -> QueryService:
    """Get the cached query service, building it on first use."""
    return init_query_service()


def get_vector_store():
    """Get the cached vector store, or None when the stage is disabled."""
    if vector_store is not None or not settings.enable_vector_store:
        return vector_store

    with _init_lock:
        return init_vector_store()
