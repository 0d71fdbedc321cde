import os
from typing import Dict, List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    # Server settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Chat completion settings (OpenAI-compatible API)
    openai_api_key: str = os.getenv("OPENAI_API_KEY", "")
    openai_base_url: Optional[str] = os.getenv("OPENAI_BASE_URL") or None
    chat_model: str = os.getenv("CHAT_MODEL", "gpt-3.5-turbo")
    chat_temperature: float = float(os.getenv("CHAT_TEMPERATURE", "0.7"))
    request_timeout: Optional[float] = float(os.getenv("REQUEST_TIMEOUT")) if os.getenv("REQUEST_TIMEOUT") else None

    # Embedding settings
    enable_embeddings: bool = os.getenv("ENABLE_EMBEDDINGS", "false").lower() == "true"
    embedding_provider: str = os.getenv("EMBEDDING_PROVIDER", "huggingface")
    embedding_model: str = os.getenv("EMBEDDING_MODEL", "BAAI/bge-large-en-v1.5")
    # Must match both the embedding model output and the Qdrant collection
    embedding_dimension: int = int(os.getenv("EMBEDDING_DIMENSION", "1024"))
    huggingfacehub_api_token: str = os.getenv("HUGGINGFACEHUB_API_TOKEN", "")

    # Qdrant settings
    enable_vector_store: bool = os.getenv("ENABLE_VECTOR_STORE", "false").lower() == "true"
    qdrant_url: str = os.getenv("QDRANT_URL", "http://localhost:6333")
    qdrant_api_key: Optional[str] = os.getenv("QDRANT_API_KEY") or None
    qdrant_collection: str = os.getenv("QDRANT_COLLECTION", "pdf_documents")

    # Retrieval settings
    retrieval_top_k: int = int(os.getenv("RETRIEVAL_TOP_K", "3"))
    default_document_id: str = os.getenv("DEFAULT_DOCUMENT_ID", "resume")
    include_retrieved_context: bool = os.getenv("INCLUDE_RETRIEVED_CONTEXT", "true").lower() == "true"

    # Prompt override file (YAML or JSON with a "system_prompt" key)
    prompt_config_path: Optional[str] = os.getenv("PROMPT_CONFIG_PATH") or None

    # Development/Debug
    debug_mode: bool = os.getenv("DEBUG_MODE", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def enabled_stages(self) -> Dict[str, bool]:
        """Get which optional pipeline stages are switched on."""
        return {
            "embeddings": self.enable_embeddings,
            "vector_store": self.enable_vector_store,
            "completion": True,
        }

    def log_configuration(self, logger) -> None:
        """Log current configuration for debugging."""
        if self.debug_mode:
            logger.debug("=== SETTINGS CONFIGURATION ===")
            logger.debug(f"Chat model: {self.chat_model} (temperature={self.chat_temperature})")
            logger.debug(f"OpenAI base URL: {self.openai_base_url or 'default'}")
            logger.debug(f"Embeddings: {self.enable_embeddings} ({self.embedding_provider}/{self.embedding_model}, dim={self.embedding_dimension})")
            logger.debug(f"Vector store: {self.enable_vector_store} ({self.qdrant_url}, collection={self.qdrant_collection})")
            logger.debug(f"Retrieval top_k: {self.retrieval_top_k}, default document id: {self.default_document_id}")
            logger.debug(f"Prompt config: {self.prompt_config_path or 'built-in'}")

    # Model config
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", env_ignore_empty=True)


# Create settings instance
settings = Settings()
