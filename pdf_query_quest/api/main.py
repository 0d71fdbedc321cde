from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contextlib import asynccontextmanager
import logging

from pdf_query_quest import __version__
from pdf_query_quest.api import dependencies
from pdf_query_quest.api.routers import query
from pdf_query_quest.config.settings import settings
from pdf_query_quest.utils.logging import setup_logger

# Define API metadata
API_TITLE = "PDF Query Quest API"
API_DESCRIPTION = """
Ask natural-language questions about the text of a PDF document.

### Pipeline
1. **Validate**: `question` and `resume` are required
2. **Embed** (optional): document and question vectors from a hosted embedding model
3. **Store / retrieve** (optional): upsert the document vector into Qdrant and fetch the nearest neighbours
4. **Complete**: a hosted chat model answers with a JSON object `{"answer": "..."}`
"""
API_VERSION = __version__

# Configure logging
setup_logger("pdf_query_quest", level=settings.log_level, log_file=settings.log_file)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the query pipeline when the server starts."""
    logger.info("🚀 Starting PDF Query Quest API...")
    settings.log_configuration(logger)

    try:
        dependencies.load_all_components()
        logger.info(f"✅ API components loaded successfully! Stages: {settings.enabled_stages()}")
    except Exception as e:
        # Components are rebuilt lazily on the next request
        logger.error(f"❌ Error during API initialization: {str(e)}")

    yield  # Application runs

    logger.info("🛑 Shutting down API service...")


# Create FastAPI app
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(
    query.router,
    prefix="/api",
    tags=["Query"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed bodies with the same error shape as every other failure."""
    logger.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    return {
        "message": API_TITLE,
        "version": API_VERSION,
        "docs": "/docs",
        "query_endpoint": "/api/query-pdf",
    }


# Health check endpoint
@app.get("/health", tags=["Health"])
def health_check():
    """Report enabled stages and, when used, vector store connectivity."""
    stages = settings.enabled_stages()
    components = {}

    if settings.enable_vector_store:
        qdrant_ok = False
        try:
            store = dependencies.get_vector_store()
            qdrant_ok = store is not None and store.ping()
        except Exception as e:
            logger.warning(f"Vector store unavailable: {str(e)}")
        components["qdrant"] = "connected" if qdrant_ok else "error"

    healthy = all(state != "error" for state in components.values())
    return {
        "status": "healthy" if healthy else "degraded",
        "version": API_VERSION,
        "stages": stages,
        "components": components,
    }


def run():
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "pdf_query_quest.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
