import logging
import traceback

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from pdf_query_quest.api import dependencies
from pdf_query_quest.models import QueryRequest, QueryResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_FIELDS_MESSAGE = "Missing question or resume content"
GENERIC_ERROR_MESSAGE = "An error occurred while processing your request."


@router.post(
    "/query-pdf",
    response_model=QueryResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
def query_pdf(payload: QueryRequest):
    """
    Answer a question about a document's text.

    The answer is the chat model's trimmed output, passed through without
    parsing. Upstream failures are logged and reported as a generic error.
    """
    if not payload.is_complete():
        logger.warning("Rejected query: missing question or resume")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": MISSING_FIELDS_MESSAGE},
        )

    try:
        query_service = dependencies.get_query_service()
        answer = query_service.answer(payload)
        return QueryResponse(answer=answer)
    except Exception as e:
        logger.error(f"Error during API request: {str(e)}")
        logger.error(f"Stack trace: {traceback.format_exc()}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": GENERIC_ERROR_MESSAGE},
        )
