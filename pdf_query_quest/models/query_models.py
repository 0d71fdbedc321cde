from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Query Request Models
# ============================================================================

class QueryRequest(BaseModel):
    """Question about a document's extracted text."""
    # Presence is checked by the route so a missing field maps to a 400, not a 422
    question: Optional[str] = None
    resume: Optional[str] = Field(default=None, description="Raw document text extracted from the PDF")
    document_id: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=256,
        description="Vector store key for the document; defaults to the configured fixed identifier",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "question": "What is the candidate's email?",
                "resume": "John Doe\nSoftware Engineer\njohn@example.com",
            }
        }
    )

    def is_complete(self) -> bool:
        return bool(self.question) and bool(self.resume)


# ============================================================================
# Query Response Models
# ============================================================================

class QueryResponse(BaseModel):
    """Answer text exactly as returned by the chat model, trimmed."""
    answer: str


class ErrorResponse(BaseModel):
    error: str


class RetrievedMatch(BaseModel):
    """Nearest neighbour returned by the vector store."""
    id: str
    score: float
    text: str = ""
