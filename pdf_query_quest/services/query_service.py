"""
QueryService - document question answering pipeline

Stages run in order, each finishing before the next starts:
validate -> embed -> store/retrieve -> complete.
The embed and store/retrieve stages are optional.
"""

import logging
import time
from typing import List, Optional

from pdf_query_quest.core.embeddings import DocumentEmbedder
from pdf_query_quest.core.llm import ChatCompletionClient
from pdf_query_quest.core.prompts import QueryPrompt
from pdf_query_quest.core.vectorstore import QdrantStore
from pdf_query_quest.models import QueryRequest, RetrievedMatch
from pdf_query_quest.utils.logging import preview

logger = logging.getLogger(__name__)


class QueryService:
    """
    Service for answering a question about one document's text.
    """

    def __init__(
            self,
            llm_client: ChatCompletionClient,
            prompt: Optional[QueryPrompt] = None,
            embedder: Optional[DocumentEmbedder] = None,
            vector_store: Optional[QdrantStore] = None,
            top_k: int = 3,
            default_document_id: str = "resume",
            include_retrieved_context: bool = True,
    ):
        if vector_store is not None and embedder is None:
            raise ValueError("The vector store stage requires the embedding stage to be enabled")
        if top_k < 1:
            raise ValueError(f"top_k must be at least 1, got {top_k}")

        self.llm_client = llm_client
        self.prompt = prompt or QueryPrompt()
        self.embedder = embedder
        self.vector_store = vector_store
        self.top_k = top_k
        self.default_document_id = default_document_id
        self.include_retrieved_context = include_retrieved_context

    def answer(self, request: QueryRequest) -> str:
        """
        Run the pipeline for a validated request.

        Args:
            request: Request with non-empty question and resume

        Returns:
            Trimmed text of the first completion choice
        """
        if not request.is_complete():
            raise ValueError("Missing question or resume content")

        start_time = time.time()
        question = request.question
        resume = request.resume
        document_id = request.document_id or self.default_document_id

        logger.info(f"Answering question: {preview(question)} (document: {len(resume)} chars)")

        related: List[RetrievedMatch] = []

        if self.embedder is not None:
            document_vector = self.embedder.embed_document(resume)
            question_vector = self.embedder.embed_question(question)

            if self.vector_store is not None:
                self.vector_store.upsert_document(document_id, document_vector, resume)
                matches = self.vector_store.query(question_vector, top_k=self.top_k)
                related = [match for match in matches if match.id != document_id]
                logger.info(f"Retrieved {len(matches)} matches, {len(related)} from other documents")

        system_prompt = self.prompt.build(
            resume=resume,
            question=question,
            related=related if self.include_retrieved_context else None,
        )

        answer = self.llm_client.complete(system_prompt, question)

        logger.info(f"Generated answer in {time.time() - start_time:.2f}s")
        return answer
