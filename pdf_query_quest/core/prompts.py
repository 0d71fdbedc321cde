"""
System prompt for document question answering.

The template is plain configuration: named ``{resume}`` and ``{question}``
placeholders, literal braces doubled. An optional ``{context}`` placeholder
marks where related excerpts go; it sits ahead of the output-format
instructions in the built-in template. The template can be replaced through a
YAML or JSON file holding a ``system_prompt`` key.
"""

import logging
from typing import List, Optional

from langchain_core.prompts import PromptTemplate

from pdf_query_quest.config.utils import read_config
from pdf_query_quest.models import RetrievedMatch

logger = logging.getLogger(__name__)

REQUIRED_VARIABLES = {"resume", "question"}
OPTIONAL_VARIABLES = {"context"}

DEFAULT_SYSTEM_PROMPT = """
You are an assistant that reads the content of a PDF document and answers questions based on the text provided. Your task is to provide accurate answers based only on the content of the document.

Document: {resume}

Question: {question}
{context}
Return the answer in the following JSON format:
{{
    "answer": "str"
}}
If the question cannot be answered based on the document, provide a response indicating that no relevant information was found in the document.

Respond with JSON only. Never include any extra characters, non-whitespace characters, comments, markdown or explanations.
"""

RELATED_CONTEXT_HEADER = (
    "Related excerpts from other submitted documents. "
    "Use them only where they clarify the document above:"
)


class QueryPrompt:
    """Fills the system instruction sent ahead of the user's question."""

    def __init__(self, template: str = DEFAULT_SYSTEM_PROMPT):
        self.template = PromptTemplate.from_template(template)

        variables = set(self.template.input_variables)
        missing = REQUIRED_VARIABLES - variables
        extra = variables - REQUIRED_VARIABLES - OPTIONAL_VARIABLES
        if missing:
            raise ValueError(f"System prompt is missing placeholders: {sorted(missing)}")
        if extra:
            raise ValueError(f"System prompt has unknown placeholders: {sorted(extra)}")

        self.has_context_slot = "context" in variables

    @classmethod
    def from_config(cls, config_path: Optional[str] = None) -> "QueryPrompt":
        """Load the template override from a config file, falling back to the built-in one."""
        if not config_path:
            return cls()

        config = read_config(config_path)
        template = config.get("system_prompt")
        if not template:
            logger.warning(f"No system_prompt in {config_path}, using the built-in prompt")
            return cls()

        logger.info(f"Loaded system prompt from {config_path}")
        return cls(template)

    def build(self, resume: str, question: str, related: Optional[List[RetrievedMatch]] = None) -> str:
        """
        Fill the template.

        Related excerpts go into the ``{context}`` slot. Templates without one
        get them appended after the filled text.

        Args:
            resume: Document text
            question: User's question
            related: Retrieved neighbours to add as extra context

        Returns:
            The system message content
        """
        context = ""
        if related:
            excerpts = "\n\n".join(f"[{match.id}]\n{match.text}" for match in related if match.text)
            if excerpts:
                context = f"\n{RELATED_CONTEXT_HEADER}\n\n{excerpts}\n"

        if self.has_context_slot:
            return self.template.format(resume=resume, question=question, context=context)

        return self.template.format(resume=resume, question=question) + context
