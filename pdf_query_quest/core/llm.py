import logging
from typing import Optional

from openai import OpenAI

from pdf_query_quest.config.settings import Settings

logger = logging.getLogger(__name__)


class CompletionError(ValueError):
    """Chat completion response had no usable first choice."""


class ChatCompletionClient:
    """
    Sends a system instruction plus the user's question to a hosted
    chat-completion model and returns the first choice's text.
    """

    def __init__(self, client: OpenAI, model: str, temperature: float):
        self.client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChatCompletionClient":
        kwargs = {"api_key": settings.openai_api_key or None}
        if settings.openai_base_url:
            kwargs["base_url"] = settings.openai_base_url
        if settings.request_timeout is not None:
            kwargs["timeout"] = settings.request_timeout

        return cls(
            client=OpenAI(**kwargs),
            model=settings.chat_model,
            temperature=settings.chat_temperature,
        )

    def complete(self, system_prompt: str, question: str) -> str:
        """
        Run one chat completion.

        Args:
            system_prompt: Filled system instruction
            question: User message, sent verbatim

        Returns:
            First choice content with surrounding whitespace removed
        """
        logger.info(f"Requesting completion from {self.model} (temperature={self.temperature})")

        completion = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": question},
            ],
            temperature=self.temperature,
        )

        content: Optional[str] = None
        if completion.choices:
            message = completion.choices[0].message
            content = message.content if message is not None else None

        if content is None:
            raise CompletionError(f"Completion from {self.model} returned no message content")

        return content.strip()
