"""OpenAI LLM service for content cleanup and answer generation."""

from openai import AsyncOpenAI

from vectorflow.core.config import settings
from vectorflow.core.exceptions import GenerationError, NormalizationError
from vectorflow.models.response import GeneratedAnswer

NO_ANSWER = "I'm sorry, I couldn't generate an answer."


class LLMService:
    """Service for normalizing documents and answering questions."""

    def __init__(self) -> None:
        """Initialize the LLM service."""
        self.client = AsyncOpenAI(api_key=settings.openai_api_key)
        self.normalize_model = settings.normalize_model
        self.answer_model = settings.answer_model

    async def normalize_content(self, name: str, content: str) -> str:
        """
        Clean extracted text before it is stored.

        Args:
            name: Original file name.
            content: Raw extracted text.

        Returns:
            Cleaned text, possibly empty.

        Raises:
            NormalizationError: If the model call fails.
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.normalize_model,
                messages=[
                    {
                        "role": "user",
                        "content": f'Extract all meaningful text and key information from this document named "{name}". '
                        f"Keep it clean and concise for a knowledge base:\n\n{content}",
                    },
                ],
                temperature=settings.normalize_temperature,
            )
            return response.choices[0].message.content or ""
        except Exception as e:
            raise NormalizationError(
                f"Failed to process {name}: {str(e)}") from e

    async def generate_answer(self, question: str, context: str) -> GeneratedAnswer:
        """
        Answer a question from the given context.

        Args:
            question: User question.
            context: Stored content blocks joined together.

        Returns:
            Generated answer. Sources are always empty because the context
            carries no ranking or provenance.

        Raises:
            GenerationError: If the model call fails.
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.answer_model,
                messages=[
                    {
                        "role": "system",
                        "content": "You are a helpful AI assistant. Use the following pieces of retrieved context "
                        "to answer the user's question. If you don't know the answer based on the context, "
                        "say that you don't know.",
                    },
                    {
                        "role": "user",
                        "content": f"Context:\n{context}\n\nQuestion: {question}",
                    },
                ],
                temperature=settings.answer_temperature,
            )
            text = response.choices[0].message.content
        except Exception as e:
            raise GenerationError(
                f"Failed to generate answer: {str(e)}") from e

        return GeneratedAnswer(text=text or NO_ANSWER, sources=[])
