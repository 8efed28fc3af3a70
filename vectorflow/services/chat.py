"""Chat orchestration: one question through context fetch and answer generation."""

import logging
import time
from typing import Optional, Protocol

from vectorflow.models.chat import ChatMessage, Role
from vectorflow.models.response import GeneratedAnswer
from vectorflow.monitoring.metrics import (
    answer_duration_seconds,
    question_errors_total,
    questions_total,
)
from vectorflow.services.state import AppState

logger = logging.getLogger(__name__)

KNOWLEDGE_UNAVAILABLE = (
    "Could not retrieve knowledge. Ensure the 'documents' table is created."
)


class ContextReader(Protocol):
    async def fetch_context(self, limit: Optional[int] = None) -> str: ...


class AnswerGenerator(Protocol):
    async def generate_answer(self, question: str, context: str) -> GeneratedAnswer: ...


class ChatOrchestrator:
    """Answers questions one at a time, keeping the conversation log."""

    def __init__(
        self,
        state: AppState,
        store: ContextReader,
        generator: AnswerGenerator,
    ) -> None:
        self.state = state
        self.store = store
        self.generator = generator

    def accepts(self, question: str) -> bool:
        """Whether a question would be taken right now."""
        return (
            self.state.configured
            and not self.state.answering
            and bool(question.strip())
        )

    async def ask(self, question: str) -> Optional[ChatMessage]:
        """
        Answer one question.

        Empty questions, questions asked while another is being answered and
        questions asked without a configured store are ignored. Otherwise the
        log gains the user message and exactly one assistant message.

        Args:
            question: Question text.

        Returns:
            The assistant message, or None if the question was ignored.
        """
        if not self.accepts(question):
            return None

        self.state.append_message(ChatMessage(role=Role.USER, content=question))
        self.state.set_answering(True)
        questions_total.inc()
        start_time = time.time()

        try:
            context = await self.store.fetch_context()
            answer = await self.generator.generate_answer(question, context)
            reply = ChatMessage(
                role=Role.ASSISTANT, content=answer.text, sources=answer.sources)
        except Exception as e:
            logger.error(f"Answer failed: {str(e)}")
            question_errors_total.inc()
            reply = ChatMessage(
                role=Role.ASSISTANT,
                content=f"Error: {str(e) or KNOWLEDGE_UNAVAILABLE}",
            )
        finally:
            answer_duration_seconds.observe(time.time() - start_time)

        try:
            self.state.append_message(reply)
        finally:
            self.state.set_answering(False)
        return reply
