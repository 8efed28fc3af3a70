"""Response models for language-model outputs."""

from typing import List

from pydantic import BaseModel, Field


class GeneratedAnswer(BaseModel):
    """Answer produced from a question and its context."""

    text: str = Field(description="The answer to the user's question")
    sources: List[str] = Field(
        default_factory=list, description="Citations backing the answer"
    )
