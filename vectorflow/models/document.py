"""Document models for the knowledge base."""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class DocumentStatus(str, Enum):
    """Lifecycle of one upload attempt."""

    PROCESSING = "processing"
    READY = "ready"
    ERROR = "error"


def new_document_id() -> str:
    """Generate an opaque client-side document identifier."""
    return uuid4().hex


class Document(BaseModel):
    """Uploaded document tracked through processing."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_document_id)
    name: str
    content: str = ""
    status: DocumentStatus = DocumentStatus.PROCESSING
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc))


class StoredDocument(BaseModel):
    """Row already persisted in the document store."""

    id: str
    name: str
    content: str
