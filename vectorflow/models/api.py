"""Pydantic models for the HTTP API."""

from typing import List, Optional

from pydantic import BaseModel, Field

from vectorflow.models.chat import ChatMessage
from vectorflow.models.document import Document, StoredDocument


class ConfigUpdate(BaseModel):
    """Model for saving store credentials."""

    url: str = Field(..., min_length=1)
    key: str = Field(..., min_length=1)


class ConfigStatus(BaseModel):
    configured: bool


class UploadResponse(BaseModel):
    """Model for a finished upload."""

    document: Document
    error: Optional[str] = None


class DocumentListResponse(BaseModel):
    documents: List[Document]


class StoredDocumentListResponse(BaseModel):
    documents: List[StoredDocument]


class ChatRequest(BaseModel):
    question: str


class MessageListResponse(BaseModel):
    messages: List[ChatMessage]
    answering: bool


class ErrorStatus(BaseModel):
    error: Optional[str] = None


class SchemaResponse(BaseModel):
    sql: str
