"""VectorFlow service: document upload and knowledge-base chat endpoints."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from vectorflow.api.health import check_all_dependencies
from vectorflow.core.config import settings
from vectorflow.core.dependencies import services
from vectorflow.models.api import (
    ChatRequest,
    ConfigStatus,
    ConfigUpdate,
    DocumentListResponse,
    ErrorStatus,
    MessageListResponse,
    SchemaResponse,
    StoredDocumentListResponse,
    UploadResponse,
)
from vectorflow.models.chat import ChatMessage
from vectorflow.services.database import SQL_SETUP

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def log_state_change(state) -> None:
    logger.debug(
        f"State changed: {len(state.documents)} documents, "
        f"{len(state.messages)} messages, answering={state.answering}"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    unsubscribe = services.state.subscribe(log_state_change)
    await services.initialize()
    logger.info("VectorFlow service started")
    yield
    unsubscribe()
    await services.shutdown()
    logger.info("VectorFlow service stopped")


app = FastAPI(title="VectorFlow", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/config", response_model=ConfigStatus)
async def get_config() -> ConfigStatus:
    return ConfigStatus(configured=services.state.configured)


@app.put("/config", response_model=ConfigStatus)
async def save_config(request: ConfigUpdate) -> ConfigStatus:
    """
    Save store credentials and enable data operations.

    Args:
        request: Endpoint URL and API key.

    Returns:
        Configuration status.
    """
    await services.save_config(request.url, request.key)
    logger.info("Store credentials saved")
    return ConfigStatus(configured=services.state.configured)


@app.get("/schema", response_model=SchemaResponse)
async def get_schema() -> SchemaResponse:
    """SQL to run once in the database to create the documents table."""
    return SchemaResponse(sql=SQL_SETUP)


@app.post("/documents", response_model=UploadResponse)
async def upload_document(file: UploadFile = File(...)) -> UploadResponse:
    """
    Upload one file and wait until it is stored or has failed.

    Args:
        file: PDF, Word, text or Markdown file.

    Returns:
        The settled document and the error message, if any.
    """
    result = await services.uploads.upload(file)
    if result is None:
        raise HTTPException(status_code=503, detail="Document store is not configured")
    return UploadResponse(document=result.document, error=result.error)


@app.get("/documents", response_model=DocumentListResponse)
async def list_documents() -> DocumentListResponse:
    return DocumentListResponse(documents=list(services.state.documents))


@app.get("/documents/stored", response_model=StoredDocumentListResponse)
async def list_stored_documents() -> StoredDocumentListResponse:
    documents = await services.store.list_documents()
    return StoredDocumentListResponse(documents=documents)


@app.post("/chat", response_model=ChatMessage)
async def chat(request: ChatRequest) -> ChatMessage:
    """
    Ask a question against the stored documents.

    Args:
        request: Chat request.

    Returns:
        The assistant's reply, which carries an error text if answering failed.
    """
    reply = await services.chat.ask(request.question)
    if reply is None:
        raise HTTPException(status_code=409, detail="Question not accepted")
    return reply


@app.get("/messages", response_model=MessageListResponse)
async def list_messages() -> MessageListResponse:
    return MessageListResponse(
        messages=list(services.state.messages),
        answering=services.state.answering,
    )


@app.get("/error", response_model=ErrorStatus)
async def get_error() -> ErrorStatus:
    return ErrorStatus(error=services.state.error)


@app.delete("/error", response_model=ErrorStatus)
async def dismiss_error() -> ErrorStatus:
    services.state.clear_error()
    return ErrorStatus(error=None)


@app.get("/health")
async def health() -> dict:
    """
    Health check endpoint with dependency verification.

    Returns:
        Health status with service dependencies.
    """
    result = await check_all_dependencies(services.store, services.llm_service)
    return {"service": settings.service_name, **result}


@app.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.service_port)
