"""Upload orchestration: extraction, cleanup and persistence of one file."""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional, Protocol

from vectorflow.core.exceptions import StoreError, is_schema_missing
from vectorflow.models.document import Document
from vectorflow.monitoring.metrics import (
    upload_duration_seconds,
    upload_errors_total,
    uploads_total,
)
from vectorflow.services.extraction import TextExtractor
from vectorflow.services.state import (
    AppState,
    UploadFailed,
    UploadStarted,
    UploadSucceeded,
)

logger = logging.getLogger(__name__)

SCHEMA_MISSING_MESSAGE = (
    "Table 'documents' missing in the store. Run the setup SQL (GET /schema)."
)
GENERIC_UPLOAD_ERROR = "Failed to upload."


class UploadSource(Protocol):
    """A file handed over by the user; FastAPI's UploadFile satisfies it."""

    filename: Optional[str]
    content_type: Optional[str]

    async def read(self) -> bytes: ...


class ContentNormalizer(Protocol):
    async def normalize_content(self, name: str, content: str) -> str: ...


class DocumentWriter(Protocol):
    async def store_document(self, document_id: str, name: str, content: str) -> None: ...


@dataclass(frozen=True)
class UploadResult:
    """Outcome of one upload: the settled document, plus a message on failure."""

    document: Document
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def describe_upload_error(error: BaseException) -> str:
    """
    Turn an upload failure into the message shown to the user.

    Args:
        error: Exception raised by any upload step.

    Returns:
        Setup instructions for a missing table, otherwise the raw message.
    """
    if isinstance(error, StoreError) and is_schema_missing(error):
        return SCHEMA_MISSING_MESSAGE
    return str(error) or GENERIC_UPLOAD_ERROR


class UploadOrchestrator:
    """Drives files through extraction, normalization and storage."""

    def __init__(
        self,
        state: AppState,
        normalizer: ContentNormalizer,
        store: DocumentWriter,
        extractor: Optional[TextExtractor] = None,
    ) -> None:
        """
        Initialize upload orchestrator.

        Args:
            state: Shared application state.
            normalizer: Language-model cleanup service.
            store: Document store.
            extractor: Text extractor.
        """
        self.state = state
        self.normalizer = normalizer
        self.store = store
        self.extractor = extractor or TextExtractor()

    def start(self, source: UploadSource) -> Optional["asyncio.Task[UploadResult]"]:
        """
        Register a new document and schedule its processing.

        The document is in the registry with status ``processing`` when this
        returns. Must be called from a running event loop.

        Args:
            source: File to upload.

        Returns:
            Task resolving to the upload result, or None when unconfigured.
        """
        if not self.state.configured:
            logger.warning("Upload ignored: document store is not configured")
            return None

        document = Document(name=source.filename or "untitled")
        self.state.clear_error()
        self.state.dispatch(UploadStarted(document))
        uploads_total.inc()
        return asyncio.create_task(self._process(document, source))

    async def upload(self, source: UploadSource) -> Optional[UploadResult]:
        """Start an upload and wait for it to settle."""
        task = self.start(source)
        if task is None:
            return None
        return await task

    async def _process(self, document: Document, source: UploadSource) -> UploadResult:
        start_time = time.time()
        try:
            content = await source.read()
            text = await self.extractor.extract(
                content, document.name, source.content_type)
            cleaned = await self.normalizer.normalize_content(document.name, text)
            await self.store.store_document(document.id, document.name, cleaned)
        except asyncio.CancelledError:
            logger.warning(f"Processing cancelled for {document.name}")
            upload_errors_total.labels(kind="cancelled").inc()
            self.state.dispatch(UploadFailed(document.id))
            raise
        except Exception as e:
            logger.error(f"Processing failed for {document.name}: {str(e)}")
            message = describe_upload_error(e)
            kind = "schema_missing" if message == SCHEMA_MISSING_MESSAGE else type(e).__name__
            upload_errors_total.labels(kind=kind).inc()
            self.state.set_error(message)
            self.state.dispatch(UploadFailed(document.id))
            return UploadResult(self.state.find_document(document.id) or document, error=message)
        finally:
            upload_duration_seconds.observe(time.time() - start_time)

        self.state.dispatch(UploadSucceeded(document.id, cleaned))
        logger.info(f"Stored document {document.id} ({document.name})")
        return UploadResult(self.state.find_document(document.id) or document)
