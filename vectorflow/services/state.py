"""Application state shared by the upload and chat orchestrators."""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from vectorflow.models.chat import ChatMessage
from vectorflow.models.document import Document, DocumentStatus

logger = logging.getLogger(__name__)

Registry = Tuple[Document, ...]


@dataclass(frozen=True)
class UploadStarted:
    document: Document


@dataclass(frozen=True)
class UploadSucceeded:
    document_id: str
    content: str


@dataclass(frozen=True)
class UploadFailed:
    document_id: str


UploadEvent = Union[UploadStarted, UploadSucceeded, UploadFailed]


def _patch(registry: Registry, document_id: str, **changes) -> Registry:
    return tuple(
        d.model_copy(update=changes)
        if d.id == document_id and d.status == DocumentStatus.PROCESSING
        else d
        for d in registry
    )


def apply_upload_event(registry: Registry, event: UploadEvent) -> Registry:
    """
    Compute the registry that results from an upload event.

    New uploads are prepended. Completions replace the entry with the same id,
    and only while it is still processing, so a settled entry never changes.

    Args:
        registry: Current documents, most recent first.
        event: Upload lifecycle event.

    Returns:
        New registry; the input is left untouched.
    """
    if isinstance(event, UploadStarted):
        if any(d.id == event.document.id for d in registry):
            return registry
        return (event.document,) + registry
    if isinstance(event, UploadSucceeded):
        return _patch(
            registry, event.document_id,
            content=event.content, status=DocumentStatus.READY,
        )
    if isinstance(event, UploadFailed):
        return _patch(registry, event.document_id, status=DocumentStatus.ERROR)
    raise TypeError(f"Unknown upload event: {event!r}")


Listener = Callable[["AppState"], None]


class AppState:
    """Process-wide state with change notifications."""

    def __init__(self) -> None:
        self.documents: Registry = ()
        self.messages: Tuple[ChatMessage, ...] = ()
        self.error: Optional[str] = None
        self.answering = False
        self.configured = False
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback run after every state change.

        Returns:
            Function that removes the listener.
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error(f"State listener failed: {str(e)}")

    def dispatch(self, event: UploadEvent) -> None:
        self.documents = apply_upload_event(self.documents, event)
        self._notify()

    def find_document(self, document_id: str) -> Optional[Document]:
        return next((d for d in self.documents if d.id == document_id), None)

    def append_message(self, message: ChatMessage) -> None:
        self.messages = self.messages + (message,)
        self._notify()

    def set_error(self, error: Optional[str]) -> None:
        self.error = error
        self._notify()

    def clear_error(self) -> None:
        self.set_error(None)

    def set_answering(self, answering: bool) -> None:
        self.answering = answering
        self._notify()

    def set_configured(self, configured: bool) -> None:
        self.configured = configured
        self._notify()
