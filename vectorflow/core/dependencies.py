"""Dependency injection for services."""

import logging

from vectorflow.services.chat import ChatOrchestrator
from vectorflow.services.credentials import CredentialStore
from vectorflow.services.database import DocumentStore
from vectorflow.services.llm import LLMService
from vectorflow.services.state import AppState
from vectorflow.services.upload import UploadOrchestrator

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Container for service instances and the state they share."""

    def __init__(self) -> None:
        """Initialize service container."""
        self.state = AppState()
        self.credentials = CredentialStore()
        self.store = DocumentStore()
        self.llm_service = LLMService()
        self.uploads = UploadOrchestrator(
            self.state, normalizer=self.llm_service, store=self.store)
        self.chat = ChatOrchestrator(
            self.state, store=self.store, generator=self.llm_service)

    async def initialize(self) -> None:
        """Load saved credentials and configure the store if both are present."""
        url, key = self.credentials.load()
        if url and key:
            await self.store.configure(url, key)
            self.state.set_configured(True)
            logger.info("Loaded saved store credentials")
        else:
            logger.info("No saved store credentials; data operations disabled")

    async def save_config(self, url: str, key: str) -> None:
        """Persist credentials and point the store at them."""
        self.credentials.save(url, key)
        await self.store.configure(url, key)
        self.state.set_configured(self.store.configured)
        self.state.clear_error()

    async def shutdown(self) -> None:
        """Shutdown all services."""
        await self.store.disconnect()


services = ServiceContainer()
