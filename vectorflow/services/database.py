"""Document store backed by a hosted PostgreSQL database."""

import json
import logging
from datetime import datetime, timezone
from typing import List, Optional

import asyncpg

from vectorflow.core.config import settings
from vectorflow.core.exceptions import (
    ConfigurationMissingError,
    StoreReadError,
    StoreWriteError,
)
from vectorflow.models.document import StoredDocument

logger = logging.getLogger(__name__)

SQL_SETUP = """-- 1. Enable pgvector extension
create extension if not exists vector;

-- 2. Create documents table
create table if not exists documents (
  id text primary key,
  name text not null,
  content text not null,
  metadata jsonb,
  embedding vector(1536) -- Standard dimension for embeddings
);

-- 3. Enable row level security (optional)
alter table documents enable row level security;
create policy "Allow public access" on documents for all using (true);"""


class DocumentStore:
    """Service for persisting documents and reading them back as context."""

    def __init__(self) -> None:
        """Initialize document store."""
        self.pool: Optional[asyncpg.Pool] = None
        self.url: str = ""
        self.key: str = ""
        self.dimensions = settings.embedding_dimensions

    @property
    def configured(self) -> bool:
        return bool(self.url and self.key)

    async def configure(self, url: str, key: str) -> None:
        """
        Point the store at new credentials.

        No connection is made here; the pool is opened on first use.

        Args:
            url: Database endpoint, used as DSN.
            key: API key, used as the connection password.
        """
        await self.disconnect()
        self.url = url
        self.key = key

    async def disconnect(self) -> None:
        """Close connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None

    async def get_pool(self) -> asyncpg.Pool:
        if not self.configured:
            raise ConfigurationMissingError("Document store is not configured")
        if not self.pool:
            self.pool = await asyncpg.create_pool(
                self.url,
                password=self.key,
                min_size=settings.store_pool_min_size,
                max_size=settings.store_pool_max_size,
            )
        return self.pool

    def _zero_embedding(self) -> str:
        # Placeholder until documents are embedded; never used for similarity
        return "[" + ",".join(["0"] * self.dimensions) + "]"

    async def store_document(self, document_id: str, name: str, content: str) -> None:
        """
        Persist a processed document.

        Args:
            document_id: Client-generated document ID.
            name: Original file name.
            content: Normalized text.

        Raises:
            StoreWriteError: If the insert fails, with the backend code when known.
        """
        metadata = {"uploaded_at": datetime.now(timezone.utc).isoformat()}
        try:
            pool = await self.get_pool()
            async with pool.acquire() as conn:
                await conn.execute(
                    """
                    INSERT INTO documents (id, name, content, metadata, embedding)
                    VALUES ($1, $2, $3, $4::jsonb, $5::text::vector)
                    """,
                    document_id,
                    name,
                    content,
                    json.dumps(metadata),
                    self._zero_embedding(),
                )
        except ConfigurationMissingError:
            raise
        except Exception as e:
            code = getattr(e, "sqlstate", None)
            logger.error(f"Store error code: {code}")
            raise StoreWriteError(
                f"Failed to store document: {str(e)}", code=code) from e

    async def fetch_context(self, limit: Optional[int] = None) -> str:
        """
        Fetch stored content to ground an answer.

        No ranking is applied: up to ``limit`` rows come back in whatever
        order the database returns them.

        Args:
            limit: Maximum number of content blocks.

        Returns:
            Content blocks separated by blank lines.

        Raises:
            StoreReadError: If the query fails.
        """
        limit = limit or settings.context_limit
        try:
            pool = await self.get_pool()
            async with pool.acquire() as conn:
                rows = await conn.fetch(
                    "SELECT content FROM documents LIMIT $1", limit)
        except ConfigurationMissingError:
            raise
        except Exception as e:
            logger.error(f"Store search error: {str(e)}")
            raise StoreReadError(
                f"Failed to search knowledge base: {str(e)}",
                code=getattr(e, "sqlstate", None),
            ) from e

        return "\n\n".join(row["content"] for row in rows)

    async def list_documents(self) -> List[StoredDocument]:
        """
        List persisted documents.

        Returns:
            Stored rows, or an empty list when unconfigured or on failure.
        """
        if not self.configured:
            return []
        try:
            pool = await self.get_pool()
            async with pool.acquire() as conn:
                rows = await conn.fetch("SELECT id, name, content FROM documents")
        except Exception as e:
            logger.warning(f"Failed to list stored documents: {str(e)}")
            return []
        return [
            StoredDocument(id=row["id"], name=row["name"], content=row["content"])
            for row in rows
        ]
