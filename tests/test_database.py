import json
from contextlib import asynccontextmanager

import pytest

from vectorflow.core.exceptions import (
    ConfigurationMissingError,
    StoreReadError,
    StoreWriteError,
    is_schema_missing,
)
from vectorflow.services.database import SQL_SETUP, DocumentStore


class UndefinedTable(Exception):
    sqlstate = "42P01"


class FakeConnection:
    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.executed = []

    async def execute(self, query, *args):
        if self.error:
            raise self.error
        self.executed.append((query, args))

    async def fetch(self, query, *args):
        if self.error:
            raise self.error
        self.executed.append((query, args))
        return self.rows


class FakePool:
    def __init__(self, conn):
        self.conn = conn
        self.closed = False

    @asynccontextmanager
    async def acquire(self):
        yield self.conn

    async def close(self):
        self.closed = True


def connected_store(conn):
    store = DocumentStore()
    store.url = "postgresql://db.example.com/postgres"
    store.key = "secret"
    store.pool = FakePool(conn)
    return store


@pytest.mark.asyncio
async def test_store_document_inserts_zero_embedding():
    conn = FakeConnection()
    store = connected_store(conn)

    await store.store_document("doc-1", "notes.txt", "clean text")

    query, args = conn.executed[0]
    assert "INSERT INTO documents" in query
    assert args[:3] == ("doc-1", "notes.txt", "clean text")
    assert "uploaded_at" in json.loads(args[3])
    vector = json.loads(args[4])
    assert len(vector) == store.dimensions
    assert set(vector) == {0}


@pytest.mark.asyncio
async def test_store_document_keeps_backend_code():
    store = connected_store(FakeConnection(error=UndefinedTable('relation "documents" does not exist')))

    with pytest.raises(StoreWriteError) as exc_info:
        await store.store_document("doc-1", "notes.txt", "text")

    assert exc_info.value.code == "42P01"
    assert is_schema_missing(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_context_joins_rows_with_blank_lines():
    conn = FakeConnection(rows=[{"content": "first"}, {"content": "second"}])
    store = connected_store(conn)

    context = await store.fetch_context()

    assert context == "first\n\nsecond"
    assert conn.executed[0][1] == (10,)


@pytest.mark.asyncio
async def test_fetch_context_with_no_rows_is_empty():
    assert await connected_store(FakeConnection()).fetch_context() == ""


@pytest.mark.asyncio
async def test_fetch_context_failure():
    store = connected_store(FakeConnection(error=RuntimeError("timeout")))

    with pytest.raises(StoreReadError, match="timeout"):
        await store.fetch_context()


@pytest.mark.asyncio
async def test_unconfigured_store_refuses_operations():
    store = DocumentStore()

    assert not store.configured
    with pytest.raises(ConfigurationMissingError):
        await store.store_document("doc-1", "a.txt", "text")
    with pytest.raises(ConfigurationMissingError):
        await store.fetch_context()
    assert await store.list_documents() == []


@pytest.mark.asyncio
async def test_list_documents_fails_soft():
    store = connected_store(FakeConnection(error=RuntimeError("down")))

    assert await store.list_documents() == []


@pytest.mark.asyncio
async def test_list_documents():
    rows = [{"id": "doc-1", "name": "a.txt", "content": "alpha"}]
    documents = await connected_store(FakeConnection(rows=rows)).list_documents()

    assert [(d.id, d.name, d.content) for d in documents] == [("doc-1", "a.txt", "alpha")]


@pytest.mark.asyncio
async def test_configure_closes_open_pool():
    store = connected_store(FakeConnection())
    pool = store.pool

    await store.configure("postgresql://other/postgres", "new-key")

    assert pool.closed
    assert store.pool is None
    assert store.configured


def test_schema_defines_documents_table():
    assert "create table if not exists documents" in SQL_SETUP
    assert "embedding vector(1536)" in SQL_SETUP
