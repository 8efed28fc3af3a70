"""
Test configuration and stub collaborators
"""
import os

os.environ.setdefault("OPENAI_API_KEY", "test-key")

import pytest

from vectorflow.models.response import GeneratedAnswer
from vectorflow.services.chat import ChatOrchestrator
from vectorflow.services.state import AppState
from vectorflow.services.upload import UploadOrchestrator


class FakeUpload:
    def __init__(self, filename, data, content_type=None):
        self.filename = filename
        self.content_type = content_type
        self.data = data
        self.reads = 0

    async def read(self):
        self.reads += 1
        return self.data


class StubNormalizer:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    async def normalize_content(self, name, content):
        self.calls.append((name, content))
        if self.error:
            raise self.error
        return f"clean:{content.strip()}"


class StubStore:
    def __init__(self, write_error=None, read_error=None, context="alpha\n\nbeta"):
        self.write_error = write_error
        self.read_error = read_error
        self.context = context
        self.writes = []
        self.reads = 0

    async def store_document(self, document_id, name, content):
        self.writes.append((document_id, name, content))
        if self.write_error:
            raise self.write_error

    async def fetch_context(self, limit=None):
        self.reads += 1
        if self.read_error:
            raise self.read_error
        return self.context


class StubGenerator:
    def __init__(self, error=None, text="42"):
        self.error = error
        self.text = text
        self.calls = []

    async def generate_answer(self, question, context):
        self.calls.append((question, context))
        if self.error:
            raise self.error
        return GeneratedAnswer(text=self.text, sources=[])


@pytest.fixture
def state():
    app_state = AppState()
    app_state.configured = True
    return app_state


@pytest.fixture
def normalizer():
    return StubNormalizer()


@pytest.fixture
def store():
    return StubStore()


@pytest.fixture
def generator():
    return StubGenerator()


@pytest.fixture
def uploads(state, normalizer, store):
    return UploadOrchestrator(state, normalizer=normalizer, store=store)


@pytest.fixture
def chat(state, store, generator):
    return ChatOrchestrator(state, store=store, generator=generator)
