import pytest

from vectorflow.models.document import Document, DocumentStatus
from vectorflow.services.state import (
    AppState,
    UploadFailed,
    UploadStarted,
    UploadSucceeded,
    apply_upload_event,
)


def test_started_upload_is_prepended():
    older = Document(name="old.txt", status=DocumentStatus.READY, content="x")
    newer = Document(name="new.txt")

    registry = apply_upload_event((older,), UploadStarted(newer))

    assert [d.id for d in registry] == [newer.id, older.id]
    assert registry[0].status == DocumentStatus.PROCESSING


def test_started_upload_is_never_duplicated():
    document = Document(name="a.txt")
    registry = apply_upload_event((), UploadStarted(document))

    assert apply_upload_event(registry, UploadStarted(document)) == registry


def test_success_patches_only_the_matching_entry():
    first = Document(name="a.txt")
    second = Document(name="b.txt")
    registry = (second, first)

    result = apply_upload_event(registry, UploadSucceeded(first.id, "cleaned"))

    assert result[0] == second
    assert result[1].status == DocumentStatus.READY
    assert result[1].content == "cleaned"
    assert result[1].id == first.id
    assert result[1].name == "a.txt"
    assert result[1].timestamp == first.timestamp
    assert registry[1].status == DocumentStatus.PROCESSING


def test_failure_keeps_content_empty():
    document = Document(name="a.txt")

    result = apply_upload_event((document,), UploadFailed(document.id))

    assert result[0].status == DocumentStatus.ERROR
    assert result[0].content == ""


def test_settled_entries_are_terminal():
    document = Document(name="a.txt")
    registry = apply_upload_event((document,), UploadFailed(document.id))

    result = apply_upload_event(registry, UploadSucceeded(document.id, "late"))

    assert result[0].status == DocumentStatus.ERROR
    assert result[0].content == ""


def test_unknown_event_is_rejected():
    with pytest.raises(TypeError):
        apply_upload_event((), object())


def test_listeners_are_notified_and_can_unsubscribe():
    state = AppState()
    seen = []
    unsubscribe = state.subscribe(lambda s: seen.append(len(s.documents)))

    state.dispatch(UploadStarted(Document(name="a.txt")))
    unsubscribe()
    state.dispatch(UploadStarted(Document(name="b.txt")))

    assert seen == [1]


def test_failing_listener_does_not_break_dispatch():
    state = AppState()

    def broken(_):
        raise RuntimeError("boom")

    state.subscribe(broken)
    state.dispatch(UploadStarted(Document(name="a.txt")))

    assert len(state.documents) == 1
