from vectorflow.core.exceptions import (
    EmptyContentError,
    ExtractionError,
    StoreReadError,
    StoreWriteError,
    is_schema_missing,
)


def test_schema_missing_by_code():
    assert is_schema_missing(StoreWriteError("boom", code="42P01"))
    assert is_schema_missing(StoreReadError("boom", code="PGRST205"))


def test_structured_code_takes_precedence_over_message():
    assert not is_schema_missing(StoreWriteError("permission denied for table documents", code="42501"))


def test_message_fallback_without_code():
    assert is_schema_missing(StoreWriteError("relation \"documents\" does not exist"))
    assert is_schema_missing(StoreWriteError("PGRST205: not found"))
    assert not is_schema_missing(StoreWriteError("connection refused"))


def test_empty_content_is_an_extraction_error():
    error = EmptyContentError()

    assert isinstance(error, ExtractionError)
    assert str(error) == "File is empty."
