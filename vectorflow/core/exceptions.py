"""Custom exceptions for the application."""

from typing import Optional

SCHEMA_TABLE = "documents"
# 42P01: undefined_table (Postgres), PGRST205: relation not in schema cache (PostgREST)
SCHEMA_MISSING_CODES = frozenset({"42P01", "PGRST205"})


class ConfigurationMissingError(Exception):
    """Raised when store credentials are absent."""

    pass


class ExtractionError(Exception):
    """Raised when text cannot be extracted from an uploaded file."""

    pass


class EmptyContentError(ExtractionError):
    """Raised when extraction yields only whitespace."""

    def __init__(self, message: str = "File is empty.") -> None:
        super().__init__(message)


class NormalizationError(Exception):
    """Raised when the language-model cleanup pass fails."""

    pass


class GenerationError(Exception):
    """Raised when answer generation fails."""

    pass


class StoreError(Exception):
    """Raised when document store operations fail."""

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code


class StoreWriteError(StoreError):
    """Raised when persisting a document fails."""

    pass


class StoreReadError(StoreError):
    """Raised when reading stored content fails."""

    pass


def is_schema_missing(error: BaseException) -> bool:
    """
    Check whether an error means the documents table does not exist.

    The structured backend code decides when one is present. Errors without a
    code fall back to matching the message, which also matches any message
    that merely mentions the table name.

    Args:
        error: Exception raised by a store operation.

    Returns:
        True if the error looks like a missing schema.
    """
    code = getattr(error, "code", None)
    if code:
        return code in SCHEMA_MISSING_CODES
    message = str(error)
    return any(c in message for c in SCHEMA_MISSING_CODES) or SCHEMA_TABLE in message
