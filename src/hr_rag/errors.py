"""Exception hierarchy shared by every layer of the chatbot."""

from __future__ import annotations


class HRRagError(Exception):
    """Base class for all errors raised by :mod:`hr_rag`."""


class ConfigurationError(HRRagError):
    """A required setting (credential, endpoint, …) is absent."""


class AuthError(HRRagError):
    """Shared secret or admin password did not match."""


class UpstreamError(HRRagError):
    """An external service (embedding, search, generation) failed."""


class ValidationError(HRRagError):
    """The caller supplied unusable input (missing file, no text, …)."""


class EmbeddingMismatchError(ValidationError):
    """A vector was produced by a different model or has the wrong dimension."""


class PersistenceError(HRRagError):
    """A best-effort write failed.  Logged, never surfaced to the caller."""


class UploadTooLargeError(ValidationError):
    """The uploaded file exceeds the configured size cap."""
