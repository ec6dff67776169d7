"""
core/errors.py
--------------
Error taxonomy shared by the concept store, the enrichment flow and the API.

Every failure is terminal for the invoked operation; nothing here is retried.
The HTTP layer maps each class to a status code (see backend.errors).
"""

from __future__ import annotations


class CoasterForgeError(Exception):
    """Base class for all domain errors."""

    message = "CoasterForge error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class Unauthenticated(CoasterForgeError):
    """No caller identity where one is required."""

    message = "Must be logged in"


class NotFoundOrForbidden(CoasterForgeError):
    """
    The concept does not exist, or the caller does not own it.

    Both cases raise this one class with the same message so a caller cannot
    probe for the existence of other users' concepts.
    """

    message = "Concept not found or unauthorized"

    def __init__(self):
        super().__init__(self.message)


class NotFound(CoasterForgeError):
    message = "Concept not found"


class EnrichmentFailed(CoasterForgeError):
    """Transport, HTTP status or parsing failure of the text-generation call."""

    message = "Failed to generate AI content"


class EnrichmentNotPersisted(CoasterForgeError):
    """
    Text was generated but could not be written back to the concept
    (deleted meanwhile, or the caller lost ownership).

    The generated text is kept on ``content`` so it is not lost silently.
    """

    message = "AI content generated but could not be saved"

    def __init__(self, content: str, reason: str | None = None):
        detail = self.message if not reason else f"{self.message}: {reason}"
        super().__init__(detail)
        self.content = content
