"""
Exceptions raised while turning generated text into a candidate artifact.

Schema and business-rule validators return their findings; only the JSON
parser raises. The orchestrator converts JSONParseError into a structural
error of kind "parse" and retries the attempt.
"""

from typing import Any

SNIPPET_CHARS = 500


class ValidationError(Exception):
    """Root of the candidate validation errors.

    `details` holds structured context (snippets, decoder positions) for logs.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} ({context})"


class JSONParseError(ValidationError):
    """
    Raw output was empty, malformed JSON, or JSON whose top level is not an object.

    Attributes:
        parse_error: Short reason fed back to the model as corrective context
            (decoder message with line/column, or the shape mismatch)
    """

    def __init__(self, message: str, raw_content: str | None = None, parse_error: str | None = None):
        details: dict[str, Any] = {}
        if raw_content:
            details["content_snippet"] = raw_content[:SNIPPET_CHARS]
        if parse_error:
            details["parse_error"] = parse_error
        super().__init__(message, details)
        self.parse_error = parse_error or message
