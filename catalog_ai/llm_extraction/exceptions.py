"""Exceptions raised by the content processing pipeline."""

from typing import Optional


class ContentProcessingError(Exception):
    """Base class for every error raised by the extraction pipeline."""


class NetworkError(ContentProcessingError):
    """The inference service could not be reached or the call timed out."""


class UpstreamError(ContentProcessingError):
    """
    The inference service answered with a non-success status.

    Attributes:
        status_code: HTTP status returned by the service, if known
        body: Diagnostic response body, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        self.status_code = status_code
        self.body = body

        full_message = message
        if status_code is not None:
            full_message += f" (HTTP {status_code})"
        if body:
            snippet = body[:200] + "..." if len(body) > 200 else body
            full_message += f": {snippet}"
        super().__init__(full_message)


class EmptyResponseError(ContentProcessingError):
    """The service returned success but no usable message content."""


class MalformedResponseError(ContentProcessingError):
    """
    No JSON object could be located in, or deserialized from, the model output.

    Attributes:
        raw_text: The model output that failed to parse (truncated)
    """

    def __init__(self, message: str, raw_text: Optional[str] = None):
        self.raw_text = raw_text[:500] if raw_text else raw_text
        super().__init__(message)


class EmptyExtractionError(ContentProcessingError):
    """The input text yielded no items at all, so there is nothing to process."""
