"""Failure taxonomy for site generation.

Every error carries the HTTP status it maps to when it reaches the endpoint.
Per-model failures (quota, overload, upstream, parse) are normally absorbed by
the model fallback loop and only surface wrapped in
:class:`AllModelsExhaustedError`.
"""

from typing import List, Tuple


class GenerationError(Exception):
    status_code = 503

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TopicRequiredError(GenerationError):
    status_code = 400

    def __init__(self, message: str = "Topic or prompt is required.") -> None:
        super().__init__(message)


class ConfigurationError(GenerationError):
    """A required server-side setting (e.g. the API key) is missing."""


class QuotaExceededError(GenerationError):
    def __init__(self, status: int, body: str) -> None:
        super().__init__("Quota exceeded. Try again later.")
        self.status = status
        self.body = body


class TransientExhaustedError(GenerationError):
    def __init__(self, attempts: int) -> None:
        super().__init__(f"Model overloaded after {attempts} attempts")
        self.attempts = attempts


class UpstreamError(GenerationError):
    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"Google API error {status}")
        self.status = status
        self.body = body


class ParseError(GenerationError):
    pass


class AllModelsExhaustedError(GenerationError):
    """Raised when every configured model failed.

    ``failures`` holds ``(model, reason)`` pairs in the order the models were
    attempted.
    """

    def __init__(self, failures: List[Tuple[str, str]]) -> None:
        super().__init__("All Gemini models unavailable or quota exhausted")
        self.failures = failures
