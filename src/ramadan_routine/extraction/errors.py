"""Exceptions raised while turning a recognition-service reply into rows."""

EXCERPT_LENGTH = 300


def excerpt(text: str, limit: int = EXCERPT_LENGTH) -> str:
    """Return the first *limit* characters of *text* for diagnostics."""
    return text if len(text) <= limit else text[:limit] + "...(truncated)"


class ExtractionError(Exception):
    """Base class for every failure of the extraction step."""


class EmptyResponse(ExtractionError):
    """The recognition service answered with no content at all."""


class MalformedResponse(ExtractionError):
    """The reply held no parsable JSON array of row objects."""

    def __init__(self, message: str, payload: str = ""):
        self.excerpt = excerpt(payload)
        super().__init__(f"{message}. Raw snippet: {self.excerpt}" if payload else message)


class ServiceFailure(ExtractionError):
    """The request to the recognition service itself failed (network, auth, model error)."""

    def __init__(self, message: str, model: str = ""):
        self.model = model
        super().__init__(f"[{model}] {message}" if model else message)


class UnsupportedInput(ValueError):
    """The uploaded file cannot be turned into text or images for extraction."""
