"""Recognition-service client setup.

Wraps the OpenAI chat-completions API behind a small ``RecognitionClient``
protocol so that the orchestrator can be driven by a fake in tests.  Works
against api.openai.com or an Azure OpenAI resource via its v1-compatible
endpoint, depending on which credentials are configured in ``.env``.
"""

import logging
import os
import time
from typing import Protocol

from openai import OpenAI, OpenAIError

from ramadan_routine.config import MAX_COMPLETION_TOKENS, REQUEST_TIMEOUT
from ramadan_routine.extraction.errors import ServiceFailure

logger = logging.getLogger(__name__)

# Content accepted by the user turn: plain text, or a list of OpenAI content parts
UserContent = str | list[dict]


class RecognitionClient(Protocol):  # pylint: disable=too-few-public-methods
    """Anything that can send one extraction request to a named model and return its raw text reply."""

    def complete(self, model: str, system_prompt: str, user_content: UserContent) -> str:
        """Return the model's reply text, or raise ServiceFailure."""


# ---------------------------------------------------------------------------
# OpenAI implementation
# ---------------------------------------------------------------------------


class OpenAIRecognitionClient:  # pylint: disable=too-few-public-methods
    """RecognitionClient backed by ``openai.OpenAI().chat.completions``."""

    def __init__(self, client: OpenAI, max_completion_tokens: int = MAX_COMPLETION_TOKENS):
        self._client = client
        self._max_completion_tokens = max_completion_tokens

    def complete(self, model: str, system_prompt: str, user_content: UserContent) -> str:
        """Send one chat request and return the first choice's content ('' when the model said nothing)."""
        t0 = time.time()
        try:
            completion = self._client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_content},
                ],
                max_completion_tokens=self._max_completion_tokens,
            )
        except OpenAIError as exc:
            logger.error("Recognition call to %s failed after %.1fs: %s", model, time.time() - t0, exc)
            raise ServiceFailure(str(exc), model=model) from exc

        elapsed = time.time() - t0
        if not completion.choices:
            logger.warning("%s returned no choices (%.1fs)", model, elapsed)
            return ""

        choice = completion.choices[0]
        content = choice.message.content or ""
        logger.info("%s responded in %.1fs (finish_reason=%s, %d chars)", model, elapsed, choice.finish_reason, len(content))
        logger.debug("Raw %s output:\n%s", model, content)
        return content


# ---------------------------------------------------------------------------
# Cached default client -- created lazily on first use
# ---------------------------------------------------------------------------

_CACHE: dict = {"client": None}


def _build_openai() -> OpenAI:
    """Create the SDK client from environment credentials (Azure endpoint preferred when set)."""
    azure_endpoint = os.getenv("AZURE_OPENAI_ENDPOINT", "").rstrip("/")
    if azure_endpoint:
        api_key = os.getenv("AZURE_OPENAI_API_KEY", "")
        if not api_key:
            raise ServiceFailure("AZURE_OPENAI_ENDPOINT is set but AZURE_OPENAI_API_KEY is missing")
        base_url = f"{azure_endpoint}/openai/v1/"
        logger.info("Connecting to Azure OpenAI at %s", base_url)
        return OpenAI(base_url=base_url, api_key=api_key, timeout=REQUEST_TIMEOUT)

    api_key = os.getenv("OPENAI_API_KEY", "")
    if not api_key:
        raise ServiceFailure("OpenAI credentials not configured (set OPENAI_API_KEY or AZURE_OPENAI_ENDPOINT in .env)")
    base_url = os.getenv("OPENAI_BASE_URL") or None
    logger.info("Connecting to OpenAI%s", f" at {base_url}" if base_url else "")
    return OpenAI(api_key=api_key, base_url=base_url, timeout=REQUEST_TIMEOUT)


def get_recognition_client() -> RecognitionClient:
    """Return the process-wide recognition client, creating it on first access."""
    if _CACHE["client"] is None:
        _CACHE["client"] = OpenAIRecognitionClient(_build_openai())
    return _CACHE["client"]
