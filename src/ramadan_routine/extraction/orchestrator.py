"""Schedule extraction via the recognition service, with a primary/fallback model policy.

A single request carries the Ramadan rewrite instructions plus either the
document text or the page images.  The reply is decoded into row dicts and
then passed through the local time-column adjuster, which corrects whatever
the model missed.

Only transport-level failures (ServiceFailure) trigger the one retry against
the fallback model.  An empty or malformed answer means the model did reply
and is reported to the caller as-is.
"""

import logging
import time

from pydantic import BaseModel, ConfigDict, Field

from ramadan_routine.config import FALLBACK_MODEL, PRIMARY_MODEL
from ramadan_routine.extraction.decoder import decode
from ramadan_routine.extraction.errors import ServiceFailure
from ramadan_routine.extraction.prompts import TEXT_SYSTEM_PROMPT, USER_INSTRUCTION, VISION_SYSTEM_PROMPT, text_user_message
from ramadan_routine.extraction.resources import RecognitionClient, UserContent, get_recognition_client
from ramadan_routine.schedule.columns import select_and_adjust

logger = logging.getLogger(__name__)


# ─── Model Policy ────────────────────────────────────────────────────────────


class ModelPolicy(BaseModel):
    """Primary model plus an optional fallback tried once when the primary call fails."""

    model_config = ConfigDict(frozen=True)

    primary: str = Field(min_length=1)
    fallback: str | None = None

    @classmethod
    def from_env(cls) -> "ModelPolicy":
        """Build the policy from RAMADAN_PRIMARY_MODEL / RAMADAN_FALLBACK_MODEL."""
        return cls(primary=PRIMARY_MODEL, fallback=FALLBACK_MODEL or None)

    def candidates(self) -> tuple[str, ...]:
        """Models to try in order; the fallback is dropped when it names the primary."""
        if self.fallback and self.fallback != self.primary:
            return (self.primary, self.fallback)
        return (self.primary,)


# ─── Request Building ────────────────────────────────────────────────────────


def build_request(content: str | list[dict]) -> tuple[str, UserContent]:
    """Return (system_prompt, user_content) for document text or a list of image content parts."""
    if isinstance(content, str):
        if not content.strip():
            raise ValueError("Cannot extract a schedule from empty text")
        return TEXT_SYSTEM_PROMPT, text_user_message(content)

    if not content:
        raise ValueError("Cannot extract a schedule from an empty image list")
    return VISION_SYSTEM_PROMPT, [*content, {"type": "text", "text": USER_INSTRUCTION}]


def _describe(content: str | list[dict]) -> str:
    """Short log description of the request payload."""
    if isinstance(content, str):
        return f"{len(content)} chars of text"
    return f"{len(content)} image(s)"


# ─── Extraction ──────────────────────────────────────────────────────────────


def _request_rows(client: RecognitionClient, model: str, system_prompt: str, user_content: UserContent) -> list[dict[str, str]]:
    """Call one model and decode its reply."""
    raw = client.complete(model, system_prompt, user_content)
    return decode(raw)


def extract(
    content: str | list[dict],
    *,
    policy: ModelPolicy | None = None,
    client: RecognitionClient | None = None,
) -> list[dict[str, str]]:
    """Send *content* to the recognition service and return the decoded rows.

    On ServiceFailure from the primary model the fallback model (if distinct)
    is tried once.  If the fallback also fails, the primary's failure is
    re-raised.  EmptyResponse and MalformedResponse are never retried.
    """
    policy = policy or ModelPolicy.from_env()
    system_prompt, user_content = build_request(content)
    client = client or get_recognition_client()

    primary, *rest = policy.candidates()
    logger.info("Extracting schedule from %s with %s", _describe(content), primary)
    t0 = time.time()

    try:
        rows = _request_rows(client, primary, system_prompt, user_content)
    except ServiceFailure as primary_failure:
        if not rest:
            raise
        fallback = rest[0]
        logger.warning("Primary model %s failed (%s); retrying once with %s", primary, primary_failure, fallback)
        try:
            rows = _request_rows(client, fallback, system_prompt, user_content)
        except ServiceFailure as fallback_failure:
            logger.error("Fallback model %s also failed: %s", fallback, fallback_failure)
            raise primary_failure from fallback_failure

    logger.info("Extracted %d rows in %.1fs", len(rows), time.time() - t0)
    return rows


def extract_and_adjust(
    content: str | list[dict],
    *,
    policy: ModelPolicy | None = None,
    client: RecognitionClient | None = None,
) -> list[dict[str, str]]:
    """Extract rows and rewrite their time column to Ramadan timings."""
    rows = extract(content, policy=policy, client=client)
    return select_and_adjust(rows)
