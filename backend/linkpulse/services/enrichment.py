"""
Enrichment of submitted URLs with a title, tags and summary.

The model is asked for structured JSON output constrained by RESPONSE_SCHEMA.
Whatever happens on the wire, `EnrichmentService.analyze` always resolves to
a populated EnrichmentData:

    - the call succeeds: fields are taken from the model, with per-field
      defaults for anything missing or unparseable (Enriched)
    - the call fails: a deterministic result derived from the URL (Fallback)
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx

from ..config import settings
from ..core.exceptions import EnrichmentError
from ..schemas.link import EnrichmentData
from ..utils.validators import last_path_segment

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Link"
DEFAULT_TAGS = ["General"]
DEFAULT_SUMMARY = "No description available."

FALLBACK_TAGS = ["Web"]
FALLBACK_SUMMARY_PREFIX = "Shortened link for "

PROMPT_TEMPLATE = (
    "Analyze the following URL and provide a concise title, 3 relevant tags, "
    "and a one-sentence summary of what the content likely is: {url}"
)

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING", "description": "A catchy title for the link"},
        "tags": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "List of 3 relevant tags",
        },
        "summary": {"type": "STRING", "description": "A one-sentence summary"},
    },
    "required": ["title", "tags", "summary"],
}


@dataclass(frozen=True)
class Enriched:
    """The model answered; fields may still carry defaults"""
    data: EnrichmentData


@dataclass(frozen=True)
class Fallback:
    """The model call failed; data is derived from the URL alone"""
    data: EnrichmentData
    reason: str


EnrichmentOutcome = Union[Enriched, Fallback]


def build_prompt(url: str) -> str:
    return PROMPT_TEMPLATE.format(url=url)


def build_request_body(url: str) -> dict:
    """generateContent request body asking for schema-constrained JSON"""
    return {
        "contents": [{"role": "user", "parts": [{"text": build_prompt(url)}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }


def extract_text(payload: Any) -> str:
    """
    Concatenate the text parts of the first candidate.

    Returns an empty string when the response carries no text.
    """
    if not isinstance(payload, dict):
        return ""
    candidates = payload.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict))


def _strip_json_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def parse_enrichment(text: Optional[str]) -> EnrichmentData:
    """
    Parse model output into EnrichmentData.

    Unparseable text, a non-object payload, or a missing/empty field yields
    the per-field default for that field.
    """
    try:
        result = json.loads(_strip_json_fences(text or "") or "{}")
    except ValueError:
        logger.warning("Enrichment response is not valid JSON: %.200s", text)
        result = {}

    if not isinstance(result, dict):
        result = {}

    title = result.get("title")
    if not isinstance(title, str) or not title.strip():
        title = DEFAULT_TITLE

    tags = result.get("tags")
    if not isinstance(tags, list):
        tags = []
    tags = [t for t in tags if isinstance(t, str) and t.strip()]
    if not tags:
        tags = list(DEFAULT_TAGS)

    summary = result.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        summary = DEFAULT_SUMMARY

    return EnrichmentData(title=title, tags=tags, summary=summary)


def fallback_enrichment(url: str) -> EnrichmentData:
    """Deterministic enrichment used when the model can't be reached"""
    return EnrichmentData(
        title=last_path_segment(url) or DEFAULT_TITLE,
        tags=list(FALLBACK_TAGS),
        summary=FALLBACK_SUMMARY_PREFIX + url,
    )


class EnrichmentService:
    """Adapter around the Gemini generateContent endpoint"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self.model = model or settings.GEMINI_MODEL
        self.api_base = (api_base or settings.GEMINI_API_BASE).rstrip("/")
        self.timeout = timeout or settings.ENRICHMENT_TIMEOUT_SECONDS
        self._client = client

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    async def _post(self, client: httpx.AsyncClient, body: dict) -> Any:
        response = await client.post(
            self.endpoint,
            json=body,
            headers={"x-goog-api-key": self.api_key},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def generate(self, url: str) -> str:
        """
        Single generateContent call for url.

        Returns:
            The model's raw text output

        Raises:
            EnrichmentError: On missing credentials, transport or HTTP failure
        """
        if not self.api_key:
            raise EnrichmentError("GEMINI_API_KEY is not configured")

        body = build_request_body(url)
        try:
            if self._client is not None:
                payload = await self._post(self._client, body)
            else:
                async with httpx.AsyncClient() as client:
                    payload = await self._post(client, body)
        except httpx.HTTPStatusError as e:
            raise EnrichmentError(f"Model returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise EnrichmentError(f"Model request failed: {e!r}") from e
        except ValueError as e:
            raise EnrichmentError("Model response body is not JSON") from e

        return extract_text(payload)

    async def analyze_outcome(self, url: str) -> EnrichmentOutcome:
        try:
            text = await self.generate(url)
        except EnrichmentError as e:
            logger.warning("Gemini analysis error for %s: %s", url, e)
            return Fallback(data=fallback_enrichment(url), reason=str(e))
        except Exception as e:
            logger.exception("Unexpected Gemini analysis error for %s", url)
            return Fallback(data=fallback_enrichment(url), reason=repr(e))
        return Enriched(data=parse_enrichment(text))

    async def analyze(self, url: str) -> EnrichmentData:
        """Enrich url. Never raises; see module docstring."""
        outcome = await self.analyze_outcome(url)
        return outcome.data
