"""Structured extraction of flight filters from a language-model completion.

The completion is untrusted text: it may be empty, wrap the JSON in prose or code
fences, or contain no JSON at all.  Decoding never raises; it returns a tagged
result so the orchestrator can branch on the outcome instead of null-checking
fields.  Only a failure of the backend call itself is raised, as
``ExtractorTransportError``.
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Union

from app.utils.tracing import traced_span
from core.generator.llm_loader import LLMBackend
from core.generator.prompts import build_extraction_messages

logger = logging.getLogger(__name__)

# Greedy on purpose: from the first "{" to the last "}" so nested objects survive.
JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class ExtractorTransportError(RuntimeError):
    """The extractor backend could not be reached or rejected the request."""


@dataclass(frozen=True)
class ParsedOk:
    value: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ParsedEmpty:
    pass


@dataclass(frozen=True)
class ParseFailed:
    reason: str


ExtractionResult = Union[ParsedOk, ParsedEmpty, ParseFailed]


def extract_json_payload(text: Optional[str]) -> ExtractionResult:
    """Locate and decode the JSON object embedded in a completion."""
    if not isinstance(text, str) or not text.strip():
        return ParsedEmpty()
    match = JSON_OBJECT.search(text)
    if not match:
        return ParseFailed("no JSON object in response")
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        return ParseFailed(f"invalid JSON: {exc.msg}")
    if not isinstance(payload, dict):
        return ParseFailed("JSON payload is not an object")
    return ParsedOk(payload)


def run_extraction(
    query: str,
    backend: LLMBackend,
    llm_cfg: Dict,
    accepted_dates: Sequence[str] = (),
    today: dt.date | None = None,
) -> ExtractionResult:
    """Execute a single extraction attempt; there is no retry."""
    messages = build_extraction_messages(query, accepted_dates, today)
    max_tokens = llm_cfg.get("max_tokens", 256)
    temperature = llm_cfg.get("temperature", 0.1)
    stop = llm_cfg.get("stop") or None
    try:
        with traced_span("extractor.generate"):
            raw = backend.generate(messages, max_tokens=max_tokens, temperature=temperature, stop=stop)
    except Exception as exc:
        logger.exception("Extractor call failed")
        raise ExtractorTransportError(str(exc) or exc.__class__.__name__) from exc

    result = extract_json_payload(raw)
    if isinstance(result, ParseFailed):
        logger.warning("Extractor returned unusable content: %s", result.reason)
    elif isinstance(result, ParsedEmpty):
        logger.warning("Extractor returned an empty completion")
    return result
