"""
Gemini API client — lazy initialization and the report request.

The module-level `client` is created on first use from GEMINI_API_KEY, so a
missing key fails the scan that needs it rather than the whole process.
`request_report` is the public entry point used by the scan service.
"""

import asyncio
import base64
import logging
import os
from typing import Any, Awaitable, Callable, List

from google import genai
from google.genai import types
from pydantic import ValidationError

from sentinel.config import settings
from sentinel.integrations.gemini.errors import GeminiConfigError, ReportParseError
from sentinel.integrations.gemini.prompts import SYSTEM_INSTRUCTION
from sentinel.integrations.gemini.retry import with_backoff
from sentinel.schemas.asset import BinaryPart, RequestPayload
from sentinel.schemas.report import ForensicReport, RiskLevel, Verdict

logger = logging.getLogger(__name__)

# Set by get_client(). Tests replace it with a mock.
client = None  # genai.Client | None


def _string_list() -> types.Schema:
    return types.Schema(type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING))


REPORT_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "case_id": types.Schema(type=types.Type.STRING),
        "verdict": types.Schema(type=types.Type.STRING, enum=[v.value for v in Verdict]),
        "confidence_score": types.Schema(type=types.Type.NUMBER, description="Score from 0 to 100"),
        "summary": types.Schema(type=types.Type.STRING),
        "key_evidence": _string_list(),
        "risk_level": types.Schema(type=types.Type.STRING, enum=[r.value for r in RiskLevel]),
        "suspicious_urls": _string_list(),
        "probable_original_sources": _string_list(),
        "data_gaps": _string_list(),
        "recommended_actions": _string_list(),
        "engine_scores": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "name": types.Schema(type=types.Type.STRING),
                    "score": types.Schema(type=types.Type.NUMBER),
                },
            ),
        ),
    },
    required=["case_id", "verdict", "confidence_score", "summary", "risk_level"],
)


def get_client() -> genai.Client:
    """Return the shared client, creating it on first use."""
    global client
    if client is None:
        api_key = os.getenv("GEMINI_API_KEY")
        if not api_key:
            raise GeminiConfigError("GEMINI_API_KEY is missing from environment variables")
        client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=settings.gemini_http_timeout_ms),
        )
        logger.info("[GEMINI] Client initialized")
    return client


def _to_sdk_parts(parts: RequestPayload) -> List[types.Part]:
    sdk_parts = []
    for part in parts:
        if isinstance(part, BinaryPart):
            sdk_parts.append(
                types.Part.from_bytes(data=base64.b64decode(part.base64_data), mime_type=part.mime_type)
            )
        else:
            sdk_parts.append(types.Part.from_text(text=part.text))
    return sdk_parts


async def request_report_once(parts: RequestPayload) -> ForensicReport:
    """One network call, no retry. Raises ReportParseError on an unusable answer."""
    config = types.GenerateContentConfig(
        system_instruction=SYSTEM_INSTRUCTION,
        response_mime_type="application/json",
        response_schema=REPORT_SCHEMA,
        temperature=settings.gemini_temperature,
    )

    response = await get_client().aio.models.generate_content(
        model=settings.gemini_model,
        contents=[types.Content(role="user", parts=_to_sdk_parts(parts))],
        config=config,
    )

    usage = getattr(response, "usage_metadata", None)
    if usage is not None:
        logger.info(
            f"[GEMINI] Tokens: prompt={usage.prompt_token_count} "
            f"completion={usage.candidates_token_count} total={usage.total_token_count}"
        )

    text = response.text
    if not text:
        raise ReportParseError("No response from AI")

    try:
        return ForensicReport.model_validate_json(text)
    except ValidationError as e:
        raise ReportParseError(f"Malformed report ({e.error_count()} validation errors)") from e


async def request_report(
    parts: RequestPayload,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> ForensicReport:
    """Request a report, backing off on rate limits. Any other failure is raised as-is."""
    try:
        return await with_backoff(
            lambda: request_report_once(parts),
            max_attempts=settings.gemini_max_attempts,
            initial_delay=settings.gemini_retry_initial_delay,
            multiplier=settings.gemini_retry_exp_base,
            sleep=sleep,
        )
    except Exception as e:
        logger.error(f"[GEMINI] Analysis error: {e}")
        raise
