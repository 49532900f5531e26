"""AI gateway client: summarizes and classifies announcements via forced tool calling.

Talks to an OpenAI-compatible chat completions endpoint. The model must call
the analyze_announcement tool; its JSON arguments are validated against the
tool's parameter schema before use.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import jsonschema

from noticeboard.application.dtos.analysis import AnnouncementAnalysis
from noticeboard.domain.enums import AnnouncementCategory, Priority
from noticeboard.domain.exceptions import (
    AnalysisQuotaExceededException,
    AnalysisRateLimitedException,
    AnalysisUnavailableException,
)
from noticeboard.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

TOOL_NAME = "analyze_announcement"

ANALYSIS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "summary": {
            "type": "string",
            "minLength": 1,
            "description": "A concise 2-3 sentence summary of the announcement",
        },
        "category": {
            "type": "string",
            "enum": AnnouncementCategory.values(),
            "description": "The category that best fits this announcement",
        },
        "priority": {
            "type": "string",
            "enum": Priority.values(),
            "description": "The priority level based on urgency and impact",
        },
    },
    "required": ["summary", "category", "priority"],
    "additionalProperties": False,
}

SYSTEM_PROMPT = (
    "You are an AI assistant that analyzes announcements and provides structured "
    "metadata. Always respond with valid JSON only."
)


def _user_prompt(title: str, content: str) -> str:
    categories = ", ".join(AnnouncementCategory.values())
    return (
        "Analyze this announcement and provide:\n"
        "1. A concise summary (2-3 sentences)\n"
        f"2. A category (one of: {categories})\n"
        "3. A priority level (high, medium, or low) based on urgency and impact\n\n"
        f"Title: {title}\n"
        f"Content: {content}"
    )


def build_payload(model: str, title: str, content: str) -> dict[str, Any]:
    """Chat completions request forcing a single analyze_announcement tool call."""
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": _user_prompt(title, content)},
        ],
        "tools": [
            {
                "type": "function",
                "function": {
                    "name": TOOL_NAME,
                    "description": "Analyze an announcement and extract metadata",
                    "parameters": ANALYSIS_SCHEMA,
                },
            }
        ],
        "tool_choice": {"type": "function", "function": {"name": TOOL_NAME}},
    }


def parse_tool_arguments(data: dict[str, Any]) -> AnnouncementAnalysis:
    """Extract and validate the tool call arguments from a completion response."""
    try:
        tool_call = data["choices"][0]["message"]["tool_calls"][0]
        raw_args = tool_call["function"]["arguments"]
    except (KeyError, IndexError, TypeError) as e:
        raise AnalysisUnavailableException("no tool call in AI response") from e
    try:
        args = json.loads(raw_args) if isinstance(raw_args, str) else raw_args
        jsonschema.validate(instance=args, schema=ANALYSIS_SCHEMA)
    except (json.JSONDecodeError, jsonschema.ValidationError) as e:
        raise AnalysisUnavailableException("malformed tool arguments") from e
    return AnnouncementAnalysis(
        summary=args["summary"].strip(),
        category=args["category"],
        priority=Priority(args["priority"]),
    )


class AIGatewayAnalyzer:
    """Implements IAnnouncementAnalyzer against the AI gateway.

    Uses the shared httpx.AsyncClient when given one (app.state.http_client),
    otherwise opens a client per call. The core never retries; 429 and 503
    outcomes are marked retryable for the caller.
    """

    def __init__(
        self,
        url: str,
        api_key: str | None,
        model: str,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.http_client = http_client

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self.http_client is not None:
            return await self.http_client.post(
                self.url, json=payload, headers=headers, timeout=self.timeout
            )
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.url, json=payload, headers=headers)

    async def analyze(self, title: str, content: str) -> AnnouncementAnalysis:
        """Return summary, category and priority for the announcement.

        Raises:
            AnalysisRateLimitedException: gateway answered 429.
            AnalysisQuotaExceededException: gateway answered 402.
            AnalysisUnavailableException: not configured, timeout, transport
                error, other non-2xx, or unusable response.
        """
        if not self.api_key:
            raise AnalysisUnavailableException("AI gateway API key is not configured")
        logger.info("Analyzing announcement: content_length=%d", len(content))
        try:
            response = await self._post(build_payload(self.model, title, content))
        except httpx.TimeoutException as e:
            logger.warning("AI gateway timed out")
            raise AnalysisUnavailableException("timeout") from e
        except httpx.HTTPError as e:
            logger.warning("AI gateway transport error: %s", type(e).__name__)
            raise AnalysisUnavailableException("transport error") from e

        if response.status_code == 429:
            raise AnalysisRateLimitedException()
        if response.status_code == 402:
            raise AnalysisQuotaExceededException()
        if not response.is_success:
            logger.error("AI gateway error: status=%d", response.status_code)
            raise AnalysisUnavailableException(
                f"gateway returned {response.status_code}", status_code=response.status_code
            )
        try:
            data = response.json()
        except ValueError as e:
            raise AnalysisUnavailableException("response is not JSON") from e
        return parse_tool_arguments(data)
