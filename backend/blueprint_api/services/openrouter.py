# blueprint_api/services/openrouter.py
import json
import logging
import re
from typing import Any, Dict

import httpx

from blueprint_api.config import Config

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """
You are an architectural blueprint AI.
Return STRICT JSON only.
Schema:
{
  "rooms": [
    { "name": "string", "x": number, "y": number, "width": number, "height": number }
  ]
}
"""

GENERIC_FAILURE = "AI request failed"
AUTH_FAILURE = "OpenRouter authentication failed. Check OPENROUTER_API_KEY."


class GenerationError(Exception):
    """A failed generation, carrying the HTTP status to report to the caller."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def clean_response_content(content: str) -> str:
    """Strips a surrounding ``` fence (with optional language tag) from model output."""
    cleaned = content.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        if len(lines) >= 3 and lines[0].strip().startswith("```") and lines[-1].strip() == "```":
            cleaned = "\n".join(lines[1:-1])
    return cleaned.strip()


def extract_json_from_response(text: str) -> Any:
    """Parses the model's room list, tolerating a fenced block or prose around the object."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        # ```json fence left inside the reply
        match = re.search(r'```(?:json)?\s*(\{.*?\})\s*```', text, re.DOTALL)
        if match:
            try:
                return json.loads(match.group(1))
            except json.JSONDecodeError:
                pass

        # First decodable object after any leading prose
        start = text.find("{")
        if start != -1:
            try:
                parsed, _ = json.JSONDecoder().raw_decode(text[start:])
                return parsed
            except json.JSONDecodeError:
                pass

        raise json.JSONDecodeError("No room list found in reply", text, 0)


def build_payload(prompt: str) -> Dict[str, Any]:
    return {
        "model": Config.OPENROUTER_MODEL,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        "temperature": 0.2,
    }


def build_headers() -> Dict[str, str]:
    headers = {
        "Authorization": f"Bearer {Config.OPENROUTER_API_KEY}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    if Config.OPENROUTER_SITE_URL:
        headers["HTTP-Referer"] = Config.OPENROUTER_SITE_URL
    if Config.OPENROUTER_APP_NAME:
        headers["X-Title"] = Config.OPENROUTER_APP_NAME
    return headers


def _build_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=Config.OPENROUTER_TIMEOUT)


def _upstream_error(status: int, body: Dict[str, Any]) -> GenerationError:
    message = GENERIC_FAILURE
    error = body.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"].strip():
        message = error["message"]

    if status in (401, 403):
        if message == GENERIC_FAILURE:
            message = AUTH_FAILURE
        return GenerationError(401, message)
    return GenerationError(502, message)


async def request_blueprint(prompt: str) -> Any:
    """
    Asks the model for a room list and returns the parsed JSON as-is.

    The result is untrusted: it is only guaranteed to be valid JSON, not to
    follow the rooms schema. Raises GenerationError on any failure; there is
    no retry.
    """
    if not Config.OPENROUTER_API_KEY:
        raise GenerationError(500, "OPENROUTER_API_KEY or OPENROUTER_API is not configured")

    try:
        async with _build_client() as client:
            resp = await client.post(Config.OPENROUTER_URL, headers=build_headers(), json=build_payload(prompt))
    except httpx.HTTPError as e:
        logger.warning("Network request to OpenRouter failed: %s", e)
        raise GenerationError(502, GENERIC_FAILURE) from e

    try:
        data = resp.json()
    except ValueError as e:
        raise GenerationError(502, "AI service returned an unreadable response") from e
    if not isinstance(data, dict):
        raise GenerationError(502, "AI service returned an unreadable response")

    if resp.status_code >= 400:
        error = _upstream_error(resp.status_code, data)
        logger.warning("OpenRouter returned %d: %s", resp.status_code, error.message)
        raise error

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise GenerationError(502, "AI response did not include any choices")

    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    content = clean_response_content(content) if isinstance(content, str) else ""
    if not content:
        raise GenerationError(502, "AI response content was empty")
    logger.debug("Raw AI response: %s", content)

    try:
        return extract_json_from_response(content)
    except json.JSONDecodeError as e:
        raise GenerationError(502, "AI returned invalid JSON") from e
