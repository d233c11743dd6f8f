"""Gemini generateContent client returning decoded JSON."""

import json
import logging
import re
import typing as t

import httpx

from shelfwise.core.config import SETTINGS
from shelfwise.core.globals import GEMINI_ENDPOINT

LOGGER = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")


class GeminiNotConfiguredError(Exception):
    """Raised when no Gemini API key is configured."""

    def __init__(self) -> None:
        super().__init__("Missing Gemini API key")


class GeminiResponseError(Exception):
    """Raised when Gemini fails or returns something that is not JSON."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


def strip_code_fence(text: str) -> str:
    """Remove a markdown code fence wrapped around model output.

    Args:
        text (str): Raw model text.

    Returns:
        str: The text without surrounding fences.
    """
    return _TRAILING_FENCE.sub("", _LEADING_FENCE.sub("", text.strip())).strip()


def parse_model_json(text: str) -> t.Any:
    """Decode the JSON document produced by the model.

    Args:
        text (str): Raw model text, possibly fenced.

    Returns:
        t.Any: The decoded document.
    """
    try:
        return json.loads(strip_code_fence(text))
    except json.JSONDecodeError as exc:
        raise GeminiResponseError(f"Gemini JSON parse failed: {exc}") from exc


class GeminiClient:
    """Thin async client for the Gemini REST API."""

    api_key: str
    model: str
    http: httpx.AsyncClient | None

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize GeminiClient.

        Args:
            api_key (str | None):
                API key, taken from the settings when None.
            model (str | None):
                Model name, taken from the settings when None.
            http (httpx.AsyncClient | None):
                Shared HTTP client, a short-lived one per call when None.
        """
        self.api_key = SETTINGS.gemini_api_key if api_key is None else api_key
        self.model = model or SETTINGS.gemini_model
        self.http = http

    def build_request(
        self,
        prompt: str,
        image_base64: str | None = None,
        mime_type: str | None = None,
    ) -> t.Dict[str, t.Any]:
        """Build the generateContent request body.

        Args:
            prompt (str): Instruction text.
            image_base64 (str | None): Optional inline image.
            mime_type (str | None): MIME type of the image.

        Returns:
            t.Dict[str, t.Any]: The JSON request body.
        """
        parts: t.List[t.Dict[str, t.Any]] = [{"text": prompt}]
        if image_base64:
            parts.append(
                {
                    "inline_data": {
                        "mime_type": mime_type or "image/jpeg",
                        "data": image_base64,
                    }
                }
            )
        return {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "temperature": SETTINGS.gemini_temperature,
            },
        }

    async def _post(self, body: t.Dict[str, t.Any]) -> httpx.Response:
        url: str = GEMINI_ENDPOINT.format(model=self.model)
        params: t.Dict[str, str] = {"key": self.api_key}
        if self.http is not None:
            return await self.http.post(url, params=params, json=body)
        async with httpx.AsyncClient(
            timeout=SETTINGS.gemini_timeout_seconds
        ) as client:
            return await client.post(url, params=params, json=body)

    async def generate_json(
        self,
        prompt: str,
        image_base64: str | None = None,
        mime_type: str | None = None,
    ) -> t.Any:
        """Ask Gemini for a JSON answer.

        Args:
            prompt (str): Instruction text.
            image_base64 (str | None): Optional inline image.
            mime_type (str | None): MIME type of the image.

        Returns:
            t.Any: The decoded JSON answer.
        """
        if not self.api_key:
            raise GeminiNotConfiguredError()

        try:
            response: httpx.Response = await self._post(
                self.build_request(prompt, image_base64, mime_type)
            )
        except httpx.HTTPError as exc:
            raise GeminiResponseError(f"Gemini request failed: {exc}") from exc

        if response.is_error:
            raise GeminiResponseError(
                f"Gemini API error {response.status_code}: {response.text}"
            )

        try:
            text: t.Any = response.json()["candidates"][0]["content"][
                "parts"
            ][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError):
            text = None
        if not isinstance(text, str) or not text:
            raise GeminiResponseError("Gemini returned empty response.")

        LOGGER.debug("Gemini %s answered with %d chars", self.model, len(text))
        return parse_model_json(text)
