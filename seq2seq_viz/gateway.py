"""Translation gateway: the single asynchronous call to the external translator.

A gateway completes exactly once, either with the translated text or by raising
one of the ``GatewayFailure`` subtypes. Nothing here retries.

Usage:
    gateway = GeminiGateway()
    text = await gateway.translate("how are you", "English", "Hindi", api_key)
"""

import asyncio
import logging
from typing import Any, Optional, Protocol

import requests

from .config import SimulationConfig, is_missing_credential
from .errors import (
    EmptyResult,
    MalformedResponse,
    MissingCredential,
    ServiceError,
    TransportFailure,
)

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "Translate the following text from {source} to {target}. "
    'Return ONLY the translated text and nothing else: "{text}"'
)


class TranslationGateway(Protocol):
    """Anything that can translate text between two named languages."""

    async def translate(
        self, text: str, source_name: str, target_name: str, credential: Optional[str]
    ) -> str: ...


def build_prompt(text: str, source_name: str, target_name: str) -> str:
    return PROMPT_TEMPLATE.format(source=source_name, target=target_name, text=text)


def extract_translation(data: Any) -> str:
    """Pull ``candidates[0].content.parts[0].text`` out of a generateContent response."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise MalformedResponse() from None
    if not isinstance(text, str):
        raise MalformedResponse()
    text = text.strip()
    if not text:
        raise EmptyResult()
    return text


def _service_error_message(response: requests.Response) -> str:
    """Remote ``error.message`` if present, else the HTTP status line."""
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        message = None
    if message:
        return str(message)
    return f"{response.status_code} {response.reason or 'Error'}".strip()


class GeminiGateway:
    """Gateway backed by the Gemini ``generateContent`` REST endpoint.

    The blocking HTTP request runs in a worker thread so the event loop keeps
    driving timers while the call is in flight.

    Args:
        model: Gemini model name
        api_base: Base URL of the v1beta API
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        model: str = "gemini-1.5-flash",
        api_base: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
    ):
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "GeminiGateway":
        return cls(model=config.model, api_base=config.api_base, timeout=config.request_timeout)

    @property
    def url(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    async def translate(
        self, text: str, source_name: str, target_name: str, credential: Optional[str]
    ) -> str:
        if is_missing_credential(credential):
            raise MissingCredential()
        return await asyncio.to_thread(
            self._translate_sync, text, source_name, target_name, credential
        )

    def _translate_sync(
        self, text: str, source_name: str, target_name: str, credential: str
    ) -> str:
        payload = {"contents": [{"parts": [{"text": build_prompt(text, source_name, target_name)}]}]}
        logger.debug(f"POST {self.url} ({source_name} -> {target_name}, {len(text)} chars)")

        try:
            response = requests.post(
                self.url,
                params={"key": credential},
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Translation request failed: {e}")
            raise TransportFailure() from e

        if not response.ok:
            message = _service_error_message(response)
            logger.error(f"Translation API error ({response.status_code}): {message}")
            raise ServiceError(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError:
            raise MalformedResponse() from None

        return extract_translation(data)
