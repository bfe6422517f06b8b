"""Mini README: Advice and receipt scanning backed by the Gemini API.

Structure:
    * GenerativeAdviceProvider - sends prompts from ``prompts`` through a
      ``google.genai`` client and parses the JSON replies.
    * build_advice_provider - pick the generative provider when an API key is
      configured, the offline one otherwise.

The provider raises on transport errors and unusable replies. Callers wrap
``advise`` in ``request_advice`` to get the fallback advice instead.
"""

from __future__ import annotations

from typing import Any, Optional

from google import genai
from google.genai import types

from ..configuration import DailyBudgetSettings, get_settings
from ..logging_utils import get_logger
from .base import AdviceProvider, AdviceSnapshot, ReceiptScan, SpendingAdvice
from .offline import OfflineAdviceProvider
from .prompts import RECEIPT_PROMPT, build_advice_prompt, parse_advice_response, parse_receipt_response

LOGGER = get_logger(__name__)

JSON_REPLY = types.GenerateContentConfig(response_mime_type="application/json")


class GenerativeAdviceProvider(AdviceProvider):
    """Advice and receipt reading through a Gemini model."""

    provider_name = "gemini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        *,
        client: Optional[Any] = None,
    ) -> None:
        settings = get_settings()
        self.model = model or settings.advice_model
        if client is None:
            key = api_key or settings.advice_api_key
            if not key:
                raise ValueError("GenerativeAdviceProvider needs an API key")
            client = genai.Client(api_key=key)
        self._client = client
        LOGGER.debug("Generative advice provider using model %s", self.model)

    def advise(self, snapshot: AdviceSnapshot) -> SpendingAdvice:
        response = self._client.models.generate_content(
            model=self.model,
            contents=build_advice_prompt(snapshot),
            config=JSON_REPLY,
        )
        return parse_advice_response(response.text)

    def scan_receipt(self, image: bytes, mime_type: str = "image/jpeg") -> ReceiptScan:
        if not image:
            raise ValueError("Receipt image is empty")
        response = self._client.models.generate_content(
            model=self.model,
            contents=[types.Part.from_bytes(data=image, mime_type=mime_type), RECEIPT_PROMPT],
            config=JSON_REPLY,
        )
        scan = parse_receipt_response(response.text)
        LOGGER.info("Read receipt total %.2f (%s)", scan.amount, scan.category)
        return scan


def build_advice_provider(settings: Optional[DailyBudgetSettings] = None) -> AdviceProvider:
    """Return the advice provider the configuration asks for."""

    settings = settings or get_settings()
    if settings.advice_api_key:
        return GenerativeAdviceProvider(api_key=settings.advice_api_key, model=settings.advice_model)
    LOGGER.info("No advice API key configured; using offline advice")
    return OfflineAdviceProvider()
