"""Offline extraction client.

Returns a fixed record without any network call. Used for local runs
(EXTRACTION_PROVIDER=example) and as a template for new provider adapters:
implement BaseExtractionClient and register the provider in
FieldExtractorFactory.
"""

import json
from typing import ClassVar

from app.extraction.client_base import BaseExtractionClient
from app.extraction.models import Category


class ExampleClientAdapter(BaseExtractionClient):
    """Adapter that answers every request with the same valid record."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "payee": None,
        "tin": None,
        "address": None,
        "purpose": None,
        "category": Category.OTHERS.value,
        "currency": None,
        "amount": None,
        "amountinwords": None,
        "accountnum": None,
        "mobilenum": None,
        "sib": None,
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt
        return json.dumps(self.DEFAULT_RESPONSE)
