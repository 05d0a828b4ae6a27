"""AI-powered RFP field extractor."""

import json
from pathlib import Path

from app.extraction.base import BaseFieldExtractor
from app.extraction.client_base import BaseExtractionClient
from app.extraction.contract import ExtractionContract
from app.extraction.exceptions import ExtractionError
from app.extraction.models import StructuredRecord
from app.extraction.prompt_loader import load_prompt_template
from app.extraction.validator import validate_and_build
from app.logging.logger import Log


class FieldExtractor(BaseFieldExtractor):
    """Extracts a StructuredRecord from OCR text using an AI provider.

    The system message is the contract's rule set; the user message is the
    OCR text, unchanged. With ``json_retry`` enabled, a response that is not
    a JSON object is re-requested once before the run fails.
    """

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        contract: ExtractionContract,
        temperature: float = 0.0,
        json_retry: bool = False,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._contract = contract
        self._temperature = max(0.0, min(0.2, temperature))
        self._json_retry = json_retry
        self._system_prompt = contract.render_system_prompt(
            load_prompt_template(prompt_template_path)
        )

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    def extract(self, text: str) -> StructuredRecord:
        Log.debug(f"Extraction system prompt:\n{self._system_prompt}")
        attempts = 2 if self._json_retry else 1
        for attempt in range(1, attempts + 1):
            raw_response = self._call_ai(text)
            Log.debug(f"AI raw response:\n{raw_response}")
            try:
                parsed = self._parse_json(raw_response)
                break
            except ExtractionError as exc:
                if attempt == attempts:
                    raise
                Log.warning(f"Retrying extraction after unparseable response: {exc}")

        record = validate_and_build(parsed, self._contract)
        filled = sum(1 for value in record.to_payload().values() if value is not None)
        Log.info(
            f"Extraction complete: {filled} fields filled",
            contract_version=self._contract.version,
            category=record.category.value,
        )
        return record

    def _call_ai(self, text: str) -> str:
        return self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=text,
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ExtractionError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ExtractionError("JSON response must be an object")
        return parsed
