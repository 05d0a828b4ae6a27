from typing import ClassVar

from app.config.settings import Settings
from app.extraction.base import BaseFieldExtractor
from app.extraction.contract import ExtractionContract, SelfEntity
from app.extraction.example_client_adapter import ExampleClientAdapter
from app.extraction.extractor import FieldExtractor
from app.extraction.openai_client_adapter import OpenAIClientAdapter


class FieldExtractorFactory:
    """Creates the configured field extractor."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "groq": "https://api.groq.com/openai/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseFieldExtractor:
        """Create a configured extractor from application settings."""
        provider = settings.extraction_provider.lower()
        contract = cls.build_contract(settings)
        if provider == "example":
            return FieldExtractor(
                client=ExampleClientAdapter(),
                model="example",
                contract=contract,
            )
        client = OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=cls._resolve_timeout_seconds(provider, settings),
            base_url=cls._resolve_base_url(provider, settings),
        )
        return FieldExtractor(
            client=client,
            model=cls._resolve_model_name(provider, settings),
            contract=contract,
            temperature=settings.extraction_temperature,
            json_retry=settings.extraction_json_retry,
        )

    @staticmethod
    def build_contract(settings: Settings) -> ExtractionContract:
        return ExtractionContract(
            self_entity=SelfEntity(
                name=settings.self_entity_name,
                tin=settings.self_entity_tin,
                address=settings.self_entity_address,
            )
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.extraction_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "extraction_openai_compatible_base_url is required for "
                    "extraction_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown extraction provider '{provider}'. Choose from: {supported}"
        )

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "groq": settings.extraction_groq_api_key,
            "openai": settings.extraction_openai_api_key,
            "openai_compatible": settings.extraction_openai_compatible_api_key,
        }
        if provider not in key_map:
            return ""
        key = key_map[provider].strip()
        if not key:
            raise ValueError(
                f"extraction_{provider}_api_key is required for extraction_provider={provider}"
            )
        return key

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "groq": settings.extraction_groq_model_name,
            "openai": settings.extraction_openai_model_name,
            "openai_compatible": settings.extraction_openai_compatible_model_name,
        }
        return key_map.get(provider, "")

    @classmethod
    def _resolve_timeout_seconds(cls, provider: str, settings: Settings) -> float | None:
        key_map = {
            "groq": settings.extraction_groq_timeout_seconds,
            "openai": settings.extraction_openai_timeout_seconds,
            "openai_compatible": settings.extraction_openai_compatible_timeout_seconds,
        }
        return key_map.get(provider)
