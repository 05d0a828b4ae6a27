from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8000

    ocr_engine: str = "tesseract"
    tesseract_cmd: str | None = None

    pdf_engine: str = "pymupdf"
    pdf_render_scale: float = 2.0

    extraction_provider: str = "groq"
    extraction_temperature: float = 0.0
    extraction_json_retry: bool = False

    extraction_groq_api_key: str = ""
    extraction_groq_model_name: str = "llama-3.3-70b-versatile"
    extraction_groq_timeout_seconds: float | None = None

    extraction_openai_api_key: str = ""
    extraction_openai_model_name: str = ""
    extraction_openai_timeout_seconds: float | None = None

    extraction_openai_compatible_api_key: str = ""
    extraction_openai_compatible_model_name: str = ""
    extraction_openai_compatible_base_url: str = ""
    extraction_openai_compatible_timeout_seconds: float | None = None

    self_entity_name: str = "Equicom Services, Inc."
    self_entity_tin: str = ""
    self_entity_address: str = ""

    dispatch_endpoint_url: str = "http://localhost:8080/rfp/records"
    dispatch_timeout_seconds: float | None = None
