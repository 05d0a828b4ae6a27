import uvicorn

from app.api.app import create_app
from app.config.settings import Settings
from app.logging.logger import Log
from app.processor.orchestrator import build_orchestrator


def main() -> None:
    """Entry point: load settings -> build pipeline -> serve the API."""
    settings = Settings()
    Log.configure(settings.log_level)
    orchestrator = build_orchestrator(settings)
    Log.info(
        "Starting RFP document processor",
        env=settings.app_env,
        provider=settings.extraction_provider,
        pdf_engine=settings.pdf_engine,
    )
    api = create_app(orchestrator, tesseract_cmd=settings.tesseract_cmd)
    uvicorn.run(api, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
