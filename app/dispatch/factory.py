from app.config.settings import Settings
from app.dispatch.base import BaseRecordDispatcher
from app.dispatch.http_dispatcher import HttpRecordDispatcher


class RecordDispatcherFactory:
    """Creates the record dispatcher for the configured endpoint."""

    @classmethod
    def create(cls, settings: Settings) -> BaseRecordDispatcher:
        url = settings.dispatch_endpoint_url.strip()
        if not url.startswith(("http://", "https://")):
            raise ValueError(
                f"dispatch_endpoint_url must be an http(s) URL, got '{url}'"
            )
        return HttpRecordDispatcher(
            endpoint_url=url,
            timeout_seconds=settings.dispatch_timeout_seconds,
        )
