import httpx

from app.dispatch.base import BaseRecordDispatcher
from app.dispatch.exceptions import DispatchError, DispatchNetworkError
from app.extraction.models import StructuredRecord
from app.logging.logger import Log


class HttpRecordDispatcher(BaseRecordDispatcher):
    """POSTs records as JSON to a remote endpoint; any 2xx is success."""

    def __init__(
        self,
        *,
        endpoint_url: str,
        timeout_seconds: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._endpoint_url = endpoint_url
        self._client = client if client is not None else httpx.Client(timeout=timeout_seconds)

    def dispatch(self, record: StructuredRecord) -> None:
        try:
            response = self._client.post(
                self._endpoint_url,
                json=record.to_payload(),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise DispatchNetworkError(f"Server unreachable: {exc}") from exc

        if not response.is_success:
            raise DispatchError(f"Server failed: {response.reason_phrase}")
        Log.info(
            f"Record saved to {self._endpoint_url}",
            status_code=response.status_code,
        )

    def close(self) -> None:
        self._client.close()
