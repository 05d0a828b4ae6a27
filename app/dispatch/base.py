from abc import ABC, abstractmethod

from app.extraction.models import StructuredRecord


class BaseRecordDispatcher(ABC):
    """Contract for all record persistence adapters."""

    @abstractmethod
    def dispatch(self, record: StructuredRecord) -> None:
        """Hand one record to the persistence endpoint.

        Raises:
            DispatchError: if the endpoint does not acknowledge the record.
        """

    def close(self) -> None:
        """Release transport resources. Adapters without any keep the default."""
