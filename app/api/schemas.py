"""Pydantic response schemas for the HTTP surface."""

from pydantic import BaseModel

from app.extraction.models import StructuredRecord
from app.processor.status import ProcessingStatus


class StatusResponse(BaseModel):
    """Snapshot of the processing status cell."""

    state: str
    phase: str | None = None
    message: str | None = None

    @classmethod
    def from_status(cls, status: ProcessingStatus) -> "StatusResponse":
        return cls(state=status.state.value, phase=status.phase, message=status.message)


class RecordResponse(BaseModel):
    """The structured record that was saved to the persistence endpoint."""

    payee: str | None = None
    tin: str | None = None
    address: str | None = None
    purpose: str | None = None
    category: str
    currency: str | None = None
    amount: float | None = None
    amountinwords: str | None = None
    accountnum: str | None = None
    mobilenum: str | None = None
    sib: str | None = None

    @classmethod
    def from_record(cls, record: StructuredRecord) -> "RecordResponse":
        return cls(**record.to_payload())


class ProcessResponse(BaseModel):
    """Result of a completed run."""

    status: StatusResponse
    record: RecordResponse | None = None


class HealthResponse(BaseModel):
    status: str
    version: str
    tesseract_available: bool
