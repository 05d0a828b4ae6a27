from dataclasses import asdict, dataclass
from enum import StrEnum


class Category(StrEnum):
    """Closed set of RFP categories a record may be filed under."""

    PAYROLL_REMITTANCE = "training allowance/final pay/ Government Remittances"
    MANPOWER_CONSULTANT = "Manpower / Consultant"
    OTHERS = "Others"


RECORD_FIELDS: tuple[str, ...] = (
    "payee",
    "tin",
    "address",
    "purpose",
    "category",
    "currency",
    "amount",
    "amountinwords",
    "accountnum",
    "mobilenum",
    "sib",
)


@dataclass(frozen=True)
class StructuredRecord:
    """One request-for-payment record derived from a whole upload batch."""

    payee: str | None = None
    tin: str | None = None
    address: str | None = None
    purpose: str | None = None
    category: Category = Category.OTHERS
    currency: str | None = None
    amount: float | None = None
    amountinwords: str | None = None
    accountnum: str | None = None
    mobilenum: str | None = None
    sib: str | None = None

    def to_payload(self) -> dict[str, object]:
        """JSON body sent to the persistence endpoint, keyed by RECORD_FIELDS."""
        payload = asdict(self)
        payload["category"] = self.category.value
        return {key: payload[key] for key in RECORD_FIELDS}
