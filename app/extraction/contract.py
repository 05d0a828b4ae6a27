"""Versioned rule set for turning OCR text into a StructuredRecord.

The prompt sent to the model is rendered from this contract, and the record
validator enforces the parts of it that can be checked without the model
(closed category set, currency codes, payee scoping, self-entity exclusion).
"""

import re
from dataclasses import dataclass, field

from app.extraction.models import RECORD_FIELDS, Category

CONTRACT_VERSION = "1.0"

SIB_LABELS: tuple[str, ...] = (
    "Invoice No",
    "Invoice Number",
    "Sales Invoice",
    "Official Receipt",
    "OR No",
    "SOA",
    "Billing No",
)

IGNORED_SIB_LABELS: tuple[str, ...] = (
    "Account Number",
    "Permit Number",
    "Acknowledgement Certificate",
    "REF No",
    "Control numbers unrelated to the invoice",
)

CURRENCY_SYMBOLS: dict[str, str] = {
    "P": "PHP",
    "₱": "PHP",
    "PHP": "PHP",
    "PESO": "PHP",
    "PESOS": "PHP",
    "$": "USD",
    "US$": "USD",
    "€": "EUR",
    "£": "GBP",
    "¥": "JPY",
}

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_CURRENCY_CODE_RE = re.compile(r"^[A-Za-z]{3}$")


def _fold(value: str) -> str:
    return _NON_ALNUM_RE.sub("", value.lower())


@dataclass(frozen=True)
class SelfEntity:
    """The operator's own organization, which is never the payee."""

    name: str
    tin: str = ""
    address: str = ""

    def matches(self, payee: str | None = None, tin: str | None = None) -> bool:
        """True if the payee name or TIN identifies this entity.

        Comparison ignores case, punctuation and whitespace.
        """
        if payee and self.name and _fold(payee) == _fold(self.name):
            return True
        if tin and self.tin and _fold(tin) == _fold(self.tin):
            return True
        return False

    def describe(self) -> str:
        parts = [f'"{self.name}"']
        if self.tin:
            parts.append(f"TIN {self.tin}")
        if self.address:
            parts.append(f"address {self.address}")
        return ", ".join(parts)


@dataclass(frozen=True)
class ExtractionContract:
    """Rules the model must follow and the validator enforces."""

    self_entity: SelfEntity
    version: str = CONTRACT_VERSION
    record_fields: tuple[str, ...] = RECORD_FIELDS
    sib_labels: tuple[str, ...] = SIB_LABELS
    ignored_sib_labels: tuple[str, ...] = IGNORED_SIB_LABELS
    categories: tuple[Category, ...] = tuple(Category)
    default_category: Category = Category.OTHERS
    currency_symbols: dict[str, str] = field(default_factory=lambda: dict(CURRENCY_SYMBOLS))

    def render_system_prompt(self, template: str) -> str:
        """Fill the prompt template's placeholders from this contract."""
        return template.format(
            contract_version=self.version,
            record_fields=", ".join(self.record_fields),
            self_entity=self.self_entity.describe(),
            sib_labels=", ".join(f'"{label}"' for label in self.sib_labels),
            ignored_sib_labels=", ".join(self.ignored_sib_labels),
            category_list="\n".join(f'  "{category.value}"' for category in self.categories),
            category_payroll=Category.PAYROLL_REMITTANCE.value,
            category_manpower=Category.MANPOWER_CONSULTANT.value,
            category_default=self.default_category.value,
        )

    def resolve_category(self, raw: str | None) -> Category:
        """Map a model-provided category onto the closed set.

        Unknown or missing values fall back to the default category.
        """
        if raw:
            folded = _fold(raw)
            for category in self.categories:
                if _fold(category.value) == folded:
                    return category
        return self.default_category

    def normalize_currency(self, raw: str | None) -> str | None:
        """Return a 3-letter currency code, or None if undeterminable."""
        if raw is None:
            return None
        token = raw.strip()
        if not token:
            return None
        mapped = self.currency_symbols.get(token.upper()) or self.currency_symbols.get(token)
        if mapped is not None:
            return mapped
        if _CURRENCY_CODE_RE.match(token):
            return token.upper()
        return None
