"""Shapes the model's parsed JSON into a StructuredRecord.

Missing keys resolve to null and unknown keys are dropped. Values that
cannot be trusted are nulled according to the extraction contract;
values of the wrong JSON type are rejected.
"""

import re
from typing import Any

from app.extraction.contract import ExtractionContract
from app.extraction.exceptions import ExtractionValidationError
from app.extraction.models import RECORD_FIELDS, Category, StructuredRecord
from app.logging.logger import Log

_TEXT_FIELDS = ("payee", "tin", "address", "purpose", "amountinwords")
_IDENTIFIER_FIELDS = ("accountnum", "mobilenum", "sib")
_AMOUNT_TOKEN_RE = re.compile(r"-?\d[\d,]*(?:\.\d+)?")


def validate_and_build(data: dict[str, Any], contract: ExtractionContract) -> StructuredRecord:
    """Validate parsed model output and build a StructuredRecord.

    Raises:
        ExtractionValidationError: if a field holds an unusable JSON type
            or the amount cannot be read as a number.
    """
    _warn_unknown_fields(data)

    values: dict[str, Any] = {}
    for name in _TEXT_FIELDS:
        values[name] = _build_text(data.get(name), name)
    for name in _IDENTIFIER_FIELDS:
        values[name] = _build_text(data.get(name), name)

    values["amount"] = _build_amount(data.get("amount"))
    if values["amount"] is None:
        values["amountinwords"] = None

    values["currency"] = contract.normalize_currency(_build_text(data.get("currency"), "currency"))
    values["category"] = _build_category(data.get("category"), contract)

    _scope_payee(values, contract)
    return StructuredRecord(**values)


def _warn_unknown_fields(data: dict[str, Any]) -> None:
    unknown = sorted(set(data) - set(RECORD_FIELDS))
    if unknown:
        Log.warning(f"Dropping unexpected record fields: {unknown}")


def _build_text(raw: Any, name: str) -> str | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ExtractionValidationError(f"'{name}' must be a string or null")
    if isinstance(raw, (int, float)):
        return _format_number(raw)
    if not isinstance(raw, str):
        raise ExtractionValidationError(f"'{name}' must be a string or null")
    text = raw.strip()
    if not text or text.lower() in ("null", "none", "n/a"):
        return None
    return text


def _format_number(raw: int | float) -> str:
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw)


def _build_amount(raw: Any) -> float | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ExtractionValidationError("'amount' must be a number or null")
    if isinstance(raw, (int, float)):
        return float(raw)
    if not isinstance(raw, str):
        raise ExtractionValidationError("'amount' must be a number or null")
    tokens = _AMOUNT_TOKEN_RE.findall(raw)
    if not tokens:
        if raw.strip().lower() in ("", "null", "none", "n/a"):
            return None
        raise ExtractionValidationError(f"'amount' is not numeric: {raw!r}")
    if len(tokens) > 1:
        raise ExtractionValidationError(f"'amount' holds more than one number: {raw!r}")
    return float(tokens[0].replace(",", ""))


def _build_category(raw: Any, contract: ExtractionContract) -> Category:
    if raw is not None and not isinstance(raw, str):
        raise ExtractionValidationError("'category' must be a string or null")
    category = contract.resolve_category(raw)
    if raw is not None and category.value != raw:
        Log.warning(f"Category {raw!r} resolved to {category.value!r}")
    return category


def _scope_payee(values: dict[str, Any], contract: ExtractionContract) -> None:
    """Null payee, tin and address together when the payee is unusable."""
    payee = values["payee"]
    if payee is None or contract.self_entity.matches(payee=payee, tin=values["tin"]):
        if payee is not None:
            Log.warning("Model selected the self-entity as payee; clearing payee fields")
        values["payee"] = None
        values["tin"] = None
        values["address"] = None
