"""
Versioned loader for stored calculator states.

Saved states come in two shapes. Version 1 describes a single product with
top-level fields; version 2 carries a ``products`` list. Both are folded
into a CalcInput here so the calculator only ever sees one shape.
"""

from collections.abc import Mapping
from typing import Any

from marginbook.core.entities.calculation import (
    Allocation,
    CalcInput,
    Currency,
    ExtraCost,
    ExtraCostKind,
    ProductInput,
)
from marginbook.core.exceptions import UnsupportedSchemaVersionError
from marginbook.core.services.numeric import positive_rate, sanitize_number

LEGACY_SCHEMA_VERSION = 1
CURRENT_SCHEMA_VERSION = 2
SUPPORTED_SCHEMA_VERSIONS = (LEGACY_SCHEMA_VERSION, CURRENT_SCHEMA_VERSION)

# Stored field name -> ProductInput field
_PRODUCT_FIELDS = {
    "quantity": "quantity",
    "unitSellPrice": "unit_sell_price",
    "unitSupplierCost": "unit_supplier_cost",
    "unitProductionOverhead": "unit_production_overhead",
    "markupPct": "markup_pct",
}


def default_calc_state() -> CalcInput:
    """Fresh calculator: NGN base, rate 1, one blank product, no extras."""
    return CalcInput(products=[ProductInput(name="")])


def detect_schema_version(raw: Any) -> int:
    """Version 2 when a non-empty ``products`` list is present, else 1."""
    if isinstance(raw, Mapping):
        products = raw.get("products")
        if isinstance(products, list) and products:
            return CURRENT_SCHEMA_VERSION
    return LEGACY_SCHEMA_VERSION


def _enum_or(enum_cls, value: Any, fallback):
    try:
        return enum_cls(value)
    except ValueError:
        return fallback


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _product_from(raw: Mapping, name_key: str) -> ProductInput:
    fields: dict[str, Any] = {
        target: sanitize_number(raw.get(source)) for source, target in _PRODUCT_FIELDS.items()
    }
    product_id = _optional_str(raw.get("id"))
    if product_id:
        fields["id"] = product_id
    return ProductInput(name=_optional_str(raw.get(name_key)), **fields)


def _extra_from(raw: Mapping, base_currency: Currency) -> ExtraCost:
    fields: dict[str, Any] = {
        "label": raw.get("label") if isinstance(raw.get("label"), str) else "",
        "kind": _enum_or(ExtraCostKind, raw.get("kind"), ExtraCostKind.AMOUNT),
        "allocation": _enum_or(Allocation, raw.get("allocation"), Allocation.PER_ORDER),
        "currency": _enum_or(Currency, raw.get("currency"), base_currency),
    }
    if raw.get("amount") is not None:
        fields["amount"] = sanitize_number(raw.get("amount"))
    if raw.get("percent") is not None:
        fields["percent"] = sanitize_number(raw.get("percent"))
    extra_id = _optional_str(raw.get("id"))
    if extra_id:
        fields["id"] = extra_id
    return ExtraCost(**fields)


def normalize_calc_state(raw: Any, schema_version: int | None = None) -> CalcInput:
    """
    Fold a stored calculator state of any supported version into a CalcInput.

    Args:
        raw: Decoded state, usually a dict with camelCase keys
        schema_version: Version the state was saved with; detected when None

    Returns:
        Normalized CalcInput

    Raises:
        UnsupportedSchemaVersionError: If the version is not 1 or 2
    """
    if schema_version is None:
        schema_version = detect_schema_version(raw)
    if schema_version not in SUPPORTED_SCHEMA_VERSIONS:
        raise UnsupportedSchemaVersionError(schema_version, list(SUPPORTED_SCHEMA_VERSIONS))

    if not isinstance(raw, Mapping):
        return default_calc_state()

    base_currency = _enum_or(Currency, raw.get("baseCurrency"), Currency.NGN)

    products: list[ProductInput] = []
    if schema_version == CURRENT_SCHEMA_VERSION:
        items = raw.get("products")
        if isinstance(items, list):
            products = [_product_from(p, "name") for p in items if isinstance(p, Mapping)]
    if not products:
        products = [_product_from(raw, "productName")]

    extras_raw = raw.get("extras")
    extras = [
        _extra_from(e, base_currency)
        for e in (extras_raw if isinstance(extras_raw, list) else [])
        if isinstance(e, Mapping)
    ]

    return CalcInput(
        base_currency=base_currency,
        usd_rate=positive_rate(raw.get("usdRate")),
        products=products,
        extras=extras,
        target_margin_pct=sanitize_number(raw.get("targetMarginPct")),
    )
