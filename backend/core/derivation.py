"""
Validation and derived fields for inventory records.

Each function takes a plain dict (the full record about to be written),
returns a new dict with defaults and derived values filled in, and raises
ValidationError listing every offending field. Repositories call them
before every insert or update.
"""
from typing import Any, Dict, Iterable, Optional

from core.config import InventoryConfig, start_case
from core.errors import ValidationError


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _strip(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _non_negative(record: Dict, fields: Iterable[str], errors: Dict[str, str], default=0):
    for f in fields:
        v = record.get(f)
        if v is None:
            if default is None:
                errors[f] = "field is required"
                continue
            record[f] = default
            continue
        try:
            v = float(v)
        except (TypeError, ValueError):
            errors[f] = "must be a number"
            continue
        if v < 0:
            errors[f] = "must be >= 0"
            continue
        record[f] = int(v) if v.is_integer() else v


def _required(record: Dict, fields: Iterable[str], errors: Dict[str, str]):
    for f in fields:
        if _is_empty(record.get(f)):
            errors[f] = "field is required"


def item_code_from_name(name: str) -> str:
    """'Bar Soap' -> 'BS'"""
    return "".join(word[0] for word in name.split() if word).upper()


def validate_and_derive_item(record: Dict, config: InventoryConfig) -> Dict:
    out = dict(record)
    errors: Dict[str, str] = {}

    out["type"] = _strip(out.get("type")) or config.default_item_type
    if out["type"] not in config.item_types:
        errors["type"] = f"must be one of {', '.join(config.item_types)}"

    name = _strip(out.get("name"))
    if not name:
        errors["name"] = "field is required"
    else:
        out["name"] = start_case(name)

    code = _strip(out.get("code"))
    if not code and name:
        code = item_code_from_name(name)
    out["code"] = code.upper() if code else None
    if not out["code"] and "name" not in errors:
        errors["code"] = "field is required"

    # color always follows the type
    if out["type"]:
        out["color"] = config.color_for(out["type"])

    uom = _strip(out.get("uom")) or config.default_uom
    out["uom"] = uom.lower()
    if out["uom"] not in config.item_uoms:
        errors["uom"] = f"must be one of {', '.join(config.item_uoms)}"

    out["description"] = _strip(out.get("description"))
    out["icon"] = _strip(out.get("icon"))
    out["expirable"] = bool(out.get("expirable") or False)

    _non_negative(out, ("min_stock_allowed", "max_stock_allowed"), errors)

    if errors:
        raise ValidationError(errors)
    return out


def validate_and_derive_stock(record: Dict) -> Dict:
    out = dict(record)
    errors: Dict[str, str] = {}
    _required(out, ("store_id", "owner_id", "item_id"), errors)
    _non_negative(out, ("quantity", "min_allowed", "max_allowed"), errors)
    if errors:
        raise ValidationError(errors)
    return out


def backfill_from_stock(record: Dict, stock: Any) -> Dict:
    """Copy item/store from the referenced stock when the record leaves them unset."""
    out = dict(record)
    if stock is None:
        return out
    if _is_empty(out.get("item_id")):
        out["item_id"] = stock.item_id
    if _is_empty(out.get("store_id")):
        out["store_id"] = stock.store_id
    return out


def validate_and_derive_adjustment(record: Dict, config: InventoryConfig, stock: Any = None) -> Dict:
    out = backfill_from_stock(record, stock)
    errors: Dict[str, str] = {}

    out["type"] = _strip(out.get("type"))
    if not out["type"]:
        errors["type"] = "field is required"
    elif out["type"] not in config.adjustment_types:
        errors["type"] = f"must be one of {', '.join(config.adjustment_types)}"

    out["reason"] = _strip(out.get("reason"))
    if not out["reason"]:
        errors["reason"] = "field is required"
    elif out["reason"] not in config.adjustment_reasons:
        errors["reason"] = f"must be one of {', '.join(config.adjustment_reasons)}"

    _required(out, ("item_id", "stock_id", "store_id", "party_id"), errors)
    _non_negative(out, ("quantity", "cost"), errors, default=None)

    out["remarks"] = _strip(out.get("remarks"))
    if not out["remarks"]:
        errors["remarks"] = "field is required"

    if errors:
        raise ValidationError(errors)
    return out
