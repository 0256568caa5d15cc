"""
Pure field normalizers for Shopify export values.

None of these raise: malformed input yields an empty string, zero, or None
(for the numeric parsers, so the caller can tell "blank" from "garbage").
"""
from __future__ import annotations
import re
from typing import Dict, Optional, Tuple

_NON_DIGIT = re.compile(r"[^\d]")

_INVOICE_TYPE = re.compile(r"發票種類\(InvoiceType\):\s*([^\n\r]+)")
_COMPANY_ID = re.compile(r"統一編號\(CompanyId\):\s*(\d+)")
_COMPANY_NAME = re.compile(r"公司名稱\(CompanyName\):\s*([^\n\r]+)")

_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def clean_phone(phone: Optional[str]) -> str:
    """
    Digits-only local phone number.

    "+886 912-345-678" -> "0912345678", "912345678" -> "0912345678".
    """
    if not phone:
        return ""

    p = _NON_DIGIT.sub("", phone)

    if p.startswith("886"):
        p = "0" + p[3:]
    elif p.startswith("9") and len(p) == 9:
        p = "0" + p

    return p


def format_address(row: Dict[str, str]) -> str:
    # shipping street is trimmed, billing street is passed through as-is
    shipping_street = row.get("Shipping Street")
    if shipping_street:
        return shipping_street.strip()

    return row.get("Billing Street") or ""


def parse_invoice_info(attrs: Optional[str]) -> Tuple[str, str]:
    """
    Extract (tax_id, company_name) from the 'Note Attributes' blob.

    The blob carries bilingual pairs such as::

        發票種類(InvoiceType): company
        統一編號(CompanyId): 12345678
        公司名稱(CompanyName): Acme Co

    Only a company-type invoice yields values; any other type, or no type at all,
    gives ("", ""). Each company field is optional on its own.
    """
    if not attrs:
        return "", ""

    type_match = _INVOICE_TYPE.search(attrs)
    invoice_type = type_match.group(1).strip().lower() if type_match else ""
    if invoice_type != "company":
        return "", ""

    tax_match = _COMPANY_ID.search(attrs)
    name_match = _COMPANY_NAME.search(attrs)

    return (
        tax_match.group(1).strip() if tax_match else "",
        name_match.group(1).strip() if name_match else "",
    )


def parse_amount(raw: Optional[str]) -> Optional[float]:
    """Leading decimal number of `raw`; 0.0 when blank, None when no number is found."""
    if raw is None or str(raw).strip() == "":
        return 0.0

    m = _FLOAT_PREFIX.match(str(raw))
    if not m:
        return None
    return float(m.group(1))


def parse_quantity(raw: Optional[str]) -> Optional[int]:
    """Leading integer of `raw`; 0 when blank, None when no integer is found."""
    if raw is None or str(raw).strip() == "":
        return 0

    m = _INT_PREFIX.match(str(raw))
    if not m:
        return None
    return int(m.group(1))
