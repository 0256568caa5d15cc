from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ExportConfig:
    """
    Business constants for the MOVA import sheet.

    The defaults are the values agreed with the downstream ERP; override them only
    when the ERP side changes its warehouse, salesperson or fee article.
    """
    shipping_threshold: float = 1000
    shipping_fee_sku: str = "Z90001"
    shipping_fee_name: str = "運費"
    shipping_fee_price: float = 120

    warehouse: str = "XF1400"
    salesperson: str = "6301"
    transport: str = "2"
    erp_customer_code: str = "F91000000"


DEFAULT_EXPORT_CONFIG = ExportConfig()
