from __future__ import annotations
from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Optional

from ..config import DEFAULT_EXPORT_CONFIG, ExportConfig
from ..core import DeclarativeConverter, EngineConfig
from .models import Order

MOVA_HEADERS: List[str] = [
    "通路訂單編號",    # 0
    "收貨人",          # 1
    "聯絡電話",        # 2
    "送貨地址",        # 3
    "備註",            # 4
    "品號",            # 5
    "金額合計",        # 6
    "數量",            # 7
    "單價",            # 8
    "出貨倉庫",        # 9
    "統一編號",        # 10
    "代收貨款",        # 11
    "業務員",          # 12
    "來回件",          # 13
    "附件",            # 14
    "運輸方式",        # 15
    "指定效期",        # 16
    "客戶品號",        # 17
    "ERP客戶代號",     # 18
    "是否指定倉庫",    # 19
    "發票號碼",        # 20
    "載具號碼",        # 21
    "發票開立日期",    # 22
    "發票開立時間",    # 23
    "統一編號(發票)",  # 24
    "統一編號抬頭",    # 25
    "通路訂單序號",    # 26
    "網站訂單編號",    # 27
    "Email",           # 28
]


def build_mova_mapping(config: Optional[ExportConfig] = None) -> Dict[str, Any]:
    """
    Column mapping from a finalized order record to the MOVA import sheet,
    one row per line item. Blank constants are columns the ERP fills itself.
    """
    cfg = config or DEFAULT_EXPORT_CONFIG
    blank = {"const": ""}
    values = [
        {"coalesce": [{"path": "payment_ref"}, {"path": "order_id"}], "skip_empty": True},
        {"path": "customer.name"},
        {"path": "customer.phone"},
        {"path": "customer.address"},
        blank,
        {"rel_path": "sku"},
        {"math": ["mul", {"rel_path": "price"}, {"rel_path": "quantity"}]},
        {"rel_path": "quantity"},
        {"rel_path": "price"},
        {"const": cfg.warehouse},
        blank,
        blank,
        {"const": cfg.salesperson},
        {"const": "N"},
        {"const": "N"},
        {"const": cfg.transport},
        blank,
        {"rel_path": "sku"},
        {"const": cfg.erp_customer_code},
        {"const": "N"},
        blank,
        {"path": "carrier_id"},
        blank,
        blank,
        {"path": "tax_id", "default": ""},
        {"path": "company_name", "default": ""},
        {"path": "order_id"},
        {"path": "shopify_id"},
        {"path": "email"},
    ]
    return {
        "explode": {"path": "items", "emit_root_when_empty": False},
        "columns": dict(zip(MOVA_HEADERS, values)),
        "schema": {
            "strict": False,
            "columns": {
                "金額合計": {"type": "number", "nullable": False, "min": 0},
                "數量": {"type": "int", "min": 0},
                "出貨倉庫": {"type": "str", "regex": r"^\S+$"},
            },
        },
    }


class ExportProjector:
    """Projects finalized orders onto the fixed 29-column MOVA layout."""

    def __init__(self, config: Optional[ExportConfig] = None, engine_config: Optional[EngineConfig] = None):
        self.config = config or DEFAULT_EXPORT_CONFIG
        self._converter = DeclarativeConverter(build_mova_mapping(self.config), config=engine_config)

    @staticmethod
    def _records(orders: Iterable[Order]) -> List[Dict[str, Any]]:
        return [asdict(o) for o in orders]

    def rows(self, orders: Iterable[Order]) -> List[List[Any]]:
        """Header row followed by one row per line item."""
        return [list(MOVA_HEADERS)] + self._converter.to_rows(self._records(orders))

    def to_dataframe(self, orders: Iterable[Order]):
        return self._converter.to_dataframe_batch(self._records(orders))

    def trace(self, order: Order) -> Dict[str, Any]:
        return self._converter.trace(asdict(order))


def project_orders(orders: Iterable[Order], config: Optional[ExportConfig] = None) -> List[List[Any]]:
    return ExportProjector(config).rows(orders)
