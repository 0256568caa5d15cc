from .models import Customer, LineItem, Order, RawOrderRow
from .normalizers import clean_phone, format_address, parse_invoice_info, parse_amount, parse_quantity
from .aggregator import aggregate_orders, collect_orders
from .rules import OrderRule, SubtotalRule, ShippingThresholdRule, RuleEngine, default_rule_engine
from .projector import MOVA_HEADERS, ExportProjector, build_mova_mapping, project_orders

__all__ = [
    "Customer",
    "LineItem",
    "Order",
    "RawOrderRow",
    "clean_phone",
    "format_address",
    "parse_invoice_info",
    "parse_amount",
    "parse_quantity",
    "aggregate_orders",
    "collect_orders",
    "OrderRule",
    "SubtotalRule",
    "ShippingThresholdRule",
    "RuleEngine",
    "default_rule_engine",
    "MOVA_HEADERS",
    "ExportProjector",
    "build_mova_mapping",
    "project_orders",
]
