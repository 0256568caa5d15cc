from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional

from .models import Customer, LineItem, Order, RawOrderRow
from .normalizers import clean_phone, format_address, parse_amount, parse_invoice_info, parse_quantity

logger = logging.getLogger(__name__)

UNKNOWN_CUSTOMER = "Unknown"


def _first(row: RawOrderRow, *keys: str) -> str:
    for k in keys:
        v = row.get(k)
        if v:
            return v
    return ""


def _warn(order: Order, msg: str) -> None:
    order.warnings.append(msg)
    logger.debug("Order %s: %s", order.order_id, msg)


def _amount(order: Order, row: RawOrderRow, key: str) -> float:
    val = parse_amount(row.get(key))
    if val is None:
        _warn(order, f"{key}: could not parse {row.get(key)!r}, using 0")
        return 0.0
    return val


def _quantity(order: Order, row: RawOrderRow, key: str) -> int:
    val = parse_quantity(row.get(key))
    if val is None:
        _warn(order, f"{key}: could not parse {row.get(key)!r}, using 0")
        return 0
    return val


def _new_order(order_id: str, row: RawOrderRow) -> Order:
    tax_id, company_name = parse_invoice_info(row.get("Note Attributes"))

    order = Order(
        order_id=order_id,
        shopify_id=row.get("Id") or "",
        payment_ref=_first(row, "Payment References", "Payment Reference"),
        # the ERP reads the carrier (e-invoice) number from the contact email
        carrier_id=row.get("Email") or "",
        tax_id=tax_id,
        company_name=company_name,
        email=row.get("Email") or "",
        created_at=row.get("Created at") or "",
        shipping_method=row.get("Shipping Method") or "",
        customer=Customer(
            name=_first(row, "Shipping Name", "Billing Name") or UNKNOWN_CUSTOMER,
            phone=clean_phone(_first(row, "Shipping Phone", "Billing Phone")),
            address=format_address(row),
            city=_first(row, "Shipping City", "Billing City"),
            zip=_first(row, "Shipping Zip", "Billing Zip"),
        ),
    )
    order.original_subtotal = _amount(order, row, "Subtotal")
    order.shipping_fee = _amount(order, row, "Shipping")
    order.total = _amount(order, row, "Total")
    return order


def _line_item(order: Order, row: RawOrderRow) -> Optional[LineItem]:
    name = row.get("Lineitem name")
    if not name:
        return None

    quantity = _quantity(order, row, "Lineitem quantity")
    price = _amount(order, row, "Lineitem price")
    # negative values are exported as-is
    for key, val in (("Lineitem quantity", quantity), ("Lineitem price", price)):
        if val < 0:
            _warn(order, f"{key}: negative value {val}")

    return LineItem(sku=row.get("Lineitem sku") or "", name=name, quantity=quantity, price=price)


def aggregate_orders(rows: Iterable[RawOrderRow]) -> Dict[str, Order]:
    """
    Group line-item rows by order id ('Name').

    The returned dict keeps first-seen order of the ids, and each order keeps its
    items in row order. Rows without an order id are skipped.
    """
    orders: Dict[str, Order] = {}

    for row in rows:
        order_id = row.get("Name")
        if not order_id:
            continue

        order = orders.get(order_id)
        if order is None:
            order = _new_order(order_id, row)
            orders[order_id] = order

        item = _line_item(order, row)
        if item is not None:
            order.items.append(item)

    return orders


def collect_orders(rows: Iterable[RawOrderRow]) -> List[Order]:
    return list(aggregate_orders(rows).values())
