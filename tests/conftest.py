from typing import Dict

import pytest

from mova_export.orders import Customer, LineItem, Order


def make_row(**overrides) -> Dict[str, str]:
    row = {
        "Name": "MOVA-1001",
        "Id": "6274000001",
        "Email": "buyer@example.com",
        "Created at": "2024-10-01 10:00:00 +0800",
        "Shipping Method": "Standard",
        "Subtotal": "100.00",
        "Shipping": "0.00",
        "Total": "100.00",
        "Payment References": "",
        "Payment Reference": "",
        "Note Attributes": "",
        "Billing Name": "Billing Person",
        "Billing Street": "Billing Rd 1",
        "Billing City": "Taichung",
        "Billing Zip": "400",
        "Billing Phone": "",
        "Shipping Name": "Wang Xiaoming",
        "Shipping Street": "No. 1, Zhongxiao Rd",
        "Shipping City": "Taipei",
        "Shipping Zip": "100",
        "Shipping Phone": "+886 912-345-678",
        "Lineitem name": "Widget",
        "Lineitem sku": "A1",
        "Lineitem quantity": "1",
        "Lineitem price": "100.00",
    }
    row.update(overrides)
    return row


@pytest.fixture
def row_factory():
    return make_row


@pytest.fixture
def simple_order():
    return Order(
        order_id="MOVA-1001",
        shopify_id="6274000001",
        payment_ref="",
        carrier_id="buyer@example.com",
        email="buyer@example.com",
        customer=Customer(name="Wang Xiaoming", phone="0912345678", address="No. 1, Zhongxiao Rd"),
        items=[LineItem(sku="A1", name="Widget", quantity=2, price=50.0)],
    )
