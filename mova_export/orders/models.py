from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List

# Raw export row, keyed by the Shopify CSV header.
RawOrderRow = Dict[str, str]


@dataclass
class LineItem:
    sku: str
    name: str
    quantity: int
    price: float
    is_system_addon: bool = False

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@dataclass
class Customer:
    name: str
    phone: str = ""
    address: str = ""
    city: str = ""
    zip: str = ""


@dataclass
class Order:
    order_id: str
    shopify_id: str
    payment_ref: str
    carrier_id: str
    customer: Customer
    tax_id: str = ""
    company_name: str = ""
    email: str = ""
    created_at: str = ""
    shipping_method: str = ""
    items: List[LineItem] = field(default_factory=list)
    subtotal: float = 0.0
    original_subtotal: float = 0.0
    shipping_fee: float = 0.0
    total: float = 0.0
    warnings: List[str] = field(default_factory=list)
    finalized: bool = False

    @property
    def real_items(self) -> List[LineItem]:
        return [it for it in self.items if not it.is_system_addon]
