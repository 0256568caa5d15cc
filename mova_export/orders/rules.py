from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from ..config import DEFAULT_EXPORT_CONFIG, ExportConfig
from .models import LineItem, Order


class OrderRule(ABC):
    # Base class for post-aggregation order adjustments.
    # Each rule may mutate the order in place.

    @abstractmethod
    def apply(self, order: Order, config: ExportConfig) -> None:
        pass


class SubtotalRule(OrderRule):
    # Subtotal is always rebuilt from the line items; the exported
    # 'Subtotal' column is kept only as original_subtotal.

    def apply(self, order, config):
        order.subtotal = sum(it.line_total for it in order.real_items)


class ShippingThresholdRule(OrderRule):
    """
    Orders below the free-shipping threshold get a flat shipping-fee item.

    The fee item is appended after the subtotal is computed and is not added
    back into it.
    """

    def apply(self, order, config):
        if any(it.is_system_addon and it.sku == config.shipping_fee_sku for it in order.items):
            return

        if order.subtotal < config.shipping_threshold:
            order.items.append(
                LineItem(
                    sku=config.shipping_fee_sku,
                    name=config.shipping_fee_name,
                    quantity=1,
                    price=config.shipping_fee_price,
                    is_system_addon=True,
                )
            )


class RuleEngine:
    # Applies the registered rules in sequence, once per order.

    def __init__(self, rules: Optional[Iterable[OrderRule]] = None, config: Optional[ExportConfig] = None):
        self.rules: List[OrderRule] = list(rules) if rules is not None else []
        self.config = config or DEFAULT_EXPORT_CONFIG

    def add_rule(self, rule: OrderRule):
        self.rules.append(rule)

    def finalize(self, order: Order) -> Order:
        if order.finalized:
            return order

        for rule in self.rules:
            rule.apply(order, self.config)

        order.finalized = True
        return order

    def finalize_all(self, orders: Iterable[Order]) -> List[Order]:
        return [self.finalize(o) for o in orders]


def default_rule_engine(config: Optional[ExportConfig] = None) -> RuleEngine:
    return RuleEngine([SubtotalRule(), ShippingThresholdRule()], config=config)
