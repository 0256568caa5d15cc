from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional

# Column operation handler signature:
# handler(rule: dict,
#         ctx: EvaluationContext,
#         eval_rule: Callable[[Any, Optional[Any]], Any],   # eval_rule(inner, ctx_override=None)
#         apply_tail_ops: Callable[[Any, Dict[str, Any]], Any]
# ) -> Any

OperationHandler = Callable[[Dict[str, Any], Any, Callable[..., Any], Callable[[Any, Dict[str, Any]], Any]], Any]


class OperationRegistry:
    """
    Maps the head key of a column rule ('path', 'const', 'coalesce', ...) to the
    handler that evaluates it. The first registered key found in a rule wins.
    """
    def __init__(self) -> None:
        self._handlers: Dict[str, OperationHandler] = {}
        self._order: List[str] = []

    def register(self, head_key: str, handler: OperationHandler) -> None:
        if not head_key or not isinstance(head_key, str):
            raise ValueError("head_key must be a non-empty string.")

        self._handlers[head_key] = handler
        if head_key not in self._order:
            self._order.append(head_key)

    def get_match_key(self, rule: Dict[str, Any]) -> Optional[str]:
        for k in self._order:
            if k in rule:
                return k

        return None

    def get_handler(self, key: str) -> OperationHandler:
        return self._handlers[key]


_global_registry: Optional[OperationRegistry] = None


def get_registry() -> OperationRegistry:
    global _global_registry
    if _global_registry is None:
        _global_registry = OperationRegistry()
        # built-in column ops register themselves on import
        from .ops import builtin  # noqa: F401

    return _global_registry


def register_operation(head_key: str, handler: OperationHandler) -> None:
    get_registry().register(head_key, handler)
