from __future__ import annotations

from typing import Any, Dict

from ..registry import register_operation
from ..utils import to_float, mul_all, is_blank


def _op_path(rule: Dict[str, Any], ctx, eval_rule, apply_tail_ops):
    val = ctx.get_from_root(rule["path"])
    return apply_tail_ops(val, rule)
register_operation("path", _op_path)

def _op_rel_path(rule: Dict[str, Any], ctx, eval_rule, apply_tail_ops):
    val = ctx.get_from_rel(rule["rel_path"])
    return apply_tail_ops(val, rule)
register_operation("rel_path", _op_rel_path)

def _op_const(rule: Dict[str, Any], ctx, eval_rule, apply_tail_ops):
    return apply_tail_ops(rule.get("const"), rule)
register_operation("const", _op_const)

def _op_coalesce(rule: Dict[str, Any], ctx, eval_rule, apply_tail_ops):
    """
    First candidate that is not None. With "skip_empty": true, empty strings
    are passed over as well:
      {"coalesce": [{"path": "payment_ref"}, {"path": "order_id"}], "skip_empty": true}
    """
    skip_empty = bool(rule.get("skip_empty", False))
    for candidate in rule.get("coalesce", []):
        v = eval_rule(candidate)
        if v is None or (skip_empty and is_blank(v)):
            continue
        return apply_tail_ops(v, rule)
    return apply_tail_ops(None, rule)
register_operation("coalesce", _op_coalesce)


def _op_math(rule: Dict[str, Any], ctx, eval_rule, apply_tail_ops):
    spec = rule["math"]
    if not (isinstance(spec, list) and len(spec) >= 2):
        return apply_tail_ops(None, rule)
    op = spec[0]
    args = [to_float(eval_rule(a)) for a in spec[1:]]
    # only "mul" is supported; line totals are price x quantity
    val = mul_all(args) if op == "mul" and not any(a is None for a in args) else None
    return apply_tail_ops(val, rule)
register_operation("math", _op_math)
