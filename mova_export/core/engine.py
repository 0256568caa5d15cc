from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
import logging
import re
import pandas as pd

from .backends.pandas import DataFrameBackend, PandasBackend
from ..exceptions import MappingError
from .context import EvaluationContext
from .registry import get_registry, OperationRegistry


ErrorMode = str  # "null" | "default" | "raise" | "warn"

# dtype check per schema "type"
_DTYPE_CHECKS: Dict[str, Callable[[pd.Series], bool]] = {
    "str": lambda s: s.dtype == "object" or pd.api.types.is_string_dtype(s),
    "int": pd.api.types.is_integer_dtype,
    "number": pd.api.types.is_numeric_dtype,
}

@dataclass
class EngineConfig:
    default_on_error: ErrorMode = "null"
    strict_schema: bool = False
    backend: DataFrameBackend = field(default_factory=PandasBackend)

    logger: Optional[logging.Logger] = None


class DeclarativeConverter:
    """
    Converts nested records into fixed-order rows using a declarative column mapping.

    A mapping looks like:

        {
          "explode": {"path": "items", "emit_root_when_empty": false},
          "columns": {
            "order": {"path": "order_id"},
            "sku":   {"rel_path": "sku"},
            "total": {"math": ["mul", {"rel_path": "price"}, {"rel_path": "quantity"}]},
            "site":  {"const": "XF1400"}
          }
        }

    Column order in the output follows the insertion order of 'columns'.
    """
    def __init__(
        self,
        mapping: Dict[str, Any],
        *,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self._validate_mapping(mapping)
        self.mapping: Dict[str, Any] = mapping

        self._schema: Optional[Dict[str, Any]] = mapping.get("schema")

        self._registry: OperationRegistry = get_registry()
        self._config: EngineConfig = config or EngineConfig()
        self._validate_schema(self._schema)

    @property
    def columns(self) -> List[str]:
        return list(self.mapping["columns"].keys())

    def to_rows(self, records: Iterable[Dict[str, Any]]) -> List[List[Any]]:
        """
        Positional rows (no header), one per emitted record row, in column order.

        The output schema, when the mapping has one, is checked the same way as
        for the DataFrame outputs.
        """
        rows: List[Dict[str, Any]] = []
        for rec in records:
            rows.extend(self._build_rows_for_record(rec))

        if self._schema:
            self._apply_output_schema_if_any(self._config.backend.to_dataframe(rows, columns=self.columns))

        return [[row[c] for c in self.columns] for row in rows]

    def to_dataframe_single(self, record: Dict[str, Any]):
        rows = self._build_rows_for_record(record)
        df = self._config.backend.to_dataframe(rows, columns=self.columns)
        self._apply_output_schema_if_any(df)
        return df

    def to_dataframe_batch(self, records: Iterable[Dict[str, Any]]):
        rows: List[Dict[str, Any]] = []
        for rec in records:
            rows.extend(self._build_rows_for_record(rec))

        df = self._config.backend.to_dataframe(rows, columns=self.columns)
        self._apply_output_schema_if_any(df)
        return df

    def to_dataframe(self, data):
        if isinstance(data, dict):
            return self.to_dataframe_single(data)

        if isinstance(data, list):
            return self.to_dataframe_batch(data)

        raise TypeError("data must be Dict or List[Dict].")

    def trace(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Per-row, per-column evaluation tree for one record."""
        ctx_rows, traces = self._build_rows_with_trace(record)
        return {"rows_emitted": len(ctx_rows), "columns_trace": traces}

    @staticmethod
    def _validate_mapping(mapping: Dict[str, Any]) -> None:
        if not isinstance(mapping, dict):
            raise MappingError("Mapping must be an object (dict).")

        cols = mapping.get("columns")
        if not isinstance(cols, dict) or not cols:
            raise MappingError("Mapping must contain a non-empty 'columns' object.")

        exp = mapping.get("explode")
        if exp is not None:
            if not isinstance(exp, dict):
                raise MappingError("'explode' must be an object.")

            if "path" not in exp or not isinstance(exp["path"], str) or not exp["path"]:
                raise MappingError("'explode.path' must be a non-empty string.")

            if "emit_root_when_empty" in exp and not isinstance(exp["emit_root_when_empty"], bool):
                raise MappingError("'explode.emit_root_when_empty' must be a boolean if set.")

        if "schema" in mapping and not isinstance(mapping["schema"], dict):
            raise MappingError("'schema' must be an object (dict) if present.")

    @staticmethod
    def _validate_schema(schema: Optional[Dict[str, Any]]) -> None:
        if not schema:
            return

        cols = schema.get("columns")
        if cols is not None and not isinstance(cols, dict):
            raise MappingError("'schema.columns' must be an object (dict) if present.")

        if "strict" in schema and not isinstance(schema["strict"], bool):
            raise MappingError("'schema.strict' must be a boolean when provided.")

    def _contexts_for_record(self, rec: Dict[str, Any]) -> List[EvaluationContext]:
        explode_spec = self.mapping.get("explode", {})
        explode_path: Optional[str] = explode_spec.get("path")
        emit_root_when_empty: bool = explode_spec.get("emit_root_when_empty", True)

        if not explode_path:
            return [EvaluationContext(rec, None)]

        items = EvaluationContext(rec, None).get_from_root(explode_path)
        if isinstance(items, list) and len(items) > 0:
            return [EvaluationContext(rec, item) for item in items]

        if emit_root_when_empty:
            return [EvaluationContext(rec, None)]

        return []

    def _build_rows_for_record(self, rec: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [self._eval_columns(ctx) for ctx in self._contexts_for_record(rec)]

    def _build_rows_with_trace(self, rec: Dict[str, Any]) -> Tuple[List[Dict[str, Any]], Dict[int, Dict[str, Any]]]:
        traces: Dict[int, Dict[str, Any]] = {}
        rows: List[Dict[str, Any]] = []

        for row_idx, ctx in enumerate(self._contexts_for_record(rec)):
            out, t = self._eval_columns_with_trace(ctx)
            rows.append(out)
            traces[row_idx] = t

        return rows, traces

    def _eval_columns(self, ctx: EvaluationContext) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for name, rule in self.mapping["columns"].items():
            out[name] = self._eval_rule(rule, ctx, col=name)
        return out

    def _eval_columns_with_trace(self, ctx: EvaluationContext) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        out: Dict[str, Any] = {}
        trace: Dict[str, Any] = {}
        for name, rule in self.mapping["columns"].items():
            val, t = self._eval_rule_with_trace(rule, ctx, col=name)
            out[name] = val
            trace[name] = t
        return out, trace

    def _eval_rule(self, rule: Any, ctx: EvaluationContext, *, col: Optional[str] = None) -> Any:
        if not isinstance(rule, dict):
            return rule

        head_key = self._registry.get_match_key(rule)
        if head_key is None:
            return self._apply_tail_ops(None, rule)

        handler = self._registry.get_handler(head_key)

        def _eval(inner, ctx_override: Optional[EvaluationContext] = None):
            return self._eval_rule(inner, ctx_override or ctx, col=col)

        try:
            return handler(rule, ctx, _eval, self._apply_tail_ops)
        except Exception as exc:
            return self._handle_rule_error(rule, exc, col=col)

    def _eval_rule_with_trace(self, rule: Any, ctx: EvaluationContext, *, col: Optional[str] = None) -> Tuple[Any, Any]:
        if not isinstance(rule, dict):
            return rule, {"literal": rule}

        head_key = self._registry.get_match_key(rule)
        if head_key is None:
            val = self._apply_tail_ops(None, rule)
            return val, {"op": None, "value": val, "note": "no-op; tail-only"}

        handler = self._registry.get_handler(head_key)
        child_traces: List[Any] = []

        def _eval(inner, ctx_override: Optional[EvaluationContext] = None):
            val, t = self._eval_rule_with_trace(inner, ctx_override or ctx, col=col)
            child_traces.append(t)
            return val

        try:
            val = handler(rule, ctx, _eval, self._apply_tail_ops)
            node = {"op": head_key, "rule": rule, "children": child_traces, "value": val}
            return val, node
        except Exception as exc:
            val = self._handle_rule_error(rule, exc, col=col)
            node = {"op": head_key, "rule": rule, "children": child_traces, "error": repr(exc), "value": val}
            return val, node

    @staticmethod
    def _apply_tail_ops(val: Any, rule: Dict[str, Any]) -> Any:
        if val is None and "default" in rule:
            val = rule["default"]

        if "cast" in rule and val is not None:
            t = rule["cast"]
            try:
                if t == "str":
                    val = str(val)

                elif t == "int":
                    val = int(float(val))

            except (ValueError, TypeError):
                val = None

        return val

    def _handle_rule_error(self, rule: Dict[str, Any], exc: Exception, *, col: Optional[str]) -> Any:
        mode: ErrorMode = rule.get("on_error") or self._config.default_on_error or "null"

        if mode == "raise":
            raise exc

        if mode == "warn":
            logger = self._config.logger
            if logger is not None:
                col_info = f" for column '{col}'" if col else ""
                logger.warning("Rule error%s: %s | rule=%s", col_info, repr(exc), rule)

            return None
        if mode == "default":
            return rule.get("default")

        return None

    def _apply_output_schema_if_any(self, df: Any) -> None:
        if not self._schema:
            return

        report = self._validate_output_schema(df, self._schema)
        strict = bool(self._schema.get("strict", self._config.strict_schema))
        if strict and (report.get("errors") or report.get("violations")):
            raise MappingError(f"Output schema validation failed: {report}")

        if self._config.logger:
            self._config.logger.info("Schema validation report: %s", report)

    @staticmethod
    def _validate_output_schema(df: Any, schema: Dict[str, Any]) -> Dict[str, Any]:
        out: Dict[str, Any] = {"errors": [], "violations": []}
        cols_spec: Dict[str, Any] = (schema.get("columns") or {})
        if not cols_spec:
            return out
        if not isinstance(df, pd.DataFrame):
            return out

        for col, spec in cols_spec.items():
            if col not in df.columns:
                out["errors"].append({"column": col, "error": "missing"})
                continue

            series = df[col]
            if series.empty:
                continue

            expected = spec.get("type")
            if expected and not _DTYPE_CHECKS.get(expected, lambda s: False)(series):
                out["violations"].append({"column": col, "type": "dtype-mismatch", "expected": expected, "actual": str(series.dtype)})

            nullable = spec.get("nullable")
            if nullable is False and series.isna().any():
                out["violations"].append({"column": col, "type": "null-not-allowed", "count": int(series.isna().sum())})

            if "min" in spec and pd.api.types.is_numeric_dtype(series):
                below = int((series < spec["min"]).sum())
                if below:
                    out["violations"].append({"column": col, "type": "min-violation", "count": below, "min": spec["min"]})

            regex = spec.get("regex")
            if regex:
                try:
                    pat = re.compile(regex)
                    bad = series.fillna("").astype(str).apply(lambda s: pat.search(s) is None).sum()
                    if bad:
                        out["violations"].append({"column": col, "type": "regex-violation", "count": int(bad), "pattern": regex})

                except re.error as e:
                    out["errors"].append({"column": col, "error": f"invalid-regex: {e}"})

        return out
