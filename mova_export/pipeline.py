from __future__ import annotations
import logging
import os
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from .config import ExportConfig
from .core import EngineConfig, read_csv_records, write_rows_to_excel
from .core.io import PathOrBuffer
from .exceptions import EmptyInputError, MissingOrderIdColumnError
from .models import ConversionRequest, ConversionResult, check_date_token
from .orders import ExportProjector, collect_orders, default_rule_engine

logger = logging.getLogger(__name__)

ORDER_ID_COLUMN = "Name"


def export_filename(date_token: Optional[str]) -> str:
    return f"MOVA訂單_{check_date_token(date_token)}.xlsx"


def check_rows(rows: Sequence[Dict[str, Any]]) -> None:
    """Pre-flight checks on the parsed export; only the first record's header is inspected."""
    if len(rows) == 0:
        raise EmptyInputError("檔案內容為空")

    if ORDER_ID_COLUMN not in rows[0]:
        detected = ", ".join(rows[0].keys())
        raise MissingOrderIdColumnError(
            f'CSV 格式錯誤: 找不到 "{ORDER_ID_COLUMN}" 欄位。請確認上傳的是 Shopify 訂單匯出檔。\n'
            f"偵測到的欄位: {detected}"
        )


def convert_rows(
    rows: Sequence[Dict[str, Any]],
    *,
    config: Optional[ExportConfig] = None,
    engine_config: Optional[EngineConfig] = None,
) -> ConversionResult:
    """
    Shopify order export rows -> MOVA import rows (header first).

    Raises EmptyInputError / MissingOrderIdColumnError before any aggregation.
    """
    check_rows(rows)

    orders = default_rule_engine(config).finalize_all(collect_orders(rows))
    table = ExportProjector(config, engine_config).rows(orders)

    warnings = {o.order_id: list(o.warnings) for o in orders if o.warnings}
    result = ConversionResult(
        order_count=len(orders),
        row_count=len(table) - 1,
        rows=table,
        warnings=warnings,
    )
    logger.info("Converted %d orders into %d rows", result.order_count, result.row_count)
    if warnings:
        logger.info("%d orders had unparseable fields", len(warnings))
    return result


def convert_file(
    source: PathOrBuffer,
    request: ConversionRequest,
    *,
    out_dir: str = ".",
    config: Optional[ExportConfig] = None,
    engine_config: Optional[EngineConfig] = None,
) -> ConversionResult:
    filename = export_filename(request.date_token)

    try:
        records: List[Dict[str, Any]] = read_csv_records(source)
    except pd.errors.EmptyDataError as e:
        raise EmptyInputError("檔案內容為空") from e

    result = convert_rows(records, config=config, engine_config=engine_config)

    out_path = os.path.join(out_dir, filename)
    write_rows_to_excel(result.rows, out_path, sheet_name=request.sheet_name)
    logger.info("Wrote %s", out_path)

    result.filename = filename
    return result
