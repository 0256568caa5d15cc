"""
Shopify order export -> MOVA import sheet
Use case: Turn a Shopify "Export orders" CSV into the 29-column ERP upload.
- Groups line-item rows by order ('Name')
- Adds the Z90001 shipping fee to orders under 1000
- Writes MOVA訂單_<date>.xlsx next to the input

Usage: python examples/shopify_to_mova.py orders_export.csv 20241001
"""
import logging
import os
import sys

from mova_export import ConversionError, ConversionRequest, convert_file


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    if len(sys.argv) != 3:
        raise SystemExit(__doc__)

    src_path, date_token = sys.argv[1], sys.argv[2]
    try:
        result = convert_file(
            src_path,
            ConversionRequest(date_token=date_token),
            out_dir=os.path.dirname(os.path.abspath(src_path)),
        )
    except ConversionError as e:
        raise SystemExit(str(e))

    print(f"處理訂單數: {result.order_count} 筆")
    print(f"產生資料行: {result.row_count} 行")
    print(f"輸出檔案: {result.filename}")
    for order_id, warnings in result.warnings.items():
        for w in warnings:
            print(f"  {order_id}: {w}")
