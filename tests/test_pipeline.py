"""End-to-end tests: export rows / CSV files to the MOVA import sheet"""

import io
import logging

import pandas as pd
import pytest
from pydantic import ValidationError

from mova_export import (
    ConversionRequest,
    EmptyInputError,
    InvalidDateTokenError,
    MissingOrderIdColumnError,
    check_rows,
    convert_file,
    convert_rows,
    export_filename,
)
from mova_export.orders import MOVA_HEADERS


class TestPreflight:

    def test_empty_input(self):
        with pytest.raises(EmptyInputError, match="檔案內容為空"):
            check_rows([])

    def test_missing_name_column_lists_headers(self):
        with pytest.raises(MissingOrderIdColumnError) as exc:
            check_rows([{"Order": "1", "Email": "a@b.c"}])

        assert '"Name"' in str(exc.value)
        assert "Order, Email" in str(exc.value)

    def test_only_first_record_is_checked(self, row_factory):
        rows = [row_factory(), {"Other": "x"}]
        check_rows(rows)

    def test_empty_name_value_passes_preflight(self, row_factory):
        result = convert_rows([row_factory(Name="")])

        assert result.order_count == 0
        assert result.rows == [MOVA_HEADERS]


class TestConvertRows:

    def test_orders_and_items_ordering(self, row_factory):
        rows = [
            row_factory(Name="MOVA-1", **{"Lineitem sku": "A1", "Lineitem price": "300"}),
            row_factory(Name="MOVA-2", **{"Lineitem sku": "B1", "Lineitem price": "1200"}),
            row_factory(Name="MOVA-1", **{"Lineitem sku": "A2", "Lineitem price": "200"}),
        ]
        result = convert_rows(rows)
        body = result.rows[1:]

        assert result.order_count == 2
        assert [(r[26], r[5]) for r in body] == [
            ("MOVA-1", "A1"),
            ("MOVA-1", "A2"),
            ("MOVA-1", "Z90001"),
            ("MOVA-2", "B1"),
        ]

    def test_row_count_matches_items(self, row_factory):
        rows = [
            row_factory(Name="MOVA-1", **{"Lineitem quantity": "2", "Lineitem price": "499.5"}),
            row_factory(Name="MOVA-2", **{"Lineitem quantity": "1", "Lineitem price": "1000"}),
            row_factory(Name="MOVA-3", **{"Lineitem name": ""}),
        ]
        result = convert_rows(rows)

        # 999 -> item + fee, 1000 -> item only, no items -> fee only
        assert result.row_count == 4
        assert len(result.rows) == result.row_count + 1
        assert all(len(r) == 29 for r in result.rows)

    def test_column_mapping(self, row_factory):
        row = row_factory(**{"Lineitem sku": "A1", "Lineitem quantity": "2", "Lineitem price": "50"})
        body = convert_rows([row]).rows[1:]

        assert body[0][6] == 100
        assert body[0][7] == 2
        assert body[0][9] == "XF1400"

    def test_warnings_collected_per_order(self, row_factory):
        result = convert_rows([row_factory(**{"Lineitem price": "free"})])

        assert list(result.warnings) == ["MOVA-1001"]

    def test_logs_summary(self, row_factory, caplog):
        with caplog.at_level(logging.INFO, logger="mova_export.pipeline"):
            convert_rows([row_factory()])

        assert "Converted 1 orders into 2 rows" in caplog.text


class TestConversionRequest:

    def test_valid_token(self):
        assert ConversionRequest(date_token="202410").date_token == "202410"

    @pytest.mark.parametrize("token", ["12", "123456789", "2024-10"])
    def test_malformed_token_rejected(self, token):
        with pytest.raises(ValidationError, match="日期格式錯誤"):
            ConversionRequest(date_token=token)

    def test_empty_token_rejected(self):
        with pytest.raises(ValidationError, match="請先輸入日期"):
            ConversionRequest(date_token="")


class TestExportFilename:

    @pytest.mark.parametrize("token", ["2023", "202310", "20231015"])
    def test_valid(self, token):
        assert export_filename(token) == f"MOVA訂單_{token}.xlsx"

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing(self, token):
        with pytest.raises(InvalidDateTokenError, match="請先輸入日期"):
            export_filename(token)

    @pytest.mark.parametrize("token", ["123", "123456789", "2023-10", "abcd"])
    def test_malformed(self, token):
        with pytest.raises(InvalidDateTokenError, match="日期格式錯誤"):
            export_filename(token)


class TestConvertFile:

    CSV = (
        "\ufeffName , Id,Email,Subtotal,Shipping,Total,Shipping Name,Shipping Street,Shipping Phone,"
        "Lineitem name,Lineitem sku,Lineitem quantity,Lineitem price,Note Attributes\n"
        "MOVA-1116,6274,a@b.c,1500.00,0,1500.00,Lin,Road 1,0912345678,Tea,T1,3,500.00,\"發票種類(InvoiceType): company\n"
        "統一編號(CompanyId): 12345678\n公司名稱(CompanyName): Acme Co\"\n"
        "MOVA-1116,,,,,,,,,Cup,C1,1,0,\n"
    )

    def test_csv_to_xlsx(self, tmp_path):
        source = tmp_path / "orders.csv"
        source.write_text(self.CSV, encoding="utf-8")

        result = convert_file(str(source), ConversionRequest(date_token="20241001"), out_dir=str(tmp_path))

        assert result.filename == "MOVA訂單_20241001.xlsx"
        assert result.order_count == 1
        assert result.row_count == 2
        row = result.rows[1]
        assert row[0] == "MOVA-1116"
        assert row[24] == "12345678"
        assert row[25] == "Acme Co"

        df = pd.read_excel(tmp_path / result.filename, sheet_name="Orders", engine="openpyxl")
        assert list(df.columns) == MOVA_HEADERS
        assert df["品號"].tolist() == ["T1", "C1"]

    def test_bad_token_checked_before_reading(self, tmp_path):
        with pytest.raises(InvalidDateTokenError):
            convert_file(
                str(tmp_path / "missing.csv"),
                ConversionRequest.model_construct(date_token="12", sheet_name="Orders"),
                out_dir=str(tmp_path),
            )

    def test_header_only_file(self, tmp_path):
        with pytest.raises(EmptyInputError):
            convert_file(io.StringIO("Name,Email\n"), ConversionRequest(date_token="2024"), out_dir=str(tmp_path))

    def test_blank_file(self, tmp_path):
        with pytest.raises(EmptyInputError):
            convert_file(io.StringIO(""), ConversionRequest(date_token="2024"), out_dir=str(tmp_path))

    def test_wrong_export(self, tmp_path):
        with pytest.raises(MissingOrderIdColumnError):
            convert_file(io.StringIO("Order,Email\n1,a@b.c\n"), ConversionRequest(date_token="2024"), out_dir=str(tmp_path))
