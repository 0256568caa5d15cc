from __future__ import annotations
from typing import Any, Dict, IO, List, Sequence, Union
import os
import pandas as pd

PathOrBuffer = Union[str, "os.PathLike[str]", IO[Any]]


def _clean_header(header: Any) -> str:
    return str(header).lstrip("\ufeff").strip()


def read_csv_records(source: PathOrBuffer, *, encoding: str = "utf-8-sig") -> List[Dict[str, str]]:
    """
    Read a header-keyed CSV into a list of records.

    Every cell is read as text, empty cells become "" and blank lines are skipped.
    A BOM and surrounding whitespace are stripped from the header names.
    """
    df = pd.read_csv(
        source,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        encoding=encoding,
    )
    df.columns = [_clean_header(c) for c in df.columns]
    return df.to_dict(orient="records")


def write_rows_to_excel(rows: Sequence[Sequence[Any]], out_path: PathOrBuffer, *, sheet_name: str = "Orders") -> None:
    """
    Write positional rows to an .xlsx sheet. The first row is taken as the header.
    """
    header, body = list(rows[0]), [list(r) for r in rows[1:]]
    df = pd.DataFrame(body, columns=header)
    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
