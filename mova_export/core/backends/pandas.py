from typing import List, Dict, Any, Optional

import pandas as pd


class DataFrameBackend:
    def to_dataframe(self, rows: List[Dict[str, Any]], columns: Optional[List[str]] = None) -> Any:
        raise NotImplementedError


class PandasBackend(DataFrameBackend):
    def to_dataframe(self, rows: List[Dict[str, Any]], columns: Optional[List[str]] = None) -> pd.DataFrame:
        return pd.DataFrame(rows, columns=columns)
