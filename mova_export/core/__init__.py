from ..exceptions import MappingError
from .engine import DeclarativeConverter, EngineConfig
from .backends.pandas import DataFrameBackend, PandasBackend
from .registry import OperationRegistry, register_operation, get_registry
from .io import read_csv_records, write_rows_to_excel

__all__ = [
    "MappingError",
    "DeclarativeConverter",
    "EngineConfig",
    "DataFrameBackend",
    "PandasBackend",
    "OperationRegistry",
    "register_operation",
    "get_registry",
    "read_csv_records",
    "write_rows_to_excel",
]
