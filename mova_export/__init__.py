from .config import ExportConfig, DEFAULT_EXPORT_CONFIG
from .exceptions import (
    MappingError,
    ConversionError,
    EmptyInputError,
    MissingOrderIdColumnError,
    InvalidDateTokenError,
)
from .models import ConversionRequest, ConversionResult
from .pipeline import check_rows, convert_rows, convert_file, export_filename

__all__ = [
    "ExportConfig",
    "DEFAULT_EXPORT_CONFIG",
    "MappingError",
    "ConversionError",
    "EmptyInputError",
    "MissingOrderIdColumnError",
    "InvalidDateTokenError",
    "ConversionRequest",
    "ConversionResult",
    "check_rows",
    "convert_rows",
    "convert_file",
    "export_filename",
]
