import re
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, field_validator

from .exceptions import InvalidDateTokenError

DATE_TOKEN_PATTERN = re.compile(r"^\d{4,8}$")


def check_date_token(date_token: Optional[str]) -> str:
    if not date_token:
        raise InvalidDateTokenError("請先輸入日期 (例如: 202310)")

    if not DATE_TOKEN_PATTERN.match(date_token):
        raise InvalidDateTokenError("日期格式錯誤，請輸入 4 到 8 位數字 (例如 YYYYMMDD)")

    return date_token


class ConversionRequest(BaseModel):
    # pydantic reports a bad token as ValidationError carrying the
    # InvalidDateTokenError message
    date_token: str
    sheet_name: str = "Orders"

    @field_validator("date_token")
    @classmethod
    def _valid_date_token(cls, v: str) -> str:
        return check_date_token(v)


class ConversionResult(BaseModel):
    order_count: int
    row_count: int
    rows: List[List[Any]]
    filename: Optional[str] = None
    warnings: Dict[str, List[str]] = {}
