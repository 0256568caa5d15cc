from __future__ import annotations
import re
from typing import Any, Optional


class PathSyntaxError(ValueError):
    pass


class PathResolver:
    """
    Resolve dotted paths into nested dict/list structures.

    Supported selectors per segment:
      - key        e.g. customer
      - [N]        list index, None when out of range

    Examples:
      customer.phone
      items[0].sku
    """

    _segment = re.compile(r"^([^.\[\]]+)((?:\[\d+\])*)$")
    _index = re.compile(r"\[(\d+)\]")

    @classmethod
    def get(cls, obj: Any, path: Optional[str]) -> Any:
        if path is None:
            return None

        cur = obj
        for seg in path.split("."):
            if cur is None:
                return None

            m = cls._segment.match(seg)
            if not m:
                raise PathSyntaxError(f"Malformed path segment '{seg}' in '{path}'")

            key, indexes = m.group(1), m.group(2)
            cur = cur.get(key) if isinstance(cur, dict) else None

            for idx in cls._index.findall(indexes):
                i = int(idx)
                if isinstance(cur, list) and 0 <= i < len(cur):
                    cur = cur[i]
                else:
                    cur = None

        return cur
