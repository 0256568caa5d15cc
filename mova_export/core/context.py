from __future__ import annotations
from typing import Any, Dict, Optional
from .path import PathResolver


class EvaluationContext:
    """
    Evaluation scope for one output row: the whole record (an order) as root and
    the exploded element (a line item) as rel.
    """
    __slots__ = ("root", "rel")

    def __init__(self, root: Dict[str, Any], rel: Optional[Any]) -> None:
        self.root = root
        self.rel = rel

    def get_from_root(self, path: str) -> Any:
        return PathResolver.get(self.root, path)

    def get_from_rel(self, path: str) -> Any:
        if self.rel is None:
            return None

        return PathResolver.get(self.rel, path)
