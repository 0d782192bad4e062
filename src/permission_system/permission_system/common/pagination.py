from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE


def _positive_int(value: Any, default: int) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


def parse_page(value: Optional[str]) -> int:
    return _positive_int(value, DEFAULT_PAGE)


def parse_size(value: Optional[str]) -> int:
    return _positive_int(value, DEFAULT_PAGE_SIZE)


def offset_for(page: int, size: int) -> int:
    return (page - 1) * size


@dataclass(frozen=True)
class PageMetadata:
    page: int
    size: int
    total_item: int
    total_page: int
    has_next: bool
    has_previous: bool

    @classmethod
    def build(cls, *, page: int, size: int, total: int) -> "PageMetadata":
        total_page = math.ceil(total / size) if size > 0 else 0
        return cls(
            page=page,
            size=size,
            total_item=total,
            total_page=total_page,
            has_next=page < total_page,
            has_previous=page > 1,
        )

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "size": self.size,
            "totalItem": self.total_item,
            "totalPage": self.total_page,
            "hasNext": self.has_next,
            "hasPrevious": self.has_previous,
        }
