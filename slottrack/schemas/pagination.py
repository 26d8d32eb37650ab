import math
from typing import TypeVar, Generic
from pydantic import BaseModel

from slottrack.config import settings
from slottrack.exceptions import InvalidArgument

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    items: list[T]
    total: int
    page: int
    pages: int
    size: int


def page_window(page: int, size: int | None) -> tuple[int, int, int]:
    """Return (page, size, offset), with size clamped to the configured bounds."""
    if page < 1:
        raise InvalidArgument("page", "page must be 1 or greater")
    size = settings.DEFAULT_PAGE_SIZE if size is None else size
    size = max(settings.MIN_PAGE_SIZE, min(size, settings.MAX_PAGE_SIZE))
    return page, size, (page - 1) * size


def build_page(items: list, total: int, page: int, size: int) -> Page:
    return Page(items=items, total=total, page=page, pages=math.ceil(total / size), size=size)
