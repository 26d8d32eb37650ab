from typing import Literal
from pydantic import BaseModel


class SearchHit(BaseModel):
    type: Literal["equipment", "class", "warehouse", "rack", "slot"]
    id: int
    title: str
    subtitle: str | None = None


class SearchResponse(BaseModel):
    q: str
    results: list[SearchHit]
