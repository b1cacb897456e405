"""
Admin content Pydantic schemas
"""
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class ProjectIn(BaseModel):
    """Project upsert body - snake_case columns as edited in the admin panel"""
    id: str
    slug: Optional[str] = None
    title_zh: str = ""
    title_en: str = ""
    description_zh: str = ""
    description_en: str = ""
    detail_zh: str = ""
    detail_en: str = ""
    links_json: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    image: Optional[str] = None
    link: Optional[str] = None
    source: Optional[str] = None
    date: str = ""
    featured: bool = False
    sort_order: Optional[int] = 0


class DeleteRequest(BaseModel):
    id: Union[int, str]


class SortOrderItem(BaseModel):
    id: Union[int, str]
    sort_order: int = Field(ge=0)


class SortOrderUpdate(BaseModel):
    items: List[SortOrderItem]
