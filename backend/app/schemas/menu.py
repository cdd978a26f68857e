"""Menu 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from __future__ import annotations

from pydantic import BaseModel, Field
from typing import List, Optional


class MenuBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    url: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    sort_order: int = 1
    is_active: bool = True
    type: str = "page"
    icon_image: Optional[str] = None
    css_class: Optional[str] = None


class MenuCreate(MenuBase):
    parent_id: Optional[int] = None


class MenuUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    url: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None
    parent_id: Optional[int] = None  # 명시적으로 null을 보내면 최상위 메뉴로 이동
    type: Optional[str] = None
    icon_image: Optional[str] = None
    css_class: Optional[str] = None


class MenuOut(MenuBase):
    id: int
    parent_id: Optional[int] = None

    model_config = {"from_attributes": True}


class MenuDetailOut(MenuOut):
    parent: Optional[MenuOut] = None
    children: List[MenuOut] = []


class MenuTreeOut(MenuOut):
    children: List[MenuTreeOut] = []


class SortOrderItem(BaseModel):
    id: int
    sort_order: int


class MenuReorderItem(BaseModel):
    id: int
    sort_order: int
    parent_id: Optional[int] = None
