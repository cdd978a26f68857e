"""네비게이션 메뉴(자기참조 트리) SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.database import Base


class Menu(Base):
    __tablename__ = "menus"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    url = Column(String(100), nullable=False)  # 형제 메뉴 사이에서 유일한 경로 세그먼트
    description = Column(Text)
    sort_order = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, nullable=False, default=True)
    parent_id = Column(Integer, ForeignKey("menus.id"), nullable=True)
    type = Column(String(20), nullable=False, default="page")  # page/section/external
    icon_image = Column(String(500))
    css_class = Column(String(100))

    parent = relationship("Menu", remote_side=[id], back_populates="children")
    children = relationship("Menu", back_populates="parent", order_by="Menu.sort_order")
    contents = relationship("Content", back_populates="menu")

    __table_args__ = (
        Index("idx_menu_parent_url", "parent_id", "url"),
    )
