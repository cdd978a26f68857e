"""Upload 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel


class FileUploadOut(BaseModel):
    id: int
    original_name: str
    file_name: str
    file_path: str
    mime_type: str
    file_size: int
    content_id: Optional[int] = None
    category: str
    uploaded_at: datetime
    url: Optional[str] = None

    model_config = {"from_attributes": True}


class FileStatsOut(BaseModel):
    total_files: int
    total_size: int
    categories: Dict[str, int]
