"""Uploads 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.middleware.auth_middleware import require_writer
from app.models.user import User
from app.schemas.upload import FileStatsOut, FileUploadOut
from app.services import upload_service
from app.utils.helpers import save_upload, validate_file

router = APIRouter(prefix="/api/uploads", tags=["uploads"])


def _subfolder(category: str | None) -> str:
    value = (category or "").strip().lower()
    return value if value in upload_service.FILE_CATEGORIES else "general"


@router.post("/single", response_model=FileUploadOut)
async def upload_single(
    file: UploadFile = File(...),
    content_id: int | None = Query(None, ge=1),
    category: str | None = Query(None),
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_writer),
):
    upload_service.ensure_content_exists(db, content_id)
    stored = await save_upload(file, subfolder=_subfolder(category))
    row = upload_service.save_file_record(db, stored, content_id=content_id, category=category)
    return upload_service.serialize_file(row)


@router.post("/multiple", response_model=List[FileUploadOut])
async def upload_multiple(
    files: List[UploadFile] = File(...),
    content_id: int | None = Query(None, ge=1),
    category: str | None = Query(None),
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_writer),
):
    if len(files) > settings.MAX_FILES_PER_UPLOAD:
        raise HTTPException(
            status_code=400,
            detail=f"한 번에 최대 {settings.MAX_FILES_PER_UPLOAD}개 파일까지 업로드할 수 있습니다.",
        )
    upload_service.ensure_content_exists(db, content_id)
    for file in files:
        validate_file(file)
    stored_files = []
    try:
        for file in files:
            stored_files.append(await save_upload(file, subfolder=_subfolder(category)))
    except HTTPException:
        # 뒤 파일이 크기 제한 등으로 실패하면 이미 기록한 파일을 정리한다.
        upload_service.discard_stored(stored_files)
        raise
    rows = upload_service.save_file_records(db, stored_files, content_id=content_id, category=category)
    return [upload_service.serialize_file(row) for row in rows]


@router.get("", response_model=List[FileUploadOut])
def list_files(category: str | None = Query(None), db: Session = Depends(get_db)):
    return [upload_service.serialize_file(row) for row in upload_service.find_all(db, category)]


@router.get("/stats", response_model=FileStatsOut)
def file_stats(db: Session = Depends(get_db)):
    return upload_service.get_file_stats(db)


@router.get("/content/{content_id:int}", response_model=List[FileUploadOut])
def list_content_files(content_id: int, db: Session = Depends(get_db)):
    return [upload_service.serialize_file(row) for row in upload_service.find_by_content_id(db, content_id)]


@router.get("/serve/{file_id:int}")
def serve_file(file_id: int, db: Session = Depends(get_db)):
    row = upload_service.find_one(db, file_id)
    return FileResponse(
        upload_service.existing_path(row),
        media_type=row.mime_type,
        filename=row.original_name,
        content_disposition_type="inline",
    )


@router.get("/download/{file_id:int}")
def download_file(file_id: int, db: Session = Depends(get_db)):
    row = upload_service.find_one(db, file_id)
    return FileResponse(
        upload_service.existing_path(row),
        media_type=row.mime_type,
        filename=row.original_name,
    )


@router.get("/{file_id:int}", response_model=FileUploadOut)
def get_file(file_id: int, db: Session = Depends(get_db)):
    return upload_service.serialize_file(upload_service.find_one(db, file_id))


@router.delete("/{file_id:int}")
def delete_file(
    file_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_writer),
):
    upload_service.remove(db, file_id)
    return {"message": "삭제되었습니다."}
