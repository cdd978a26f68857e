"""Upload Service 도메인 서비스 레이어입니다. 업로드 파일 레코드 저장/조회/삭제와 통계를 담당합니다."""

import logging
import os
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.config import settings
from app.models.content import Content
from app.models.file_upload import FileUpload
from app.schemas.upload import FileStatsOut, FileUploadOut
from app.utils.batch import run_independent

logger = logging.getLogger(__name__)

FILE_CATEGORIES = {"image", "video", "document", "general"}


def categorize_file(mime_type: str | None) -> str:
    value = (mime_type or "").lower()
    if value.startswith("image/"):
        return "image"
    if value.startswith("video/"):
        return "video"
    if "pdf" in value or "document" in value or "sheet" in value:
        return "document"
    return "general"


def resolve_category(requested: Optional[str], mime_type: str | None) -> str:
    """요청 카테고리가 유효하면 우선하고, 아니면 MIME 타입으로 분류한다."""
    value = (requested or "").strip().lower()
    if value in FILE_CATEGORIES and value != "general":
        return value
    return categorize_file(mime_type)


def file_url(row: FileUpload) -> str:
    rel_path = os.path.relpath(row.file_path, settings.UPLOAD_DIR).replace("\\", "/")
    return f"/uploads/{rel_path}"


def serialize_file(row: FileUpload) -> FileUploadOut:
    out = FileUploadOut.model_validate(row)
    out.url = file_url(row)
    return out


def ensure_content_exists(db: Session, content_id: Optional[int]) -> None:
    if content_id is None:
        return
    if not db.query(Content.id).filter(Content.id == content_id).first():
        raise HTTPException(status_code=400, detail=f"연결할 콘텐츠(ID {content_id})를 찾을 수 없습니다.")


def _record_values(stored: Dict[str, Any], content_id: Optional[int], category: Optional[str]) -> Dict[str, Any]:
    return {
        "original_name": stored["original_name"],
        "file_name": stored["file_name"],
        "file_path": stored["file_path"],
        "mime_type": stored["mime_type"],
        "file_size": stored["file_size"],
        "content_id": content_id,
        "category": resolve_category(category, stored["mime_type"]),
    }


def save_file_record(
    db: Session,
    stored: Dict[str, Any],
    content_id: Optional[int] = None,
    category: Optional[str] = None,
) -> FileUpload:
    row = FileUpload(**_record_values(stored, content_id, category))
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def _create_record_job(values: Dict[str, Any]):
    def job(session: Session) -> int:
        row = FileUpload(**values)
        session.add(row)
        session.flush()
        return row.id
    return job


def save_file_records(
    db: Session,
    stored_files: List[Dict[str, Any]],
    content_id: Optional[int] = None,
    category: Optional[str] = None,
) -> List[FileUpload]:
    """파일별 레코드를 독립 트랜잭션으로 병렬 생성한다. 실패한 파일은 디스크에서 정리하고 나머지는 유지한다."""
    jobs = [_create_record_job(_record_values(stored, content_id, category)) for stored in stored_files]
    results = run_independent(db, jobs)

    failed = [r for r in results if not r.ok]
    for result in failed:
        _remove_from_disk(stored_files[result.index]["file_path"])
    if failed:
        names = ", ".join(stored_files[r.index]["original_name"] for r in failed)
        logger.warning("[upload] %s of %s file records failed: %s", len(failed), len(results), names)
        raise HTTPException(status_code=500, detail=f"일부 파일 저장에 실패했습니다: {names}")

    ids = [r.value for r in results]
    rows = {row.id: row for row in db.query(FileUpload).filter(FileUpload.id.in_(ids)).all()}
    return [rows[file_id] for file_id in ids]


def find_all(db: Session, category: Optional[str] = None) -> List[FileUpload]:
    query = db.query(FileUpload)
    if category:
        query = query.filter(FileUpload.category == category)
    return query.order_by(FileUpload.uploaded_at.desc(), FileUpload.id.desc()).all()


def find_one(db: Session, file_id: int) -> FileUpload:
    row = db.query(FileUpload).filter(FileUpload.id == file_id).first()
    if not row:
        raise HTTPException(status_code=404, detail=f"파일을 찾을 수 없습니다. (ID {file_id})")
    return row


def find_by_content_id(db: Session, content_id: int) -> List[FileUpload]:
    return (
        db.query(FileUpload)
        .filter(FileUpload.content_id == content_id)
        .order_by(FileUpload.uploaded_at.desc(), FileUpload.id.desc())
        .all()
    )


def existing_path(row: FileUpload) -> str:
    if not os.path.exists(row.file_path):
        raise HTTPException(status_code=404, detail="File not found on disk")
    return row.file_path


def _remove_from_disk(path: str) -> None:
    try:
        if os.path.exists(path):
            os.remove(path)
    except OSError as exc:
        logger.warning("[upload] failed to delete physical file %s: %s", path, exc)


def discard_stored(stored_files: List[Dict[str, Any]]) -> None:
    """레코드 없이 디스크에만 기록된 파일들을 지운다."""
    for stored in stored_files:
        _remove_from_disk(stored["file_path"])
    if stored_files:
        logger.info("[upload] discarded %s stored files after failed upload", len(stored_files))


def remove(db: Session, file_id: int) -> None:
    row = find_one(db, file_id)
    _remove_from_disk(row.file_path)
    db.delete(row)
    db.commit()


def get_file_stats(db: Session) -> FileStatsOut:
    rows = db.query(FileUpload.category, FileUpload.file_size).all()
    categories: Dict[str, int] = {}
    for category, _ in rows:
        categories[category] = categories.get(category, 0) + 1
    return FileStatsOut(
        total_files=len(rows),
        total_size=sum(int(size or 0) for _, size in rows),
        categories=categories,
    )
