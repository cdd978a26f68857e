import os
import uuid
from fastapi import UploadFile, HTTPException
from app.config import settings


def file_extension(filename: str | None) -> str:
    name = filename or ""
    return name.rsplit(".", 1)[-1].lower() if "." in name else ""


def validate_file(file: UploadFile) -> str:
    ext = file_extension(file.filename)
    allowed = {value.lower() for value in settings.ALLOWED_EXTENSIONS}
    if ext not in allowed:
        raise HTTPException(
            status_code=400,
            detail=f"File type '{ext}' not allowed. Allowed: {', '.join(sorted(allowed))}",
        )
    return ext


async def save_upload(file: UploadFile, subfolder: str = "") -> dict:
    """업로드 파일을 UPLOAD_DIR 아래 임의 이름으로 저장하고 저장 정보를 돌려준다."""
    ext = validate_file(file)
    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        limit_mb = settings.MAX_UPLOAD_SIZE // (1024 * 1024)
        raise HTTPException(status_code=400, detail=f"File exceeds {limit_mb} MB limit")

    folder = os.path.join(settings.UPLOAD_DIR, subfolder)
    os.makedirs(folder, exist_ok=True)

    filename = f"{uuid.uuid4().hex}.{ext}"
    path = os.path.join(folder, filename)

    with open(path, "wb") as f:
        f.write(content)

    url_path = f"{subfolder}/{filename}" if subfolder else filename
    return {
        "original_name": file.filename,
        "file_name": filename,
        "file_path": path,
        "mime_type": file.content_type or "application/octet-stream",
        "file_size": len(content),
        "url": f"/uploads/{url_path}".replace("\\", "/"),
    }
