"""Test Uploads 동작과 회귀 시나리오를 검증하는 자동화 테스트입니다."""

import os
import shutil
from pathlib import Path
from uuid import uuid4

import pytest

from app.config import settings
from app.models.content import Content
from app.services import upload_service
from tests.conftest import auth_headers

PNG_BYTES = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def upload_dir(monkeypatch):
    test_upload_dir = Path("test_uploads_runtime") / uuid4().hex / "uploads"
    test_upload_dir.mkdir(parents=True, exist_ok=True)
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(test_upload_dir))
    yield test_upload_dir
    shutil.rmtree(test_upload_dir.parent.parent, ignore_errors=True)


def _upload(client, headers, name="photo.png", body=PNG_BYTES, mime="image/png", **params):
    return client.post(
        "/api/uploads/single",
        headers=headers,
        files={"file": (name, body, mime)},
        params=params,
    )


def test_upload_requires_auth(client, seed_users, upload_dir):
    files = {"file": ("photo.png", PNG_BYTES, "image/png")}
    assert client.post("/api/uploads/single", files=files).status_code in (401, 403)

    headers = auth_headers(client, "viewer")
    assert client.post("/api/uploads/single", headers=headers, files=files).status_code == 403


def test_upload_single_success(client, seed_users, upload_dir):
    headers = auth_headers(client, "editor")
    resp = _upload(client, headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["original_name"] == "photo.png"
    assert data["category"] == "image"
    assert data["file_size"] == len(PNG_BYTES)
    assert data["file_name"].endswith(".png")
    assert data["url"] == f"/uploads/general/{data['file_name']}"
    assert os.path.exists(data["file_path"])


def test_upload_explicit_category_wins(client, seed_users, upload_dir):
    headers = auth_headers(client, "editor")
    resp = _upload(client, headers, name="scan.png", category="document")
    assert resp.status_code == 200
    data = resp.json()
    assert data["category"] == "document"
    assert data["url"].startswith("/uploads/document/")


def test_upload_rejects_disallowed_extension(client, seed_users, upload_dir):
    headers = auth_headers(client, "editor")
    resp = _upload(client, headers, name="run.exe", body=b"MZ", mime="application/octet-stream")
    assert resp.status_code == 400


def test_upload_rejects_oversized_file(client, seed_users, upload_dir, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 4)
    headers = auth_headers(client, "editor")
    resp = _upload(client, headers)
    assert resp.status_code == 400


def test_upload_rejects_missing_content(client, seed_users, upload_dir):
    headers = auth_headers(client, "editor")
    resp = _upload(client, headers, content_id=9999)
    assert resp.status_code == 400


def test_upload_multiple(client, db, seed_users, upload_dir):
    content = Content(title="제목", content="본문")
    db.add(content)
    db.commit()
    db.refresh(content)

    headers = auth_headers(client, "editor")
    files = [
        ("files", ("a.png", PNG_BYTES, "image/png")),
        ("files", ("b.pdf", b"%PDF-1.4", "application/pdf")),
        ("files", ("c.mp4", b"\x00\x00\x00\x18ftyp", "video/mp4")),
    ]
    resp = client.post(
        "/api/uploads/multiple",
        headers=headers,
        files=files,
        params={"content_id": content.id},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert [item["original_name"] for item in data] == ["a.png", "b.pdf", "c.mp4"]
    assert [item["category"] for item in data] == ["image", "document", "video"]
    assert all(item["content_id"] == content.id for item in data)

    listed = client.get(f"/api/uploads/content/{content.id}").json()
    assert sorted(item["original_name"] for item in listed) == ["a.png", "b.pdf", "c.mp4"]


def test_upload_multiple_rejects_bad_file_before_saving(client, seed_users, upload_dir):
    headers = auth_headers(client, "editor")
    files = [
        ("files", ("a.png", PNG_BYTES, "image/png")),
        ("files", ("b.exe", b"MZ", "application/octet-stream")),
    ]
    resp = client.post("/api/uploads/multiple", headers=headers, files=files)
    assert resp.status_code == 400
    assert client.get("/api/uploads").json() == []


def test_upload_multiple_oversized_file_cleans_up_saved_files(client, seed_users, upload_dir, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 10)
    headers = auth_headers(client, "editor")
    files = [
        ("files", ("a.txt", b"small", "text/plain")),
        ("files", ("b.txt", b"x" * 100, "text/plain")),
    ]
    resp = client.post("/api/uploads/multiple", headers=headers, files=files)
    assert resp.status_code == 400

    left = [path for path in upload_dir.rglob("*") if path.is_file()]
    assert left == []
    assert client.get("/api/uploads").json() == []


def test_upload_multiple_rejects_too_many_files(client, seed_users, upload_dir, monkeypatch):
    monkeypatch.setattr(settings, "MAX_FILES_PER_UPLOAD", 2)
    headers = auth_headers(client, "editor")
    files = [("files", (f"{i}.png", PNG_BYTES, "image/png")) for i in range(3)]
    resp = client.post("/api/uploads/multiple", headers=headers, files=files)
    assert resp.status_code == 400


def test_list_and_stats(client, seed_users, upload_dir):
    headers = auth_headers(client, "editor")
    _upload(client, headers, name="a.png")
    _upload(client, headers, name="b.png")
    _upload(client, headers, name="c.pdf", body=b"%PDF-1.4", mime="application/pdf")

    assert len(client.get("/api/uploads").json()) == 3
    images = client.get("/api/uploads", params={"category": "image"}).json()
    assert sorted(item["original_name"] for item in images) == ["a.png", "b.png"]

    stats = client.get("/api/uploads/stats").json()
    assert stats["total_files"] == 3
    assert stats["total_size"] == 2 * len(PNG_BYTES) + len(b"%PDF-1.4")
    assert stats["categories"] == {"image": 2, "document": 1}


def test_serve_and_download(client, seed_users, upload_dir):
    headers = auth_headers(client, "editor")
    file_id = _upload(client, headers).json()["id"]

    served = client.get(f"/api/uploads/serve/{file_id}")
    assert served.status_code == 200
    assert served.content == PNG_BYTES
    assert served.headers["content-disposition"].startswith("inline")

    downloaded = client.get(f"/api/uploads/download/{file_id}")
    assert downloaded.status_code == 200
    assert downloaded.headers["content-disposition"].startswith("attachment")

    assert client.get("/api/uploads/serve/9999").status_code == 404


def test_serve_missing_physical_file(client, seed_users, upload_dir):
    headers = auth_headers(client, "editor")
    data = _upload(client, headers).json()
    os.remove(data["file_path"])

    resp = client.get(f"/api/uploads/serve/{data['id']}")
    assert resp.status_code == 404


def test_delete_removes_file(client, seed_users, upload_dir):
    headers = auth_headers(client, "editor")
    data = _upload(client, headers).json()

    resp = client.delete(f"/api/uploads/{data['id']}", headers=headers)
    assert resp.status_code == 200
    assert not os.path.exists(data["file_path"])
    assert client.get(f"/api/uploads/{data['id']}").status_code == 404


def test_resolve_category():
    assert upload_service.resolve_category(None, "image/jpeg") == "image"
    assert upload_service.resolve_category("general", "video/mp4") == "video"
    assert upload_service.resolve_category("Document", "image/png") == "document"
    assert upload_service.resolve_category("unknown", "application/zip") == "general"
    assert upload_service.categorize_file("application/vnd.ms-excel.sheet") == "document"
