import bcrypt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.database import Base, get_db
from app.main import app
from app.models.user import User
from app.models.menu import Menu

TEST_DB_URL = "sqlite:///./test_kimjongseo.db"
TEST_PASSWORD = "password123!"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


def _fast_hash(password: str) -> str:
    # 테스트 속도를 위해 낮은 cost로 해시한다. 검증은 해시에 기록된 cost를 따른다.
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "admin": User(username="admin", password_hash=_fast_hash(TEST_PASSWORD), role="admin"),
        "editor": User(username="editor", password_hash=_fast_hash(TEST_PASSWORD), role="editor"),
        "viewer": User(username="viewer", password_hash=_fast_hash(TEST_PASSWORD), role="viewer"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_menus(db):
    """about-general(life(early-years), significance), organization(history), contact."""
    about = Menu(name="절재 김종서 장군", url="about-general", sort_order=1, type="section")
    organization = Menu(name="기념사업회", url="organization", sort_order=2, type="section")
    contact = Menu(name="연락처", url="contact", sort_order=3)
    db.add_all([about, organization, contact])
    db.flush()

    life = Menu(name="생애 및 업적", url="life", parent_id=about.id, sort_order=1)
    significance = Menu(name="역사적 의의", url="significance", parent_id=about.id, sort_order=2)
    history = Menu(name="연혁", url="history", parent_id=organization.id, sort_order=1)
    db.add_all([life, significance, history])
    db.flush()

    early_years = Menu(name="어린 시절", url="early-years", parent_id=life.id, sort_order=1)
    db.add(early_years)
    db.commit()

    menus = {
        "about": about,
        "organization": organization,
        "contact": contact,
        "life": life,
        "significance": significance,
        "history": history,
        "early_years": early_years,
    }
    for m in menus.values():
        db.refresh(m)
    return menus


def get_token(client, username: str, password: str = TEST_PASSWORD) -> str:
    resp = client.post("/api/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, username: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, username)}"}
