import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from studio_cms.config import settings
from studio_cms.database import Base, get_db
from studio_cms.main import app
from studio_cms.models.user import User
from studio_cms.services.auth_service import hash_password

TEST_DB_URL = "sqlite:///./test_studio_cms.db"
TEST_PASSWORD = "pass1234"

# bcrypt 최소 cost로 테스트 속도를 맞춘다.
settings.BCRYPT_ROUNDS = 4

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


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
        "super_admin": User(email="super@studio.com", name="Super", role="super_admin"),
        "admin": User(email="admin@studio.com", name="Admin", role="admin"),
        "editor": User(email="editor@studio.com", name="Editor", role="editor"),
    }
    for u in users.values():
        u.password_hash = hash_password(TEST_PASSWORD)
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


def get_token(client, email: str, password: str = TEST_PASSWORD) -> str:
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, email: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, email)}"}
