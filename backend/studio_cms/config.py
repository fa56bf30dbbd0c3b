"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./studio_cms.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    LOG_LEVEL: str = "INFO"

    # JWT / session
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30 * 24 * 60  # 30 days
    BCRYPT_ROUNDS: int = 12

    # File upload
    MAX_UPLOAD_SIZE: int = 50 * 1024 * 1024  # 50 MB
    ALLOWED_EXTENSIONS: List[str] = [
        "jpg", "jpeg", "png", "gif", "webp", "svg", "avif",
        "mp4", "webm", "mov",
        "pdf",
    ]
    UPLOAD_DIR: str = "uploads"

    # Audit log
    AUDIT_LOG_DEFAULT_LIMIT: int = 50
    AUDIT_LOG_MAX_LIMIT: int = 200

    # Bootstrap (scripts/init_db.py)
    DEFAULT_ADMIN_EMAIL: str = "admin@nabshy.com"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"
    DEFAULT_ADMIN_NAME: str = "Super Admin"
    CONTENT_SEED_PATH: str = ""

    class Config:
        # 실행 cwd와 무관하게 backend/.env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
