"""FastAPI 애플리케이션 진입점. 미들웨어, API 라우터, 업로드/정적 프론트엔드 서빙을 등록합니다."""

import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from studio_cms.config import settings
from studio_cms.database import Base, SessionLocal, engine
import studio_cms.models  # noqa: F401 - 모델 import로 metadata 등록
from studio_cms.routers import auth, content, users, audit, uploads
from studio_cms.services import auth_service

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Studio CMS",
    description="브랜딩 스튜디오 웹사이트 콘텐츠/계정/미디어 관리 API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register all routers
app.include_router(auth.router)
app.include_router(content.router)
app.include_router(users.router)
app.include_router(audit.router)
app.include_router(uploads.router)


@app.on_event("startup")
def ensure_schema():
    # 신규 기능 배포 시 누락된 테이블을 자동 생성합니다.
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        purged = auth_service.purge_expired_sessions(db)
        if purged:
            logger.info("[auth] purged %s expired sessions", purged)
    finally:
        db.close()


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "Studio CMS"}


# Static file serving for uploads
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# Serve frontend static files
frontend_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "frontend")
if os.path.exists(frontend_dir):
    app.mount("/", StaticFiles(directory=frontend_dir, html=True), name="frontend")
