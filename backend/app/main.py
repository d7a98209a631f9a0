import logging
import sqlite3
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.routers import access, admin, applications, auth, bookmarks, employer, jobs

logger = logging.getLogger("app")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create/migrate the database and integrity-check it
    from app.database import SessionLocal, init_db
    from app.services.auth_service import auth_service

    try:
        init_db(settings.db_path)
        conn = sqlite3.connect(str(settings.db_path))
        result = conn.execute("PRAGMA integrity_check").fetchone()
        conn.close()
        if result and result[0] == "ok":
            logger.info("Database integrity check passed.")
        else:
            logger.error("DATABASE INTEGRITY CHECK FAILED: %s", result)
    except sqlite3.Error as exc:
        logger.error("Could not run startup schema/integrity check: %s", exc)

    if settings.admin_email and settings.admin_password:
        db = SessionLocal()
        try:
            auth_service.ensure_admin(
                db, settings.admin_email, settings.admin_password, settings.admin_full_name
            )
        finally:
            db.close()
    yield
    # Shutdown: drop all sessions
    auth_service.clear()


app = FastAPI(
    title="Job Portal",
    description="Job board: postings, applications, bookmarks and employer approval",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Redirect-To"],
)

app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(access.router, prefix=settings.api_prefix)
app.include_router(jobs.router, prefix=settings.api_prefix)
app.include_router(applications.router, prefix=settings.api_prefix)
app.include_router(bookmarks.router, prefix=settings.api_prefix)
app.include_router(employer.router, prefix=settings.api_prefix)
app.include_router(admin.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": VERSION}
