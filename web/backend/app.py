import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tracker.logger import get_logger
from web.backend.routers import tasks

logger = get_logger("api")


def create_app() -> FastAPI:
    app = FastAPI(title="Daily Tracker API", version="1.0")

    raw_origins = os.getenv("DAILY_TRACKER_ALLOWED_ORIGINS", "*")
    allow_origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    allow_credentials = "*" not in allow_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "service": "Daily Tracker"}

    app.include_router(tasks.router, prefix="/api/v1/tasks", tags=["tasks"])
    logger.info("API routes registered")

    return app


app = create_app()
