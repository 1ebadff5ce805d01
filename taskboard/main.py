from contextlib import asynccontextmanager

from fastapi import FastAPI

from taskboard.auth.bootstrap import ensure_bootstrap_admin
from taskboard.db import SessionLocal
from taskboard.log import configure_logging
from taskboard.routes.auth import router as auth_router
from taskboard.routes.boards import router as boards_router
from taskboard.routes.comments import router as comments_router
from taskboard.routes.health import router as health_router
from taskboard.routes.members import router as members_router
from taskboard.routes.projects import router as projects_router
from taskboard.routes.tasks import router as tasks_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    with SessionLocal() as db:
        ensure_bootstrap_admin(db)
    yield

def create_app() -> FastAPI:
    app = FastAPI(title="taskboard-api", version="0.1.0", lifespan=lifespan)
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(projects_router)
    app.include_router(members_router)
    app.include_router(boards_router)
    app.include_router(tasks_router)
    app.include_router(comments_router)
    return app

app = create_app()
