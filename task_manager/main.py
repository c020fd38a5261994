import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from task_manager.config import settings
from task_manager.db import create_tables
from task_manager.errors import register_error_handlers
from task_manager.routes.auth import router as auth_router
from task_manager.routes.health import router as health_router
from task_manager.routes.labels import router as labels_router
from task_manager.routes.task_statuses import router as task_statuses_router
from task_manager.routes.tasks import router as tasks_router
from task_manager.routes.users import router as users_router

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        create_tables()
        logger.info("database tables ensured")
    yield

def create_app() -> FastAPI:
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="task-manager", version="0.1.0", lifespan=lifespan)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(task_statuses_router)
    app.include_router(labels_router)
    app.include_router(tasks_router)
    return app

app = create_app()
