import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.audit.sink import AuditSink
from app.config import settings
from app.db import init_db
from app.errors import register_error_handlers
from app.routes.audit_log import router as audit_log_router
from app.routes.auth import router as auth_router
from app.routes.health import router as health_router
from app.routes.tasks import router as tasks_router
from app.routes.users import router as users_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("app")

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("starting secure-task-manager (env=%s)", settings.app_env)
    if settings.db_auto_create:
        init_db()
        logger.info("database tables ensured")

    yield

    logger.info("shutting down; audit log held %d entries", len(app.state.audit_sink))

def create_app(audit_sink: AuditSink | None = None) -> FastAPI:
    app = FastAPI(title="secure-task-manager", version="0.1.0", lifespan=lifespan)

    # one sink for the life of the process, handed to services per request
    app.state.audit_sink = audit_sink if audit_sink is not None else AuditSink()

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(tasks_router)
    app.include_router(audit_log_router)
    return app

app = create_app()
