import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from taskapi.core.config import settings
from taskapi.core.database import engine, Base
from taskapi.core.errors import register_exception_handlers
from taskapi.models import task, user  # noqa: F401  (tables)
from taskapi.routers import health, auth, tasks
from taskapi.seed import seed_on_startup

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Init DB
Base.metadata.create_all(bind=engine)

if settings.SEED_DATABASE:
    seed_on_startup()

app = FastAPI(
    title="Task Manager API",
    version="1.0.0",
    description="Per-user task management with JWT authentication"
)

# CORS pour le frontend
origins = settings.CORS_ORIGINS.split(",") if settings.CORS_ORIGINS != "*" else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(auth.router)
app.include_router(tasks.router)
