"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database import create_tables
from .errors import register_error_handlers
from .routers.accounts import router as accounts_router
from .routers.admin_users import router as admin_users_router
from .routers.auth import router as auth_router
from .routers.clients import router as clients_router
from .routers.users import router as users_router
from .schemas import HealthRead

SERVICE_NAME = "caja-server"

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Ensure database tables exist before serving requests."""

    await create_tables()
    logger.info("Database tables verified/created.")
    if settings.secret_key == "change-me":
        logger.warning("JWT_SECRET is not set; using the insecure development default.")
    yield


app = FastAPI(title="Proyecto Caja API", version="0.1.0", lifespan=lifespan)

# allow_credentials lets the session cookie travel cross-origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(clients_router)
app.include_router(accounts_router)
app.include_router(admin_users_router)


@app.get("/health", response_model=HealthRead, tags=["system"])
async def healthcheck() -> HealthRead:
    """Simple readiness probe for uptime checks."""

    return HealthRead(service=SERVICE_NAME)
