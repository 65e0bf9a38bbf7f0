import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from app.api.employees import router as employees_router
from app.api.health import router as health_router
from app.api.root import router as root_router
from app.core.config import settings
from app.core.errors import register_error_handlers
from app.core.logging import configure_logging
from app.core.origins import OriginGateMiddleware, OriginPolicy
from app.db.init import ensure_store_ready

configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Never serve with an uninitialized store: a failure here aborts startup.
    await run_in_threadpool(ensure_store_ready)
    logger.info("Employee Registry started (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(title="Employee Registry", lifespan=lifespan)

register_error_handlers(app)

# Disallowed origins are already turned away by the gate below; this only emits CORS headers.
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=".*",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# Added last so it runs first
app.add_middleware(OriginGateMiddleware, policy=OriginPolicy.from_settings(settings))

app.include_router(root_router)
app.include_router(health_router)
app.include_router(employees_router)
