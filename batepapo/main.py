import logging
from datetime import timedelta
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from batepapo.core.config import settings
from batepapo.core.logging import configure_logging
from batepapo.core.exceptions import register_exception_handlers
from batepapo.core.database import engine, init_db, store
from batepapo.core.scheduler import PeriodicTask
from batepapo.middleware import CorrelationIdMiddleware
from batepapo.services.eviction_service import EvictionSweeper

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)

# Middleware: correlation id
app.add_middleware(CorrelationIdMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Route imports
from batepapo.api.health import router as health_router
from batepapo.api.participants import router as participants_router
from batepapo.api.messages import router as messages_router
from batepapo.api.status import router as status_router

# Register routers
app.include_router(health_router)
app.include_router(participants_router)
app.include_router(messages_router)
app.include_router(status_router)

# Exception handlers
register_exception_handlers(app)

sweeper = EvictionSweeper(store, timeout=timedelta(seconds=settings.INACTIVITY_TIMEOUT_SECONDS))
sweep_task = PeriodicTask("eviction-sweep", settings.SWEEP_INTERVAL_SECONDS, sweeper.sweep)


@app.on_event("startup")
async def on_startup():
    logger.info("Starting app", extra={"app": settings.APP_NAME})

    if settings.MIGRATE_ON_START:
        logger.info("MIGRATE_ON_START enabled: creating tables")
        await init_db()

    if settings.SWEEP_ENABLED:
        sweep_task.start()


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("Shutting down")
    await sweep_task.stop()
    await engine.dispose()
