"""FastAPI application entry point."""

import logging
import typing as t
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shelfwise.core.config import SETTINGS
from shelfwise.core.database import close_db, init_db
from shelfwise.core.globals import OPENAPI_TAGS
from shelfwise.routers import api_router
from shelfwise.services import Notifier, send_pantry_reminders_task
from shelfwise.services.push_notifications import create_notifier

logging.basicConfig(
    level=logging.DEBUG if SETTINGS.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
LOGGER: logging.Logger = logging.getLogger(__name__)

SCHEDULER: AsyncIOScheduler = AsyncIOScheduler()


@asynccontextmanager
async def lifespan(app: FastAPI) -> t.AsyncGenerator[None, None]:
    """Application lifespan events.

    args:
        app (FastAPI): The FastAPI application instance.
    """
    LOGGER.info("Starting Shelfwise API...")
    await init_db()
    LOGGER.info("Database tables initialized")

    notifier: Notifier | None = (
        create_notifier() if SETTINGS.push_enabled else None
    )
    app.state.notifier = notifier

    SCHEDULER.add_job(
        send_pantry_reminders_task,
        trigger=CronTrigger.from_crontab(
            SETTINGS.reminder_cron, timezone=SETTINGS.reminder_timezone
        ),
        args=[notifier],
        id="pantry_reminders",
        name="Send pantry reminders",
        replace_existing=True,
    )
    SCHEDULER.start()
    LOGGER.info(
        "Pantry reminders scheduled at '%s' (%s)",
        SETTINGS.reminder_cron,
        SETTINGS.reminder_timezone,
    )

    yield

    LOGGER.info("Shutting down Shelfwise...")
    SCHEDULER.shutdown(wait=False)
    await close_db()
    LOGGER.info("Cleanup complete")


APPLICATION: FastAPI = FastAPI(
    title=SETTINGS.app_name,
    description="Shelfwise - Pantry photo scanning, recipes and reminders",
    version=SETTINGS.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=OPENAPI_TAGS,
)

APPLICATION.add_middleware(
    CORSMiddleware,
    allow_origins=SETTINGS.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

APPLICATION.include_router(api_router)


@APPLICATION.get("/health", tags=["Health"])
async def health_check() -> t.Dict[str, str]:
    """Health check endpoint for monitoring.

    Returns:
        t.Dict[str, str]: A dictionary indicating the health status.
    """
    return {"status": "healthy"}
