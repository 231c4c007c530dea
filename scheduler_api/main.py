import logging

logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
)
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scheduler_api.config import get_settings
from scheduler_api.controllers.availability import router as availability_router
from scheduler_api.controllers.events import router as events_router
from scheduler_api.controllers.health import router as health_router
from scheduler_api.controllers.recommendations import router as recommendations_router
from scheduler_api.controllers.timeslots import router as timeslots_router
from scheduler_api.errors import register_exception_handlers
from scheduler_api.lifespan import cleanup_resources, setup_resources
from scheduler_api.middleware import HTTPLogMiddleware

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    resources = await setup_resources()
    try:
        yield
    finally:
        await cleanup_resources(resources)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Scheduling Assistant API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins,
        allow_origin_regex=settings.cors.origins_regex or None,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.debug.request:
        logging.getLogger("scheduler_api.http").setLevel(logging.DEBUG)
        app.add_middleware(HTTPLogMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(events_router, prefix=API_PREFIX)
    app.include_router(timeslots_router, prefix=API_PREFIX)
    app.include_router(availability_router, prefix=API_PREFIX)
    app.include_router(recommendations_router, prefix=API_PREFIX)
    return app


app = create_app()
