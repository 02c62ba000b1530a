from contextlib import asynccontextmanager
from typing import Any

import structlog
from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from patient_store.di_container import make_di_container, make_settings_container, ENV_PATH
from patient_store.infrastructure.routes import build_routers
from patient_store.logger import setup_logger
from patient_store.middlewares import HTTPLogMiddleware
from patient_store.settings import HTTPServerSettings, AppSettings


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        await app.state.dishka_container.close()


async def bad_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # undecodable body or non-numeric id never reaches the store
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_server(http_server_settings: HTTPServerSettings, app_settings: AppSettings) -> FastAPI:
    app = FastAPI(
        title="patient-store",
        version=http_server_settings.api_version,
        docs_url=None if not app_settings.is_dev() else "/docs",
        redoc_url=None,
        redirect_slashes=False,
        lifespan=lifespan,
    )
    app.add_exception_handler(RequestValidationError, bad_request_handler)

    app.add_middleware(
        HTTPLogMiddleware,
        logger=structlog.get_logger('http'),
        dev=app_settings.is_dev()
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=http_server_settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in build_routers(http_server_settings.patient_prefixes):
        app.include_router(router[0], prefix=router[1])

    return app


def create_app(container: AsyncContainer | None = None, env_file: str | None = ENV_PATH) -> FastAPI:
    settings_container = make_settings_container(env_file)
    http_server_settings = settings_container.get(HTTPServerSettings)
    app_settings = settings_container.get(AppSettings)
    settings_container.close()

    setup_logger(app_settings.is_dev())
    app = create_server(http_server_settings, app_settings)
    setup_dishka(container or make_di_container(env_file), app)

    return app


def bootstrap() -> tuple[FastAPI, dict[str, Any]]:
    settings_container = make_settings_container()
    http_server_settings = settings_container.get(HTTPServerSettings)
    settings_container.close()

    return create_app(), {
        'host': http_server_settings.http_host,
        'port': http_server_settings.http_port,
    }
