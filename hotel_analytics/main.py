from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from hotel_analytics.api.router import api_router
from hotel_analytics.core.config import get_cors_origins, get_settings
from hotel_analytics.core.errors import (
    AppError,
    ComputationError,
    DataSourceError,
    app_error_handler,
    computation_error_handler,
    data_source_error_handler,
    validation_error_handler,
)
from hotel_analytics.core.logging import configure_logging


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.include_router(api_router, prefix=settings.api_prefix)

    app.add_exception_handler(DataSourceError, data_source_error_handler)
    app.add_exception_handler(ComputationError, computation_error_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    return app


app = create_app()
