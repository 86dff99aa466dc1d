import asyncio
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from relay.api.error_handlers import install_error_handlers
from relay.api.routes import messages_router, utility_router
from relay.config.settings import Settings
from relay.config.settings import settings as default_settings
from relay.messaging.publisher import RabbitPublisher
from relay.utility.logging_client import (
    AppLogger,
    logger,
    set_request_id,
)

SLOW_REQUEST_THRESHOLD_MS = 1000


# =======================
# Lifespan: управление жизненным циклом приложения
# =======================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Publisher lifespan.

    The broker connection is opened lazily on the first message and closed
    on shutdown.
    """
    app.state.logger.info(
        f"Publisher запущен, destination={app.state.publisher.destination}",
        component="publisher",
    )
    yield
    app.state.logger.info("Завершение работы publisher...", component="publisher")
    await app.state.publisher.close()


# =======================
# Request ID Middleware
# =======================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware for request ID tracking and request logging."""

    async def dispatch(self, request: Request, call_next):
        request_id = set_request_id(request.headers.get("X-Request-ID"))

        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time-ms"] = str(round(duration_ms, 2))

            if duration_ms > SLOW_REQUEST_THRESHOLD_MS:
                request.app.state.logger.structured(
                    "warning",
                    "slow_request",
                    component="http",
                    method=request.method,
                    path=str(request.url.path),
                    status_code=response.status_code,
                    duration_ms=round(duration_ms, 2),
                    request_id=request_id,
                )

            return response

        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            request.app.state.logger.log_exception(
                e,
                component="http",
                context={
                    "method": request.method,
                    "path": str(request.url.path),
                    "duration_ms": round(duration_ms, 2),
                    "request_id": request_id,
                },
            )
            raise


# =======================
# FastAPI приложение
# =======================


def create_app(
    settings: Optional[Settings] = None,
    publisher: Optional[RabbitPublisher] = None,
    app_logger: Optional[AppLogger] = None,
) -> FastAPI:
    settings = settings or default_settings
    app_logger = app_logger or logger

    app = FastAPI(
        debug=settings.app.debug,
        title="Stream Relay Publisher",
        description="HTTP -> RabbitMQ publisher",
        version=settings.app.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.logger = app_logger
    if publisher is None:
        publisher = RabbitPublisher(settings.broker, logger=app_logger)
    app.state.publisher = publisher

    install_error_handlers(app)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(messages_router)
    app.include_router(utility_router)
    return app


app = create_app()


# =======================
# Основная функция запуска
# =======================


async def main():
    """Запускает HTTP сервер publisher'а."""
    app_settings = default_settings.app
    logger.set_level(app_settings.log_level)
    config = uvicorn.Config(
        app,
        host=app_settings.host,
        port=app_settings.port,
        log_level=app_settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    await server.serve()


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Publisher остановлен вручную", component="publisher")


if __name__ == "__main__":
    run()
