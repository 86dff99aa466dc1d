from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from relay.api.dependencies import get_publisher
from relay.messaging.publisher import RabbitPublisher
from relay.schemas.api import BrokerStatus, HealthResponse

utility_router = APIRouter(
    prefix="/utility",
    tags=["Утилиты"],
    responses={404: {"description": "Не найдено"}},
)


@utility_router.get("/health")
async def health_check(
    request: Request,
    publisher: RabbitPublisher = Depends(get_publisher),
) -> HealthResponse:
    # Lazy connection: "not connected yet" is not a failure.
    app_settings = request.app.state.settings.app
    return HealthResponse(
        status="healthy",
        service=app_settings.app_name,
        environment=app_settings.environment,
        broker=BrokerStatus(
            destination=publisher.destination,
            connected=publisher.is_connected,
        ),
    )


__all__ = ["utility_router"]
