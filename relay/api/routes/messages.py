"""
Publisher HTTP routes.

`GET /sendMessage/{message}` wraps the path parameter into a `Message` and
hands it to the output channel. The response is a plain-text confirmation.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from relay.api.dependencies import get_logger, get_publisher
from relay.messaging.models import Message
from relay.messaging.publisher import RabbitPublisher
from relay.utility.logging_client import AppLogger

messages_router = APIRouter(tags=["Messages"])


@messages_router.get(
    "/sendMessage/{message}",
    response_class=PlainTextResponse,
    responses={
        422: {"description": "Empty payload"},
        503: {"description": "Message broker unavailable"},
    },
)
async def send_message(
    message: str,
    publisher: RabbitPublisher = Depends(get_publisher),
    logger: AppLogger = Depends(get_logger),
) -> str:
    logger.info(f"Receive message {message}", component="publisher")
    await publisher.send(Message.build(message))
    return f"Message {message} sent to the publishers"


__all__ = ["messages_router"]
