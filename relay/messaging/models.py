"""
Pydantic-модель сообщения и wire-контракт.

На проводе тело сообщения — payload в UTF-8, без обёрток и схемы
(`content_type=text/plain`, `content_encoding=utf-8`).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from relay.shared.exceptions import InvalidMessageError

WIRE_CONTENT_TYPE = "text/plain"
WIRE_ENCODING = "utf-8"


class Message(BaseModel):
    """Сообщение канала: только строковый payload."""

    model_config = ConfigDict(frozen=True, strict=True)

    payload: str = Field(..., min_length=1, description="Содержимое сообщения")

    @classmethod
    def build(cls, payload: Any) -> "Message":
        """Создать сообщение, превращая ошибки валидации в InvalidMessageError."""
        try:
            return cls(payload=payload)
        except ValidationError as e:
            raise InvalidMessageError(
                "Message payload must be a non-empty string",
                details={"errors": e.errors(include_url=False, include_input=False)},
                original_error=e,
            ) from e

    def encode(self) -> bytes:
        return self.payload.encode(WIRE_ENCODING)

    @classmethod
    def decode(cls, body: bytes) -> "Message":
        try:
            payload = body.decode(WIRE_ENCODING)
        except UnicodeDecodeError as e:
            raise InvalidMessageError(
                "Message body is not valid UTF-8",
                details={"size": len(body)},
                original_error=e,
            ) from e
        return cls.build(payload)


__all__ = ["Message", "WIRE_CONTENT_TYPE", "WIRE_ENCODING"]
