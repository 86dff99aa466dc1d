from pydantic import BaseModel, Field


class BrokerStatus(BaseModel):
    destination: str
    connected: bool = Field(description="Publisher connection opened (lazy, on first send)")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall status: healthy|degraded")
    service: str
    environment: str
    broker: BrokerStatus
