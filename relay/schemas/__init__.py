from relay.schemas.api import BrokerStatus, HealthResponse

__all__ = ["BrokerStatus", "HealthResponse"]
