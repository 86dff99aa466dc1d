from relay.api.routes.messages import messages_router
from relay.api.routes.utility import utility_router

__all__ = ["messages_router", "utility_router"]
