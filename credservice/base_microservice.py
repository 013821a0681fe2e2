import os
import logging
from fastapi.responses import JSONResponse
from typing import Any, Dict

# Setup logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(message)s",
)
logger = logging.getLogger("microservice")

SERVICE_NAME = "Credential Service"
SERVICE_VERSION = "0.1.0"

class MCPResponse(JSONResponse):
    """
    Standard envelope response for service-level endpoints.
    """
    def __init__(self, data: Any = None, message: str = "success", status: str = "ok", **kwargs):
        content = {
            "status": status,
            "message": message,
            "data": data,
        }
        super().__init__(content=content, **kwargs)

class BaseMicroservice:
    """
    Base class for all services. Provides:
    - Event/error logging
    - Standard envelope response
    """
    def __init__(self, service_name: str = "core"):
        self.service_name = service_name
        self.logger = logger

    def mcp_response(self, data: Any = None, message: str = "success", status: str = "ok"):
        """
        Return a standard envelope response.
        """
        return MCPResponse(data=data, message=message, status=status)

    def log_event(self, event: str, details: Dict[str, Any] = None):
        self.logger.info(f"EVENT: {event} | Service: {self.service_name} | Details: {details or {}}")

    def log_error(self, error: Exception, context: str = ""):
        self.logger.error(
            f"ERROR: {error.__class__.__name__}: {str(error)} | Service: {self.service_name} | Context: {context}"
        )
