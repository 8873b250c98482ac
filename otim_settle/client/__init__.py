from .http_service import HttpService
from .otim_client import OrchestrationClient, OtimClient

__all__ = ["HttpService", "OrchestrationClient", "OtimClient"]
