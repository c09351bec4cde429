"""Build the generic 500 payload for faults raised while rendering customers."""
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class ErrorHandler:
    def handle_exception(self, exc: Exception, endpoint: str, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        logger.error("Failed to serialize response for %s: %s", endpoint, exc, exc_info=True)
        return {
            "message": "An internal error occurred while processing your request. Please try again later.",
            "endpoint": endpoint,
            "error": type(exc).__name__,
            "context": context or {},
        }
