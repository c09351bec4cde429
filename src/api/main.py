"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI

from src.api.customers_router import router as customers_router
from src.api.dependencies import get_repository
from src.customers.demo_data import DEMO_CUSTOMERS
from src.customers.ingestion import ingest_batch
from src.database.contracts import CrudRepository
from src.database.customers import CustomerRepository
from src.utils.config_loader import load_app_config

app_cfg = load_app_config()

# Setup logging
logging.basicConfig(level=getattr(logging, app_cfg.log_level, logging.INFO))
logger = logging.getLogger(__name__)


def create_app(repository: Optional[CrudRepository] = None) -> FastAPI:
    """Build the app around one customer store (a fresh in-memory one by default)."""
    application = FastAPI(
        title=app_cfg.title,
        description="CRUD access to in-memory customer records",
        version=app_cfg.version,
    )

    # ========================================================================
    # DEPENDENCY INJECTION
    # ========================================================================
    application.state.customer_repository = repository if repository is not None else CustomerRepository()

    if app_cfg.seed_demo_customers:
        result = ingest_batch(DEMO_CUSTOMERS, application.state.customer_repository)
        logger.info("Seeded demo customers: %s", result.outcome.value)

    application.include_router(customers_router)

    # ========================================================================
    # ENDPOINTS
    # ========================================================================
    @application.get("/", tags=["Health"])
    async def root():
        """Health check endpoint."""
        return {"service": app_cfg.title, "status": "healthy", "version": app_cfg.version, "timestamp": datetime.now().isoformat()}

    @application.get("/health", tags=["Health"])
    async def health_check(repository=Depends(get_repository)):
        """Detailed health check (customer store size)."""
        return {"status": "healthy", "customers": repository.count(), "timestamp": datetime.now().isoformat()}

    logger.info("create_app() complete; app ready to serve")
    return application


app = create_app()
