from fastapi import Request

from src.database.contracts import CrudRepository


def get_repository(request: Request) -> CrudRepository:
    """Dependency for the customer store owned by the running app"""
    return request.app.state.customer_repository
