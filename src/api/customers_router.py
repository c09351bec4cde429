"""
API endpoints for customer records.

POST accepts a JSON array of loosely-typed customer objects and stores them
all or not at all; rejected objects are echoed back verbatim.
"""

import json
import logging
from typing import Any, Callable

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_repository
from src.customers.ingestion import ingest_batch
from src.error_handler import ErrorHandler

logger = logging.getLogger(__name__)

router = APIRouter()
error_handler = ErrorHandler()


def _log_request(request: Request) -> None:
    logger.info("%s %s", request.method, request.url.path)


def _render(build: Callable[[], Any], endpoint: str, status_code: int = status.HTTP_200_OK, context: dict = None) -> Response:
    try:
        return JSONResponse(content=build(), status_code=status_code)
    except (TypeError, ValueError) as e:
        payload = error_handler.handle_exception(e, endpoint, context=context)
        return JSONResponse(content=payload, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def _read_json_body(request: Request) -> Any:
    """Decode the request body; None when it is empty or not valid JSON."""
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.info("Rejecting request body that is not valid JSON: %s", e)
        return None


@router.get("/customers", tags=["Customers"])
async def get_customers(request: Request, repository=Depends(get_repository)):
    """
    List all customers in compact form: name, first name and contacts joined by "; ".
    """
    _log_request(request)
    customers = repository.find_all()
    return _render(lambda: [c.to_compact() for c in customers], "GET /customers")


@router.get("/customers/{customer_id}", tags=["Customers"])
async def get_customer(customer_id: int, request: Request, repository=Depends(get_repository)):
    _log_request(request)
    customer = repository.find_by_id(customer_id)
    if customer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return _render(customer.to_compact, "GET /customers/{id}", context={"id": customer_id})


@router.post("/customers", tags=["Customers"])
async def post_customers(request: Request, repository=Depends(get_repository)):
    """
    Add new customers from a JSON array of objects.

    Ids are assigned when missing. Returns 201 with [] when every object was
    stored, 400 with the malformed objects (or null when the body is not a
    JSON array), or 409 with the objects whose id is already taken. Nothing
    is stored unless the whole batch is accepted.
    """
    _log_request(request)
    payload = await _read_json_body(request)
    result = ingest_batch(payload, repository)
    return _render(lambda: result.body, "POST /customers", status_code=result.outcome.status_code)


@router.put("/customers", tags=["Customers"])
async def put_customers(request: Request):
    """
    Update existing customers.

    Currently acknowledges the request with 202 without applying any change.
    """
    _log_request(request)
    return Response(status_code=status.HTTP_202_ACCEPTED)


@router.delete("/customers/{customer_id}", tags=["Customers"])
async def delete_customer(customer_id: int, request: Request, repository=Depends(get_repository)):
    _log_request(request)
    if customer_id < 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Customer id must not be negative")
    # Existence check and delete form one atomic step.
    with repository.lock:
        if not repository.exists_by_id(customer_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
        repository.delete_by_id(customer_id)
    return Response(status_code=status.HTTP_202_ACCEPTED)
