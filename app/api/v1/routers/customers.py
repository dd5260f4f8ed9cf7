# app/api/v1/routers/customers.py
from fastapi import APIRouter, Depends, status
from typing import List

from app.api.v1.dependencies import get_customer_service, get_principal
from app.api.v1.responses import success_response
from app.schemas.customer_schemas import Customer, CustomerCreate, CustomerUpdate
from app.schemas.response_schemas import Envelope, ErrorEnvelope
from app.services.customer_service import CustomerService
from app.utils.decorators import log_request

# Failures are turned into envelopes by the handlers in app.api.v1.responses
router = APIRouter(
    dependencies=[Depends(get_principal)],
    responses={
        400: {"model": ErrorEnvelope},
        401: {"model": ErrorEnvelope},
        409: {"model": ErrorEnvelope},
        500: {"model": ErrorEnvelope},
    },
)


@router.post("", response_model=Envelope[Customer], status_code=status.HTTP_201_CREATED)
@log_request
def create_customer(
        payload: CustomerCreate,
        service: CustomerService = Depends(get_customer_service),
):
    """Create a new customer. An id is generated when none is supplied."""
    return success_response(service.create(payload), status.HTTP_201_CREATED)


@router.get("", response_model=Envelope[List[Customer]])
@log_request
def find_all_customers(service: CustomerService = Depends(get_customer_service)):
    """List all customers."""
    return success_response(service.find_all())


@router.get("/{customer_id}", response_model=Envelope[Customer])
@log_request
def find_customer_by_id(
        customer_id: str,
        service: CustomerService = Depends(get_customer_service),
):
    """Get a single customer by id. `data` is null when it does not exist."""
    return success_response(service.find_by_id(customer_id))


@router.put("/{customer_id}", response_model=Envelope[Customer])
@log_request
def update_customer(
        customer_id: str,
        payload: CustomerUpdate,
        service: CustomerService = Depends(get_customer_service),
):
    """Replace a customer's name and email. `data` is null when it does not exist."""
    return success_response(service.update(customer_id, payload))


@router.delete("/{customer_id}", response_model=Envelope[int])
@log_request
def delete_customer(
        customer_id: str,
        service: CustomerService = Depends(get_customer_service),
):
    """Delete a customer. `data` is the number of rows removed."""
    return success_response(service.delete(customer_id))
