# app/api/v1/dependencies.py
from fastapi import Depends, Request

from app.api.v1.security import authenticate
from app.core.context import AppContext
from app.services.customer_service import CustomerService


def get_app_context(request: Request) -> AppContext:
    """The context built by create_app for this application."""
    return request.app.state.context


def get_customer_service(context: AppContext = Depends(get_app_context)) -> CustomerService:
    return context.customer_service


def get_principal(request: Request, context: AppContext = Depends(get_app_context)) -> dict:
    """
    Authenticates the request with the configured AUTH_SCHEME.
    Raises AuthenticationError, which the API error handler turns into a 401.
    """
    return authenticate(request, context.settings.AUTH_SCHEME, context.settings)
