from fastapi import APIRouter, Depends
from app.utils.decorators import log_request
from app.api.v1.dependencies import get_app_context
from app.core.context import AppContext
from app.db.models import CUSTOMERS_TABLE

router = APIRouter()

@router.get("/health")
@log_request
def health_check(context: AppContext = Depends(get_app_context)):
    """Checks the health of the application and that the customers table is there."""
    return {"status": "ok", "database": context.store.table_exists(CUSTOMERS_TABLE)}
