# app/db/bootstrap.py
from app.core.logging import get_logger
from app.db.models import CUSTOMERS_TABLE, customer_columns
from app.db.store import StoreAdapter

logger = get_logger(__name__)


def initialize_schema(store: StoreAdapter) -> bool:
    """
    Creates the customers table if it is missing.
    Safe to call repeatedly. Returns True when the table was created.
    """
    if store.table_exists(CUSTOMERS_TABLE):
        return False

    store.create_table(CUSTOMERS_TABLE, customer_columns())
    logger.info("Customers table created")
    return True
