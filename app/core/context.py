# app/core/context.py
from dataclasses import dataclass

from app.core.config import Settings
from app.crud.customer_crud import CustomerRepository
from app.db.bootstrap import initialize_schema
from app.db.store import StoreAdapter
from app.services.customer_service import CustomerService
from app.utils.clock import Clock, utcnow


@dataclass
class AppContext:
    """Everything a request needs, built once at startup and kept on app.state."""
    settings: Settings
    store: StoreAdapter
    customer_service: CustomerService

    def close(self):
        self.store.dispose()


def build_context(settings: Settings, clock: Clock = utcnow) -> AppContext:
    """
    Connects to the database, creates the schema if needed and wires the service.
    Raises StoreConnectionError when the database cannot be reached.
    """
    store = StoreAdapter(settings.DATABASE_URL)
    store.ensure_connected()
    initialize_schema(store)

    repository = CustomerRepository(store, clock=clock)
    return AppContext(
        settings=settings,
        store=store,
        customer_service=CustomerService(repository, clock=clock),
    )
