# app/crud/customer_crud.py
from typing import Any

from app.db.models import CUSTOMERS_TABLE
from app.db.store import StoreAdapter
from app.schemas.customer_schemas import Customer
from app.utils.clock import Clock, utcnow

# Never written by an update
_IMMUTABLE_FIELDS = ("id", "created_at")


class CustomerRepository:
    """Customer persistence scoped to the customers table."""

    table_name = CUSTOMERS_TABLE

    def __init__(self, store: StoreAdapter, clock: Clock = utcnow):
        self.store = store
        self.clock = clock

    def create(self, customer: Customer) -> Customer:
        """
        Inserts a fully populated customer and returns it unchanged.
        A duplicate id or email raises ConstraintViolationError.
        """
        self.store.insert(self.table_name, customer.model_dump())
        return customer

    def find_all(self) -> list[Customer]:
        return [Customer.model_validate(row) for row in self.store.select_all(self.table_name)]

    def find_by_id(self, customer_id: str) -> Customer | None:
        """Returns the customer, or None when no row has this id."""
        row = self.store.select_one(self.table_name, {"id": customer_id})
        return Customer.model_validate(row) if row is not None else None

    def update(self, customer_id: str, patch: dict[str, Any]) -> Customer | None:
        """
        Applies `patch`, bumps updated_at, and re-reads the row.

        An unknown id updates nothing and returns None.
        """
        values = {key: value for key, value in patch.items() if key not in _IMMUTABLE_FIELDS}
        values["updated_at"] = self.clock()
        self.store.update(self.table_name, {"id": customer_id}, values)
        return self.find_by_id(customer_id)

    def delete(self, customer_id: str) -> int:
        """Deletes the customer. Returns the number of rows removed (0 or 1)."""
        return self.store.delete_where(self.table_name, {"id": customer_id})
