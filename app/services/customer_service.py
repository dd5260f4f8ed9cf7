# app/services/customer_service.py
import uuid
from typing import Callable

from app.core.errors import ValidationError
from app.core.logging import get_logger
from app.crud.customer_crud import CustomerRepository
from app.schemas.customer_schemas import Customer, CustomerCreate, CustomerUpdate
from app.utils.clock import Clock, utcnow

logger = get_logger(__name__)


def generate_customer_id() -> str:
    return str(uuid.uuid4())


def _require_name_and_email(name: str | None, email: str | None):
    missing = [field for field, value in (("name", name), ("email", email)) if not value]
    if missing:
        raise ValidationError("Name and email are required", fields=missing)


class CustomerService:
    """
    Business rules for customers: id generation, required fields and timestamps.
    This is the only entry point the API layer calls.
    """

    def __init__(
        self,
        repository: CustomerRepository,
        clock: Clock = utcnow,
        id_factory: Callable[[], str] = generate_customer_id,
    ):
        self.repository = repository
        self.clock = clock
        self.id_factory = id_factory

    def create(self, customer_in: CustomerCreate) -> Customer:
        _require_name_and_email(customer_in.name, customer_in.email)

        now = self.clock()
        customer = Customer(
            id=customer_in.id or self.id_factory(),
            name=customer_in.name,
            email=customer_in.email,
            created_at=now,
            updated_at=now,
        )
        created = self.repository.create(customer)
        logger.info(f"Created customer {created.id}")
        return created

    def find_all(self) -> list[Customer]:
        return self.repository.find_all()

    def find_by_id(self, customer_id: str) -> Customer | None:
        return self.repository.find_by_id(customer_id)

    def update(self, customer_id: str, customer_in: CustomerUpdate) -> Customer | None:
        # Full replacement: both fields must be present even though the repository takes a partial patch
        _require_name_and_email(customer_in.name, customer_in.email)

        updated = self.repository.update(
            customer_id, {"name": customer_in.name, "email": customer_in.email}
        )
        if updated is None:
            logger.info(f"Update skipped, customer {customer_id} not found")
        else:
            logger.info(f"Updated customer {customer_id}")
        return updated

    def delete(self, customer_id: str) -> int:
        deleted = self.repository.delete(customer_id)
        logger.info(f"Deleted {deleted} row(s) for customer {customer_id}")
        return deleted
