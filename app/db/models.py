# app/db/models.py

from sqlalchemy import (
    Column,
    String,
    DateTime,
    func
)

CUSTOMERS_TABLE = "customers"


def customer_columns() -> list[Column]:
    """
    Column spec for the customers table.

    Returns fresh Column objects on every call, since a Column can only be
    bound to a single Table.
    """
    return [
        Column("id", String, primary_key=True),
        Column("name", String, nullable=False),
        Column("email", String, nullable=False, unique=True),
        Column("created_at", DateTime, server_default=func.current_timestamp()),
        Column("updated_at", DateTime, server_default=func.current_timestamp()),
    ]
