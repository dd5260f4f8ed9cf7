from pydantic import BaseModel, Field
from datetime import datetime

class CustomerCreate(BaseModel):
    # name and email are optional here so the service, not request parsing, reports them missing
    id: str | None = Field(None, description="Optional caller-supplied id. A UUID4 is generated when empty.")
    name: str | None = Field(None, description="The name of the customer (person or company).")
    email: str | None = Field(None, description="The customer's email address. Unique across customers.")

class CustomerUpdate(BaseModel):
    """Full replacement of a customer's name and email. Both keys are required."""
    id: str | None = Field(None, description="Ignored. A customer's id never changes.")
    name: str = Field(..., description="The new name of the customer.")
    email: str = Field(..., description="The new email address of the customer.")

class Customer(BaseModel):
    id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
