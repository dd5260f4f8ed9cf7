from pydantic import BaseModel, Field
from typing import Any, Generic, TypeVar

T = TypeVar("T")

class ErrorInfo(BaseModel):
    kind: str
    detail: Any = None

class Envelope(BaseModel, Generic[T]):
    """The uniform wrapper around every response body."""
    success: bool
    message: str = Field("", description="Empty on success, a short summary on failure.")
    data: T | None = None

class ErrorEnvelope(Envelope[ErrorInfo]):
    success: bool = False
