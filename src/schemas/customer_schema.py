"""Customer data model."""

from pydantic import BaseModel
from typing import Optional


class Customer(BaseModel):
    """Customer record, copied into each appointment as a snapshot."""
    id: str
    name: str
    address: str
    phone: str
    email: str
    notes: Optional[str] = None
