"""
Mock customer records.

In production, this would query the CRM behind the scheduling board.
"""

import logging
import re
import uuid
from typing import Optional

from src.schemas.customer_schema import Customer

logger = logging.getLogger(__name__)

PLACEHOLDER_ADDRESS = "Address to be confirmed"
PLACEHOLDER_PHONE = "555-000-0000"
PLACEHOLDER_EMAIL_DOMAIN = "example.com"
DEFAULT_CUSTOMER_NAME = "New Customer"

_CUSTOMERS: list[dict] = [
    {
        "id": "cust-1",
        "name": "Oakridge Apartments",
        "address": "1234 Maple Street, Springfield",
        "phone": "555-123-4567",
        "email": "manager@oakridgeapts.com",
        "notes": "Large apartment complex with 50 units. Multiple systems.",
    },
    {
        "id": "cust-2",
        "name": "Sarah Williams",
        "address": "456 Oak Avenue, Springfield",
        "phone": "555-876-5432",
        "email": "swilliams@email.com",
        "notes": "Prefers afternoon appointments. Has a dog.",
    },
    {
        "id": "cust-3",
        "name": "Riverfront Office Park",
        "address": "789 River Road, Springfield",
        "phone": "555-222-3333",
        "email": "facilities@riverfrontoffice.com",
        "notes": "After-hours access requires security notification.",
    },
    {
        "id": "cust-4",
        "name": "Michael Johnson",
        "address": "101 Pine Lane, Springfield",
        "phone": "555-444-5555",
        "email": "mjohnson@email.com",
    },
    {
        "id": "cust-5",
        "name": "Greenview Shopping Center",
        "address": "200 Retail Drive, Springfield",
        "phone": "555-999-8888",
        "email": "maintenance@greenviewmall.com",
        "notes": "Multiple units on roof. Access through service corridor.",
    },
]


def get_customers() -> list[Customer]:
    """Fresh copies of the mock customer list."""
    return [Customer(**record) for record in _CUSTOMERS]


def placeholder_email(name: str) -> str:
    """Derive a placeholder address from a name, e.g. ``jane.doe@example.com``."""
    local = ".".join(re.findall(r"[a-z0-9]+", name.lower())) or "customer"
    return f"{local}@{PLACEHOLDER_EMAIL_DOMAIN}"


def create_customer(
    name: Optional[str] = None,
    address: Optional[str] = None,
    phone: Optional[str] = None,
    email: Optional[str] = None,
    notes: Optional[str] = None,
) -> Customer:
    """Create an ad hoc customer, filling any missing contact field with a placeholder."""
    display_name = name.strip().title() if name and name.strip() else DEFAULT_CUSTOMER_NAME
    customer = Customer(
        id=f"cust-{uuid.uuid4().hex[:8]}",
        name=display_name,
        address=address.strip() if address and address.strip() else PLACEHOLDER_ADDRESS,
        phone=phone or PLACEHOLDER_PHONE,
        email=email or placeholder_email(display_name),
        notes=notes,
    )
    logger.info("New customer created: %s (%s)", customer.name, customer.id)
    return customer
