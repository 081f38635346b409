"""
Appointment construction and the mock appointment pool.

In production, appointments would be loaded from and saved to the
scheduling backend. Here every function returns new lists so callers
always hold an explicit snapshot.
"""

import logging
import uuid
from datetime import date, timedelta
from typing import Optional

from src.schemas.appointment_schema import (
    Appointment,
    AppointmentStatus,
    ServicePriority,
    ServiceType,
    Technician,
    TimeSlot,
)
from src.schemas.customer_schema import Customer
from src.tools.services import estimated_duration
from src.utils import format_date

logger = logging.getLogger(__name__)

# (day offset, customer id, technician id, service, description, priority, slot)
_SEED_APPOINTMENTS: list[tuple] = [
    (0, "cust-1", "tech-1", ServiceType.MAINTENANCE,
     "Annual system check and filter replacement", ServicePriority.NORMAL, TimeSlot.MORNING),
    (0, "cust-2", "tech-2", ServiceType.REPAIR,
     "AC not cooling properly", ServicePriority.HIGH, TimeSlot.AFTERNOON),
    (1, "cust-3", "tech-1", ServiceType.INSPECTION,
     "Pre-summer inspection of cooling towers", ServicePriority.NORMAL, TimeSlot.MORNING),
    (3, "cust-4", "tech-3", ServiceType.MAINTENANCE,
     "Air filter replacement", ServicePriority.LOW, TimeSlot.MORNING),
    (3, "cust-5", "tech-1", ServiceType.REPAIR,
     "Refrigerant leak", ServicePriority.HIGH, TimeSlot.AFTERNOON),
    (4, "cust-2", "tech-2", ServiceType.MAINTENANCE,
     "Annual maintenance", ServicePriority.NORMAL, TimeSlot.AFTERNOON),
    (5, "cust-3", "tech-1", ServiceType.INSTALLATION,
     "New system installation", ServicePriority.NORMAL, TimeSlot.MORNING),
    (6, "cust-1", "tech-3", ServiceType.MAINTENANCE,
     "Quarterly maintenance", ServicePriority.LOW, TimeSlot.MORNING),
]


def new_appointment_id() -> str:
    return f"appt-{uuid.uuid4().hex[:8]}"


def build_appointment(
    customer: Customer,
    technician: Technician,
    service_type: ServiceType,
    date: str,
    time_slot: TimeSlot,
    description: str = "",
    priority: ServicePriority = ServicePriority.NORMAL,
    status: AppointmentStatus = AppointmentStatus.SCHEDULED,
    notes: Optional[str] = None,
    appointment_id: Optional[str] = None,
) -> Appointment:
    """Create an appointment with snapshot copies of customer and technician.

    The estimated duration is derived from the service type here and is
    never recomputed afterwards.
    """
    service_type = ServiceType(service_type)
    return Appointment(
        id=appointment_id or new_appointment_id(),
        customer_id=customer.id,
        customer=customer.model_copy(deep=True),
        technician_id=technician.id,
        technician=technician.model_copy(deep=True),
        service_type=service_type,
        service_description=description,
        priority=priority,
        date=date,
        time_slot=time_slot,
        estimated_duration=estimated_duration(service_type),
        status=status,
        notes=notes,
    )


def seed_appointments(
    technicians: list[Technician],
    customers: list[Customer],
    today: Optional[date] = None,
) -> list[Appointment]:
    """Build the demo appointment pool spread over the week starting today."""
    today = today or date.today()
    techs = {t.id: t for t in technicians}
    custs = {c.id: c for c in customers}
    pool = []
    for index, (offset, cust_id, tech_id, service, desc, priority, slot) in enumerate(
        _SEED_APPOINTMENTS, start=1
    ):
        if cust_id not in custs or tech_id not in techs:
            continue
        pool.append(
            build_appointment(
                customer=custs[cust_id],
                technician=techs[tech_id],
                service_type=service,
                date=format_date(today + timedelta(days=offset)),
                time_slot=slot,
                description=desc,
                priority=priority,
                notes="",
                appointment_id=f"appt-{index}",
            )
        )
    return pool


def add_appointment(appointments: list[Appointment], appointment: Appointment) -> list[Appointment]:
    """Return a new pool with the appointment appended."""
    logger.info(
        "Appointment added: %s for %s on %s (%s)",
        appointment.id, appointment.customer.name, appointment.date, appointment.time_slot.value,
    )
    return [*appointments, appointment]


def delete_appointment(appointments: list[Appointment], appointment_id: str) -> list[Appointment]:
    """Return a new pool without the given appointment.

    Raises:
        KeyError: If no appointment has that id.
    """
    remaining = [a for a in appointments if a.id != appointment_id]
    if len(remaining) == len(appointments):
        raise KeyError(f"Appointment {appointment_id} not found")
    logger.info("Appointment deleted: %s", appointment_id)
    return remaining


# Fixed once the appointment is built
LOCKED_FIELDS = frozenset({"id", "estimated_duration"})


def update_appointment(
    appointments: list[Appointment], appointment_id: str, **changes
) -> list[Appointment]:
    """Return a new pool with the given fields of one appointment replaced.

    Customer and technician replacements are snapshotted and their ids kept
    in step. The result is validated like a freshly built appointment; the
    estimated duration is not recomputed, even when the service type changes.

    Raises:
        KeyError: If no appointment has that id.
        ValueError: For unknown or locked fields.
        pydantic.ValidationError: If a new value is invalid.
    """
    unknown = changes.keys() - Appointment.model_fields.keys()
    if unknown:
        raise ValueError(f"Unknown appointment fields: {sorted(unknown)}")
    locked = changes.keys() & LOCKED_FIELDS
    if locked:
        raise ValueError(f"Appointment fields cannot be changed: {sorted(locked)}")
    for record in ("customer", "technician"):
        if f"{record}_id" in changes and record not in changes:
            raise ValueError(f"Pass the {record} record, not just {record}_id")

    if "customer" in changes:
        changes["customer"] = changes["customer"].model_copy(deep=True)
        changes["customer_id"] = changes["customer"].id
    if "technician" in changes:
        changes["technician"] = changes["technician"].model_copy(deep=True)
        changes["technician_id"] = changes["technician"].id

    updated = []
    found = False
    for appt in appointments:
        if appt.id == appointment_id:
            appt = Appointment.model_validate({**appt.model_dump(), **changes})
            found = True
        updated.append(appt)
    if not found:
        raise KeyError(f"Appointment {appointment_id} not found")

    logger.info("Appointment updated: %s (%s)", appointment_id, ", ".join(sorted(changes)))
    return updated
