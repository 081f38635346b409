"""Shared test fixtures and helpers."""

import random
from datetime import date
from typing import Optional

import pytest

from src.schemas.appointment_schema import (
    Appointment,
    AppointmentStatus,
    DayAvailability,
    ServicePriority,
    ServiceType,
    Technician,
    TechnicianLevel,
    TimeSlot,
)
from src.schemas.customer_schema import Customer
from src.scheduling.session import ScheduleSession
from src.tools.appointments import build_appointment

# A Monday
TODAY = date(2026, 10, 19)


def make_technician(
    tech_id: str = "tech-1",
    name: str = "John Smith",
    level: TechnicianLevel = TechnicianLevel.MASTER,
    specialties: Optional[list[str]] = None,
    availability: Optional[dict[str, dict]] = None,
) -> Technician:
    """Helper to create a Technician; availability maps date -> slot flags."""
    return Technician(
        id=tech_id,
        name=name,
        level=level,
        specialties=specialties or [],
        availability={
            day: DayAvailability(**flags) for day, flags in (availability or {}).items()
        },
    )


def make_customer(cust_id: str = "cust-1", name: str = "Sarah Williams") -> Customer:
    """Helper to create a Customer with sensible defaults."""
    return Customer(
        id=cust_id,
        name=name,
        address="456 Oak Avenue, Springfield",
        phone="555-876-5432",
        email="swilliams@email.com",
    )


def make_appointment(
    appt_id: str = "appt-1",
    customer: Optional[Customer] = None,
    technician: Optional[Technician] = None,
    service_type: ServiceType = ServiceType.MAINTENANCE,
    date: str = "2026-10-20",
    time_slot: TimeSlot = TimeSlot.MORNING,
    priority: ServicePriority = ServicePriority.NORMAL,
    status: AppointmentStatus = AppointmentStatus.SCHEDULED,
) -> Appointment:
    """Helper to create an Appointment through the production factory."""
    return build_appointment(
        customer=customer or make_customer(),
        technician=technician or make_technician(),
        service_type=service_type,
        date=date,
        time_slot=time_slot,
        description="Test visit",
        priority=priority,
        status=status,
        notes="",
        appointment_id=appt_id,
    )


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def technicians() -> list[Technician]:
    free = {"morning": True, "afternoon": True, "evening": False}
    return [
        make_technician(
            "tech-1", "John Smith", TechnicianLevel.MASTER,
            ["commercial HVAC", "refrigeration", "heat pumps"],
            {"2026-10-20": free, "2026-10-21": {"morning": False}},
        ),
        make_technician(
            "tech-2", "Maria Garcia", TechnicianLevel.JOURNEYMAN,
            ["residential HVAC", "ductwork", "installations"],
            {"2026-10-20": {"afternoon": True, "evening": True}},
        ),
        make_technician(
            "tech-3", "David Johnson", TechnicianLevel.APPRENTICE,
            ["maintenance", "filter changes", "basic repairs"],
            {"2026-10-20": free},
        ),
        make_technician(
            "tech-4", "Priya Patel", TechnicianLevel.JOURNEYMAN,
            ["diagnostics", "repairs", "maintenance"],
            {"2026-10-20": free},
        ),
    ]


@pytest.fixture
def appointments(technicians) -> list[Appointment]:
    """Two past and four upcoming appointments around TODAY."""
    john, maria, david, _ = technicians
    sarah = make_customer("cust-2", "Sarah Williams")
    oakridge = make_customer("cust-1", "Oakridge Apartments")
    michael = make_customer("cust-4", "Michael Johnson")
    return [
        make_appointment("appt-1", oakridge, john, ServiceType.MAINTENANCE, "2026-10-15"),
        make_appointment("appt-2", sarah, maria, ServiceType.REPAIR, "2026-10-18", TimeSlot.AFTERNOON),
        make_appointment("appt-3", sarah, maria, ServiceType.INSTALLATION, "2026-10-19"),
        make_appointment("appt-4", michael, david, ServiceType.MAINTENANCE, "2026-10-21"),
        make_appointment("appt-5", oakridge, john, ServiceType.REPAIR, "2026-10-21", TimeSlot.AFTERNOON),
        make_appointment("appt-6", michael, john, ServiceType.INSPECTION, "2026-10-23"),
    ]


@pytest.fixture
def schedule_session(technicians, appointments, rng) -> ScheduleSession:
    return ScheduleSession(technicians, appointments, rng=rng, today=TODAY)
