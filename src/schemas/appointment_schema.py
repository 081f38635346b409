"""Technician and appointment data models with their enumerated value sets."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from src.schemas.customer_schema import Customer
from src.utils import is_canonical_date


class TechnicianLevel(str, Enum):
    APPRENTICE = "apprentice"
    JOURNEYMAN = "journeyman"
    MASTER = "master"


class ServiceType(str, Enum):
    INSTALLATION = "installation"
    MAINTENANCE = "maintenance"
    REPAIR = "repair"
    INSPECTION = "inspection"


class ServicePriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    EMERGENCY = "emergency"


class TimeSlot(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DayAvailability(BaseModel):
    """Per-slot availability flags for a single calendar day."""
    morning: bool = False
    afternoon: bool = False
    evening: bool = False

    def is_free(self, slot: TimeSlot) -> bool:
        return getattr(self, TimeSlot(slot).value)


class Technician(BaseModel):
    """Field technician with a skill level, specialty tags, and availability.

    A date missing from ``availability`` means no availability data,
    which is treated as unavailable.
    """
    id: str
    name: str
    level: TechnicianLevel
    specialties: list[str] = Field(default_factory=list)
    availability: dict[str, DayAvailability] = Field(default_factory=dict)

    @field_validator("availability")
    @classmethod
    def _canonical_date_keys(cls, value: dict[str, DayAvailability]) -> dict[str, DayAvailability]:
        bad = [key for key in value if not is_canonical_date(key)]
        if bad:
            raise ValueError(f"Availability keys must be YYYY-MM-DD dates: {bad}")
        return value

    def is_available(self, date: str, slot: TimeSlot) -> bool:
        day = self.availability.get(date)
        return day is not None and day.is_free(slot)

    def has_specialty(self, tag: str) -> bool:
        return tag in self.specialties


class Appointment(BaseModel):
    """A scheduled service visit.

    ``customer`` and ``technician`` are value snapshots taken when the
    appointment is built, not live references to roster records.
    """
    id: str
    customer_id: str
    customer: Customer
    technician_id: str
    technician: Technician
    service_type: ServiceType
    service_description: str = ""
    priority: ServicePriority = ServicePriority.NORMAL
    date: str
    time_slot: TimeSlot
    estimated_duration: int
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _canonical_date(cls, value: str) -> str:
        if not is_canonical_date(value):
            raise ValueError(f"Appointment date must be YYYY-MM-DD, got {value!r}")
        return value
