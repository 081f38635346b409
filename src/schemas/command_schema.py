"""Structured intents produced by the command parser and executor results."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.schemas.appointment_schema import Appointment, ServiceType
from src.utils import is_canonical_date


class CommandAction(str, Enum):
    RESCHEDULE = "reschedule"
    CANCEL = "cancel"
    INFO = "info"
    CREATE = "create"
    UNKNOWN = "unknown"


class SchedulingIntent(BaseModel):
    """A partially filled interpretation of one free-text instruction."""
    model_config = ConfigDict(validate_assignment=True)

    action: CommandAction = CommandAction.UNKNOWN
    customer_name: Optional[str] = None
    customer_id: Optional[str] = None
    technician_name: Optional[str] = None
    appointment_id: Optional[str] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    shift_days: Optional[int] = None
    affected_appointments: Optional[list[str]] = None
    service_type: Optional[ServiceType] = None
    description: Optional[str] = None
    address: Optional[str] = None
    original: str = ""

    @field_validator("from_date", "to_date")
    @classmethod
    def _canonical_dates(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_canonical_date(value):
            raise ValueError(f"Intent dates must be YYYY-MM-DD, got {value!r}")
        return value


class CommandResult(BaseModel):
    """Updated appointment snapshot plus a human-readable confirmation."""
    appointments: list[Appointment] = Field(default_factory=list)
    message: str
