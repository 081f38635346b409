"""
Applies a parsed SchedulingIntent to an appointment snapshot.

Every call returns a new list plus a confirmation message; the input list
and the appointments in it are never modified. Problems with the request
(no recognised action, no matching customer or technician) are reported
in the message, never raised.
"""

import random
from datetime import date, timedelta
from typing import Optional, Sequence

from src.logging_context import get_command_logger
from src.schemas.appointment_schema import (
    Appointment,
    AppointmentStatus,
    ServicePriority,
    ServiceType,
    Technician,
    TechnicianLevel,
    TimeSlot,
)
from src.schemas.command_schema import CommandAction, CommandResult, SchedulingIntent
from src.tools.appointments import build_appointment
from src.tools.customer import create_customer
from src.tools.services import specialty_tag
from src.utils import format_date, shift_date, short_date, today_str

logger = get_command_logger(__name__)

FALLBACK_MESSAGE = "I couldn't understand that request."
VOICE_COMMAND_NOTE = "Created via voice command"
NOTHING_TO_SHIFT_MESSAGE = "There are no upcoming appointments to shift."
OUT_OF_RANGE_MESSAGE = "That shift is out of range."
DEFAULT_SERVICE_TYPE = ServiceType.MAINTENANCE


def _direction(days: int) -> str:
    return "forward" if days > 0 else "back"


def _eligible_technicians(
    technicians: Sequence[Technician], service_type: ServiceType
) -> list[Technician]:
    """Technicians whose specialties fit the service; any non-apprentice can do maintenance."""
    tag = specialty_tag(service_type)
    eligible = []
    for tech in technicians:
        if tech.has_specialty(tag):
            eligible.append(tech)
        elif service_type == ServiceType.MAINTENANCE and tech.level != TechnicianLevel.APPRENTICE:
            eligible.append(tech)
    return eligible


def _create(
    intent: SchedulingIntent,
    appointments: list[Appointment],
    technicians: Sequence[Technician],
    today: date,
    rng: random.Random,
) -> CommandResult:
    service_type = intent.service_type or DEFAULT_SERVICE_TYPE
    candidates = _eligible_technicians(technicians, service_type) or list(technicians)
    if not candidates:
        return CommandResult(
            appointments=appointments,
            message=f"There is no technician available to take a {service_type.value} appointment.",
        )

    technician = rng.choice(candidates)
    customer = create_customer(name=intent.customer_name, address=intent.address)
    target_date = intent.to_date or format_date(today + timedelta(days=1))

    appointment = build_appointment(
        customer=customer,
        technician=technician,
        service_type=service_type,
        date=target_date,
        time_slot=TimeSlot.MORNING,
        description=intent.description or f"{service_type.value.capitalize()} service",
        priority=ServicePriority.NORMAL,
        status=AppointmentStatus.SCHEDULED,
        notes=VOICE_COMMAND_NOTE,
    )
    logger.info(
        "Created %s for %s on %s with %s",
        appointment.id, customer.name, target_date, technician.name,
    )

    message = f"Created a new {service_type.value} appointment"
    if intent.customer_name:
        message += f" for {customer.name}"
    message += f" on {short_date(target_date)}"
    return CommandResult(appointments=[*appointments, appointment], message=message)


def _shift(
    appointments: list[Appointment], targets: list[int], days: int
) -> Optional[list[Appointment]]:
    """New pool with the targeted appointments moved, or None if a date leaves the calendar."""
    try:
        moved = {
            index: appointments[index].model_copy(
                update={"date": shift_date(appointments[index].date, days)}
            )
            for index in targets
        }
    except OverflowError:
        logger.warning("Shift of %d day(s) is out of range", days)
        return None
    return [moved.get(index, appt) for index, appt in enumerate(appointments)]


def _reschedule(intent: SchedulingIntent, appointments: list[Appointment]) -> CommandResult:
    if intent.appointment_id and intent.to_date:
        for index, appt in enumerate(appointments):
            if appt.id == intent.appointment_id:
                appointments[index] = appt.model_copy(update={"date": intent.to_date})
                logger.info("Rescheduled %s from %s to %s", appt.id, appt.date, intent.to_date)
                return CommandResult(
                    appointments=appointments,
                    message=(
                        f"Rescheduled {appt.customer.name}'s appointment from "
                        f"{short_date(appt.date)} to {short_date(intent.to_date)}"
                    ),
                )

    elif intent.shift_days and intent.customer_name:
        needle = intent.customer_name.lower()
        targets = [i for i, a in enumerate(appointments) if needle in a.customer.name.lower()]
        if targets:
            shifted = _shift(appointments, targets, intent.shift_days)
            if shifted is None:
                return CommandResult(appointments=appointments, message=OUT_OF_RANGE_MESSAGE)
            logger.info(
                "Shifted %d appointment(s) for %r by %d day(s)", len(targets), needle, intent.shift_days
            )
            return CommandResult(
                appointments=shifted,
                message=(
                    f"Moved {intent.customer_name}'s appointment {_direction(intent.shift_days)} "
                    f"by {abs(intent.shift_days)} day(s)"
                ),
            )

    elif intent.shift_days:
        affected = set(intent.affected_appointments or [])
        targets = [i for i, a in enumerate(appointments) if a.id in affected]
        if not targets:
            return CommandResult(appointments=appointments, message=NOTHING_TO_SHIFT_MESSAGE)
        shifted = _shift(appointments, targets, intent.shift_days)
        if shifted is None:
            return CommandResult(appointments=appointments, message=OUT_OF_RANGE_MESSAGE)
        logger.info("Shifted %d appointment(s) by %d day(s)", len(targets), intent.shift_days)
        return CommandResult(
            appointments=shifted,
            message=(
                f"Shifted {len(targets)} appointments "
                f"{_direction(intent.shift_days)} by {abs(intent.shift_days)} day(s)"
            ),
        )

    if intent.customer_name and not intent.appointment_id:
        return CommandResult(
            appointments=appointments,
            message=f"I couldn't find an appointment for {intent.customer_name}.",
        )
    return CommandResult(appointments=appointments, message=FALLBACK_MESSAGE)


def _cancel(intent: SchedulingIntent, appointments: list[Appointment]) -> CommandResult:
    if intent.appointment_id:
        for index, appt in enumerate(appointments):
            if appt.id == intent.appointment_id:
                appointments[index] = appt.model_copy(
                    update={"status": AppointmentStatus.CANCELLED}
                )
                logger.info("Cancelled %s for %s", appt.id, appt.customer.name)
                return CommandResult(
                    appointments=appointments,
                    message=f"Cancelled {appt.customer.name}'s appointment",
                )

    if intent.customer_name:
        return CommandResult(
            appointments=appointments,
            message=f"I couldn't find an appointment for {intent.customer_name}.",
        )
    return CommandResult(appointments=appointments, message=FALLBACK_MESSAGE)


def _info(intent: SchedulingIntent, appointments: list[Appointment], today: date) -> CommandResult:
    if intent.technician_name:
        needle = intent.technician_name.lower()
        matches = [a for a in appointments if needle in a.technician.name.lower()]
        if not matches:
            message = f"I couldn't find any appointments for {intent.technician_name}"
        else:
            listing = ", ".join(
                f"{short_date(a.date)}: {a.customer.name} ({a.service_type.value})"
                for a in matches
            )
            message = f"{intent.technician_name} has these upcoming appointments: {listing}"
        return CommandResult(appointments=appointments, message=message)

    upcoming_from = today_str(today)
    upcoming = sum(1 for a in appointments if a.date >= upcoming_from)
    return CommandResult(
        appointments=appointments,
        message=f"You have {upcoming} upcoming appointments scheduled.",
    )


def execute_command(
    intent: SchedulingIntent,
    appointments: Sequence[Appointment],
    technicians: Optional[Sequence[Technician]] = None,
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> CommandResult:
    """
    Apply an intent and report what happened.

    ``technicians`` is the roster a created appointment is assigned from;
    without one, create requests report that nobody is available.
    """
    updated = list(appointments)
    today = today or date.today()

    if intent.action == CommandAction.CREATE:
        return _create(intent, updated, technicians or [], today, rng or random.Random())
    if intent.action == CommandAction.RESCHEDULE:
        return _reschedule(intent, updated)
    if intent.action == CommandAction.CANCEL:
        return _cancel(intent, updated)
    if intent.action == CommandAction.INFO:
        return _info(intent, updated, today)

    logger.info("Unrecognised command: %r", intent.original)
    return CommandResult(appointments=updated, message=FALLBACK_MESSAGE)
