"""
Caller-side holder of the current appointment snapshot.

The scheduling functions are pure: they take a snapshot and return a new
one. ScheduleSession is the one place that adopts each returned snapshot,
so commands issued through it apply strictly one after another.

Usage:
    session = ScheduleSession.with_mock_data()
    reply = session.handle_transcript("move back by 1 day")
"""

import logging
import random
import threading
from datetime import date
from typing import Optional

from src.logging_context import get_command_logger, new_command_id
from src.schemas.appointment_schema import (
    Appointment,
    ServicePriority,
    ServiceType,
    Technician,
    TimeSlot,
)
from src.schemas.command_schema import CommandResult
from src.schemas.customer_schema import Customer
from src.schemas.recommendation_schema import (
    AIRecommendation,
    DateSuggestion,
    EfficiencyReport,
    SmartSuggestions,
)
from src.scheduling.analyzer import analyze_efficiency
from src.scheduling.command_executor import execute_command
from src.scheduling.command_parser import parse_command
from src.scheduling.recommendations import (
    recommend_technicians,
    schedule_from_suggestion,
    smart_suggestions,
    suggest_optimal_dates,
)
from src.tools.appointments import delete_appointment, seed_appointments, update_appointment
from src.tools.customer import get_customers
from src.tools.technicians import generate_roster
from src.utils import today_str

logger = get_command_logger(__name__)


class ScheduleSession:
    """Owns the appointment snapshot for one dispatcher or voice session."""

    def __init__(
        self,
        technicians: list[Technician],
        appointments: Optional[list[Appointment]] = None,
        customers: Optional[list[Customer]] = None,
        rng: Optional[random.Random] = None,
        today: Optional[date] = None,
    ) -> None:
        self.technicians = list(technicians)
        self.customers = list(customers or [])
        self._appointments: list[Appointment] = list(appointments or [])
        self._rng = rng or random.Random()
        self._today = today
        self._lock = threading.Lock()
        self.history: list[CommandResult] = []

    @classmethod
    def with_mock_data(
        cls, today: Optional[date] = None, rng: Optional[random.Random] = None
    ) -> "ScheduleSession":
        """Session preloaded with the mock roster, customers, and appointments."""
        start = today or date.today()
        technicians = generate_roster(start=start)
        customers = get_customers()
        appointments = seed_appointments(technicians, customers, today=start)
        logging.getLogger(__name__).info(
            "Mock session: %d technicians, %d appointments", len(technicians), len(appointments)
        )
        return cls(technicians, appointments, customers, rng=rng, today=today)

    @property
    def today(self) -> date:
        return self._today or date.today()

    @property
    def appointments(self) -> list[Appointment]:
        """A copy of the current snapshot."""
        return list(self._appointments)

    def upcoming(self) -> list[Appointment]:
        """Appointments dated today or later, in date order."""
        start = today_str(self.today)
        return sorted(
            (a for a in self._appointments if a.date >= start),
            key=lambda a: (a.date, list(TimeSlot).index(a.time_slot)),
        )

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def handle_transcript(self, text: str) -> str:
        """Interpret one finalized utterance, adopt the new snapshot, and return the reply."""
        with self._lock:
            command_id = new_command_id()
            intent = parse_command(text, self._appointments, today=self.today)
            result = execute_command(
                intent,
                self._appointments,
                technicians=self.technicians,
                today=self.today,
                rng=self._rng,
            )
            self._appointments = result.appointments
            self.history.append(result)
            logger.info("%s -> %s", command_id, result.message)
            return result.message

    def add_appointment(
        self,
        customer: Customer,
        technician_id: str,
        service_type: ServiceType,
        date: str,
        time_slot: TimeSlot,
        priority: ServicePriority = ServicePriority.NORMAL,
        description: str = "",
    ) -> Appointment:
        """Book an appointment from a form or a picked suggestion."""
        technician = self.get_technician(technician_id)
        with self._lock:
            self._appointments = schedule_from_suggestion(
                self._appointments,
                customer=customer,
                technician=technician,
                service_type=service_type,
                priority=priority,
                date=date,
                time_slot=time_slot,
                description=description,
            )
            return self._appointments[-1]

    def update_appointment(self, appointment_id: str, **fields) -> Appointment:
        """Apply edited form fields to an existing appointment.

        A ``technician_id`` is resolved against the roster. The estimated
        duration stays as booked.

        Raises:
            KeyError: If the appointment or technician id is unknown.
            ValueError: For unknown, locked, or invalid field values.
        """
        if "technician_id" in fields and "technician" not in fields:
            fields["technician"] = self.get_technician(fields.pop("technician_id"))
        with self._lock:
            self._appointments = update_appointment(self._appointments, appointment_id, **fields)
            return next(a for a in self._appointments if a.id == appointment_id)

    def delete_appointment(self, appointment_id: str) -> None:
        """Remove an appointment outright. Cancelling keeps it; this does not.

        Raises:
            KeyError: If no appointment has that id.
        """
        with self._lock:
            self._appointments = delete_appointment(self._appointments, appointment_id)

    def get_technician(self, technician_id: str) -> Technician:
        for tech in self.technicians:
            if tech.id == technician_id:
                return tech
        raise KeyError(f"Technician {technician_id} not found")

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def recommend(
        self, service_type: ServiceType, date: str, time_slot: TimeSlot
    ) -> list[AIRecommendation]:
        return recommend_technicians(
            service_type, date, time_slot, self.technicians, self._appointments, rng=self._rng
        )

    def suggest_dates(
        self, service_type: ServiceType, priority: ServicePriority = ServicePriority.NORMAL
    ) -> list[DateSuggestion]:
        return suggest_optimal_dates(
            self._appointments, service_type, priority, today=self.today, rng=self._rng
        )

    def smart_suggestions(
        self,
        service_type: ServiceType,
        priority: ServicePriority,
        date: str,
        time_slot: TimeSlot,
    ) -> SmartSuggestions:
        return smart_suggestions(
            self._appointments,
            self.technicians,
            service_type,
            priority,
            date,
            time_slot,
            today=self.today,
            rng=self._rng,
        )

    def analyze(self) -> EfficiencyReport:
        return analyze_efficiency(self._appointments, rng=self._rng)
