"""Tests for applying parsed commands to an appointment snapshot."""

import pytest
from pydantic import ValidationError

from src.schemas.appointment_schema import AppointmentStatus, ServiceType
from src.schemas.command_schema import CommandAction, SchedulingIntent
from src.scheduling.command_executor import (
    FALLBACK_MESSAGE,
    NOTHING_TO_SHIFT_MESSAGE,
    OUT_OF_RANGE_MESSAGE,
    VOICE_COMMAND_NOTE,
    execute_command,
)
from src.scheduling.command_parser import parse_command
from tests.conftest import TODAY, make_appointment, make_customer


def run(text, appointments, technicians=None, rng=None):
    intent = parse_command(text, appointments, today=TODAY)
    return execute_command(intent, appointments, technicians=technicians, today=TODAY, rng=rng)


class TestReschedule:
    def test_only_date_changes(self, appointments):
        result = run("move Sarah Williams's appointment to friday", appointments)
        before = appointments[1]
        after = next(a for a in result.appointments if a.id == "appt-2")
        assert after.date == "2026-10-23"
        assert after.model_dump(exclude={"date"}) == before.model_dump(exclude={"date"})
        assert result.message == "Rescheduled Sarah Williams's appointment from Oct 18 to Oct 23"

    def test_input_snapshot_untouched(self, appointments):
        original_dates = [a.date for a in appointments]
        result = run("move Sarah Williams's appointment to friday", appointments)
        assert result.appointments is not appointments
        assert [a.date for a in appointments] == original_dates

    def test_bulk_shift_moves_upcoming_only(self, appointments):
        result = run("move back by 2 days", appointments)
        dates = {a.id: a.date for a in result.appointments}
        assert dates == {
            "appt-1": "2026-10-15",
            "appt-2": "2026-10-18",
            "appt-3": "2026-10-17",
            "appt-4": "2026-10-19",
            "appt-5": "2026-10-19",
            "appt-6": "2026-10-21",
        }
        assert result.message == "Shifted 4 appointments back by 2 day(s)"

    def test_named_shift_moves_every_match(self, appointments):
        intent = SchedulingIntent(
            action=CommandAction.RESCHEDULE, customer_name="Oakridge", shift_days=1
        )
        result = execute_command(intent, appointments, today=TODAY)
        dates = {a.id: a.date for a in result.appointments}
        assert dates["appt-1"] == "2026-10-16"
        assert dates["appt-5"] == "2026-10-22"
        assert dates["appt-4"] == "2026-10-21"
        assert result.message == "Moved Oakridge's appointment forward by 1 day(s)"

    def test_shift_with_nothing_upcoming(self):
        past = [make_appointment("appt-1", date="2026-10-01")]
        result = run("push back by 1 day", past)
        assert result.message == "There are no upcoming appointments to shift."
        assert result.appointments[0].date == "2026-10-01"

    def test_unknown_customer(self, appointments):
        result = run("move Bob Jones to friday", appointments)
        assert result.message == "I couldn't find an appointment for bob jones."
        assert result.appointments == appointments

    def test_known_customer_without_target(self, appointments):
        result = run("move Sarah Williams's appointment", appointments)
        assert result.message == FALLBACK_MESSAGE


class TestCancel:
    def test_cancel_marks_status_and_keeps_length(self):
        pool = [
            make_appointment("appt-7", customer=make_customer("cust-7", "John Smith Co")),
            make_appointment("appt-8"),
        ]
        result = run("cancel John Smith's appointment", pool)
        assert len(result.appointments) == 2
        assert result.appointments[0].status == AppointmentStatus.CANCELLED
        assert result.appointments[1].status == AppointmentStatus.SCHEDULED
        assert pool[0].status == AppointmentStatus.SCHEDULED
        assert "John Smith Co" in result.message

    def test_cancel_unknown_customer(self, appointments):
        result = run("cancel Bob Jones's appointment", appointments)
        assert result.message == "I couldn't find an appointment for bob jones."

    def test_cancel_without_name(self, appointments):
        result = run("cancel that appointment", appointments)
        assert result.message == FALLBACK_MESSAGE
        assert all(a.status == AppointmentStatus.SCHEDULED for a in result.appointments)


class TestCreate:
    def test_create_appends_one_appointment(self, appointments, technicians, rng):
        result = run(
            "create a maintenance appointment for Jane Doe on Friday",
            appointments, technicians, rng,
        )
        assert len(result.appointments) == len(appointments) + 1
        new = result.appointments[-1]
        assert new.service_type == ServiceType.MAINTENANCE
        assert new.estimated_duration == 60
        assert new.status == AppointmentStatus.SCHEDULED
        assert new.date == "2026-10-23"
        assert new.customer.name == "Jane Doe"
        assert new.notes == VOICE_COMMAND_NOTE
        assert new.technician_id in {t.id for t in technicians}
        assert result.message == "Created a new maintenance appointment for Jane Doe on Oct 23"

    def test_installation_goes_to_installer(self, appointments, technicians, rng):
        result = run("add an install job for Ann Lee tomorrow", appointments, technicians, rng)
        new = result.appointments[-1]
        assert new.technician_id == "tech-2"
        assert new.date == "2026-10-20"
        assert new.estimated_duration == 180

    def test_defaults_to_maintenance_tomorrow(self, appointments, technicians, rng):
        result = run("new job please", appointments, technicians, rng)
        new = result.appointments[-1]
        assert new.service_type == ServiceType.MAINTENANCE
        assert new.date == "2026-10-20"
        assert new.customer.name == "New Customer"
        assert result.message == "Created a new maintenance appointment on Oct 20"

    def test_no_roster(self, appointments, rng):
        result = run("create a repair appointment for Jane Doe", appointments, [], rng)
        assert result.appointments == appointments
        assert "no technician" in result.message


class TestInfo:
    def test_technician_listing(self, appointments):
        # Substring match on the technician name also picks up David Johnson
        result = run("show John's schedule", appointments)
        assert result.message == (
            "john has these upcoming appointments: "
            "Oct 15: Oakridge Apartments (maintenance), "
            "Oct 21: Michael Johnson (maintenance), "
            "Oct 21: Oakridge Apartments (repair), "
            "Oct 23: Michael Johnson (inspection)"
        )

    def test_technician_without_appointments(self, appointments):
        result = run("show Zed's schedule", appointments)
        assert result.message == "I couldn't find any appointments for zed"

    def test_general_count(self, appointments):
        result = run("show me the schedule", appointments)
        assert result.message == "You have 4 upcoming appointments scheduled."
        assert result.appointments == appointments


def test_unrecognised_input_leaves_pool_unchanged(appointments):
    result = run("what's the weather", appointments)
    assert result.message == FALLBACK_MESSAGE
    assert result.appointments == appointments


class TestShiftEdges:
    def test_out_of_calendar_shift_leaves_pool(self, appointments):
        intent = SchedulingIntent(
            action=CommandAction.RESCHEDULE,
            shift_days=10 ** 12,
            affected_appointments=["appt-3", "appt-4"],
        )
        result = execute_command(intent, appointments, today=TODAY)
        assert result.message == OUT_OF_RANGE_MESSAGE
        assert [a.date for a in result.appointments] == [a.date for a in appointments]

    def test_out_of_calendar_named_shift(self, appointments):
        intent = SchedulingIntent(
            action=CommandAction.RESCHEDULE, customer_name="Oakridge", shift_days=-(10 ** 7)
        )
        result = execute_command(intent, appointments, today=TODAY)
        assert result.message == OUT_OF_RANGE_MESSAGE
        assert result.appointments == appointments

    def test_stale_ids_are_not_counted(self, appointments):
        intent = SchedulingIntent(
            action=CommandAction.RESCHEDULE,
            shift_days=1,
            affected_appointments=["appt-3", "appt-gone", "appt-missing"],
        )
        result = execute_command(intent, appointments, today=TODAY)
        assert result.message == "Shifted 1 appointments forward by 1 day(s)"

    def test_only_stale_ids(self, appointments):
        intent = SchedulingIntent(
            action=CommandAction.RESCHEDULE, shift_days=1, affected_appointments=["appt-gone"]
        )
        result = execute_command(intent, appointments, today=TODAY)
        assert result.message == NOTHING_TO_SHIFT_MESSAGE


class TestIntentDates:
    @pytest.mark.parametrize("field", ["to_date", "from_date"])
    def test_weekday_name_rejected(self, field):
        with pytest.raises(ValidationError):
            SchedulingIntent(action=CommandAction.RESCHEDULE, appointment_id="appt-2", **{field: "friday"})

    def test_assignment_is_validated(self):
        intent = SchedulingIntent()
        with pytest.raises(ValidationError):
            intent.to_date = "10/23/2026"
