"""Tests for technician recommendations and date suggestions."""

import random

import pytest

from src.schemas.appointment_schema import (
    ServicePriority,
    ServiceType,
    TechnicianLevel,
    TimeSlot,
)
from src.scheduling.recommendations import (
    _reason,
    recommend_technicians,
    schedule_from_suggestion,
    smart_suggestions,
    suggest_optimal_dates,
)
from tests.conftest import TODAY, make_appointment, make_customer, make_technician


class TestTechnicianFiltering:
    def test_only_technicians_free_in_slot_are_candidates(self, technicians, rng):
        result = recommend_technicians(
            ServiceType.REPAIR, "2026-10-20", TimeSlot.MORNING, technicians, rng=rng
        )
        ids = {r.technician_id for r in result}
        assert ids == {"tech-1", "tech-3", "tech-4"}

    def test_slot_flag_false_excludes_technician(self, technicians, rng):
        result = recommend_technicians(
            ServiceType.REPAIR, "2026-10-21", TimeSlot.MORNING, technicians, rng=rng
        )
        assert result == []

    def test_missing_date_means_unavailable(self, technicians, rng):
        result = recommend_technicians(
            ServiceType.MAINTENANCE, "2026-11-30", TimeSlot.MORNING, technicians, rng=rng
        )
        assert result == []

    def test_evening_slot(self, technicians, rng):
        result = recommend_technicians(
            ServiceType.INSTALLATION, "2026-10-20", TimeSlot.EVENING, technicians, rng=rng
        )
        assert [r.technician_id for r in result] == ["tech-2"]

    def test_unavailable_never_recommended_across_seeds(self, technicians):
        for seed in range(25):
            for slot in TimeSlot:
                result = recommend_technicians(
                    ServiceType.INSPECTION, "2026-10-20", slot, technicians,
                    rng=random.Random(seed),
                )
                for rec in result:
                    tech = next(t for t in technicians if t.id == rec.technician_id)
                    assert tech.is_available("2026-10-20", slot)


class TestTechnicianScoring:
    def test_sorted_descending_and_bounded(self, technicians):
        for seed in range(25):
            result = recommend_technicians(
                ServiceType.REPAIR, "2026-10-20", TimeSlot.MORNING, technicians,
                rng=random.Random(seed),
            )
            scores = [r.score for r in result]
            assert scores == sorted(scores, reverse=True)
            assert all(0 <= s <= 100 for s in scores)

    def test_master_with_repairs_scores_at_least_seventy(self):
        master = make_technician(
            "tech-9", "Ana Ruiz", TechnicianLevel.MASTER, ["repairs"],
            {"2026-10-20": {"morning": True}},
        )
        for seed in range(25):
            [rec] = recommend_technicians(
                ServiceType.REPAIR, "2026-10-20", TimeSlot.MORNING, [master],
                rng=random.Random(seed),
            )
            assert 70 <= rec.score < 80

    def test_master_gets_repair_bonus_without_tag(self, technicians, rng):
        result = recommend_technicians(
            ServiceType.REPAIR, "2026-10-20", TimeSlot.MORNING, technicians, rng=rng
        )
        john = next(r for r in result if r.technician_id == "tech-1")
        assert 70 <= john.score < 80
        assert john.reason == "John Smith is qualified with relevant experience"

    def test_basic_repairs_tag_is_not_repairs(self, technicians, rng):
        result = recommend_technicians(
            ServiceType.REPAIR, "2026-10-20", TimeSlot.MORNING, technicians, rng=rng
        )
        david = next(r for r in result if r.technician_id == "tech-3")
        assert 15 <= david.score < 25
        assert "may not specialize" in david.reason

    def test_inspection_bonus_for_diagnostics(self, technicians, rng):
        result = recommend_technicians(
            ServiceType.INSPECTION, "2026-10-20", TimeSlot.MORNING, technicians, rng=rng
        )
        priya = next(r for r in result if r.technician_id == "tech-4")
        assert 50 <= priya.score < 60

    def test_inspection_bonus_for_journeyman(self, technicians, rng):
        result = recommend_technicians(
            ServiceType.INSPECTION, "2026-10-20", TimeSlot.AFTERNOON, technicians, rng=rng
        )
        maria = next(r for r in result if r.technician_id == "tech-2")
        assert 50 <= maria.score < 60

    def test_installation_specialist(self, technicians, rng):
        result = recommend_technicians(
            ServiceType.INSTALLATION, "2026-10-20", TimeSlot.AFTERNOON, technicians, rng=rng
        )
        maria = next(r for r in result if r.technician_id == "tech-2")
        assert 55 <= maria.score < 65

    def test_same_seed_same_result(self, technicians):
        first = recommend_technicians(
            ServiceType.MAINTENANCE, "2026-10-20", TimeSlot.MORNING, technicians,
            rng=random.Random(5),
        )
        second = recommend_technicians(
            ServiceType.MAINTENANCE, "2026-10-20", TimeSlot.MORNING, technicians,
            rng=random.Random(5),
        )
        assert first == second


class TestReasonText:
    def setup_method(self):
        self.tech = make_technician(level=TechnicianLevel.MASTER)

    def test_highly_recommended_names_specialty(self):
        reason = _reason(self.tech, 85, "installations")
        assert reason == (
            "John Smith is highly recommended due to master level expertise in installations"
        )

    def test_highly_recommended_without_specialty(self):
        assert _reason(self.tech, 90, None).endswith("master level expertise")

    def test_band_boundaries(self):
        assert "qualified" in _reason(self.tech, 80, None)
        assert "may not specialize" in _reason(self.tech, 60, None)


class TestSuggestOptimalDates:
    def test_seven_consecutive_days_from_today(self, appointments, rng):
        result = suggest_optimal_dates(
            appointments, ServiceType.REPAIR, ServicePriority.NORMAL, today=TODAY, rng=rng
        )
        assert len(result) == 7
        assert sorted(s.date for s in result) == [
            "2026-10-19", "2026-10-20", "2026-10-21", "2026-10-22",
            "2026-10-23", "2026-10-24", "2026-10-25",
        ]
        assert all(0 <= s.score <= 100 for s in result)

    def test_sorted_descending(self, appointments):
        for seed in range(10):
            result = suggest_optimal_dates(
                appointments, ServiceType.REPAIR, ServicePriority.LOW,
                today=TODAY, rng=random.Random(seed),
            )
            scores = [s.score for s in result]
            assert scores == sorted(scores, reverse=True)

    def test_load_penalty(self, appointments, rng):
        result = suggest_optimal_dates(
            appointments, ServiceType.REPAIR, ServicePriority.NORMAL, today=TODAY, rng=rng
        )
        wednesday = next(s for s in result if s.date == "2026-10-21")
        assert 85 <= wednesday.score < 95

    def test_weekday_bonus(self, rng):
        busy = [make_appointment(f"a-{i}", date="2026-10-23") for i in range(3)]
        busy += [make_appointment(f"b-{i}", date="2026-10-24") for i in range(3)]
        result = suggest_optimal_dates(
            busy, ServiceType.REPAIR, ServicePriority.NORMAL, today=TODAY, rng=rng
        )
        friday = next(s for s in result if s.date == "2026-10-23")
        saturday = next(s for s in result if s.date == "2026-10-24")
        assert 75 <= friday.score < 85
        assert 70 <= saturday.score < 80

    def test_emergency_same_day_bonus(self, rng):
        busy = [make_appointment(f"a-{i}", date="2026-10-19") for i in range(6)]
        emergency = suggest_optimal_dates(
            busy, ServiceType.REPAIR, ServicePriority.EMERGENCY, today=TODAY, rng=random.Random(3)
        )
        normal = suggest_optimal_dates(
            busy, ServiceType.REPAIR, ServicePriority.NORMAL, today=TODAY, rng=random.Random(3)
        )
        today_emergency = next(s for s in emergency if s.date == "2026-10-19")
        today_normal = next(s for s in normal if s.date == "2026-10-19")
        assert 75 <= today_emergency.score < 85
        assert today_emergency.score - today_normal.score == 30

    def test_maintenance_prefers_tuesday(self):
        busy = [make_appointment(f"a-{i}", date="2026-10-20") for i in range(5)]
        maintenance = suggest_optimal_dates(
            busy, ServiceType.MAINTENANCE, ServicePriority.NORMAL, today=TODAY, rng=random.Random(3)
        )
        repair = suggest_optimal_dates(
            busy, ServiceType.REPAIR, ServicePriority.NORMAL, today=TODAY, rng=random.Random(3)
        )
        tuesday_maintenance = next(s for s in maintenance if s.date == "2026-10-20")
        tuesday_repair = next(s for s in repair if s.date == "2026-10-20")
        assert 70 <= tuesday_maintenance.score < 80
        assert tuesday_maintenance.score - tuesday_repair.score == 15

    def test_score_floor_is_zero(self, rng):
        busy = [make_appointment(f"a-{i}", date="2026-10-22") for i in range(15)]
        result = suggest_optimal_dates(
            busy, ServiceType.REPAIR, ServicePriority.NORMAL, today=TODAY, rng=rng
        )
        thursday = next(s for s in result if s.date == "2026-10-22")
        assert thursday.score == 0


class TestSmartScheduling:
    def test_top_three_of_each(self, appointments, technicians, rng):
        result = smart_suggestions(
            appointments, technicians, ServiceType.MAINTENANCE, ServicePriority.NORMAL,
            "2026-10-20", TimeSlot.MORNING, today=TODAY, rng=rng,
        )
        assert len(result.dates) == 3
        assert len(result.technicians) == 3

    def test_schedule_from_suggestion_appends(self, appointments, technicians):
        updated = schedule_from_suggestion(
            appointments,
            customer=make_customer("cust-9", "Jane Doe"),
            technician=technicians[1],
            service_type=ServiceType.INSTALLATION,
            priority=ServicePriority.HIGH,
            date="2026-10-20",
            time_slot=TimeSlot.AFTERNOON,
        )
        assert len(updated) == len(appointments) + 1
        assert len(appointments) == 6
        new = updated[-1]
        assert new.estimated_duration == 180
        assert new.technician_id == "tech-2"
        assert new.priority == ServicePriority.HIGH


@pytest.mark.parametrize(
    "service_type, expected",
    [
        (ServiceType.INSTALLATION, 180),
        (ServiceType.REPAIR, 120),
        (ServiceType.MAINTENANCE, 60),
        (ServiceType.INSPECTION, 45),
    ],
)
def test_duration_derived_from_service_type(service_type, expected):
    assert make_appointment(service_type=service_type).estimated_duration == expected
