"""
Rule-based technician and date recommendations.

Technicians are scored on seniority and specialty fit for a requested
service slot; candidate dates are scored against the existing load.
Both add a small random perturbation so equal candidates do not always
come out in the same order. Pass a seeded ``random.Random`` to make the
results reproducible.
"""

import logging
import random
from datetime import date, timedelta
from typing import Iterable, Optional

from src.config import WEEKDAY_NAMES, settings
from src.schemas.appointment_schema import (
    Appointment,
    ServicePriority,
    ServiceType,
    Technician,
    TechnicianLevel,
    TimeSlot,
)
from src.schemas.customer_schema import Customer
from src.schemas.recommendation_schema import (
    AIRecommendation,
    DateSuggestion,
    SmartSuggestions,
)
from src.tools.appointments import add_appointment, build_appointment
from src.utils import format_date, is_weekday

logger = logging.getLogger(__name__)

MIN_SCORE = 0
MAX_SCORE = 100

# Technician scoring weights
LEVEL_SCORES: dict[TechnicianLevel, int] = {
    TechnicianLevel.MASTER: 40,
    TechnicianLevel.JOURNEYMAN: 25,
    TechnicianLevel.APPRENTICE: 15,
}
SPECIALTY_BONUS = 30
INSPECTION_BONUS = 25
JITTER_RANGE = 10
HIGHLY_RECOMMENDED_ABOVE = 80
QUALIFIED_ABOVE = 60

# Date scoring weights
LOAD_PENALTY_PER_APPOINTMENT = 10
WEEKDAY_BONUS = 5
EMERGENCY_SAME_DAY_BONUS = 30
PREFERRED_MAINTENANCE_DAY_BONUS = 15


def _clamp(score: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, score))


def _specialty_bonus(tech: Technician, service_type: ServiceType) -> tuple[int, Optional[str]]:
    """Bonus for specialty fit, plus the specialty tag that earned it (if any)."""
    if service_type == ServiceType.INSTALLATION and tech.has_specialty("installations"):
        return SPECIALTY_BONUS, "installations"
    if service_type == ServiceType.MAINTENANCE and tech.has_specialty("maintenance"):
        return SPECIALTY_BONUS, "maintenance"
    if service_type == ServiceType.REPAIR:
        if tech.has_specialty("repairs"):
            return SPECIALTY_BONUS, "repairs"
        if tech.level == TechnicianLevel.MASTER:
            return SPECIALTY_BONUS, None
    if service_type == ServiceType.INSPECTION:
        if tech.has_specialty("diagnostics"):
            return INSPECTION_BONUS, "diagnostics"
        if tech.level == TechnicianLevel.JOURNEYMAN:
            return INSPECTION_BONUS, None
    return 0, None


def _reason(tech: Technician, score: int, specialty: Optional[str]) -> str:
    if score > HIGHLY_RECOMMENDED_ABOVE:
        reason = f"{tech.name} is highly recommended due to {tech.level.value} level expertise"
        if specialty:
            reason += f" in {specialty}"
        return reason
    if score > QUALIFIED_ABOVE:
        return f"{tech.name} is qualified with relevant experience"
    return f"{tech.name} is available but may not specialize in this service"


def recommend_technicians(
    service_type: ServiceType,
    date: str,
    time_slot: TimeSlot,
    technicians: Iterable[Technician],
    appointments: Iterable[Appointment] = (),
    rng: Optional[random.Random] = None,
) -> list[AIRecommendation]:
    """
    Rank the technicians free on ``date`` during ``time_slot``.

    Only technicians whose availability has an entry for the date with the
    slot flag set are candidates. Returns an empty list when nobody is free.
    ``appointments`` is accepted for callers that pass the whole snapshot;
    current load does not affect technician scores.
    """
    rng = rng or random.Random()
    service_type = ServiceType(service_type)
    time_slot = TimeSlot(time_slot)

    candidates = [t for t in technicians if t.is_available(date, time_slot)]
    if not candidates:
        logger.info("No technicians free for %s on %s (%s)", service_type.value, date, time_slot.value)
        return []

    recommendations = []
    for tech in candidates:
        score = LEVEL_SCORES[tech.level]
        bonus, specialty = _specialty_bonus(tech, service_type)
        score += bonus
        score += rng.randrange(JITTER_RANGE)
        score = _clamp(score)

        recommendations.append(
            AIRecommendation(
                technician_id=tech.id,
                technician_name=tech.name,
                score=score,
                reason=_reason(tech, score, specialty if bonus else None),
            )
        )

    recommendations.sort(key=lambda r: r.score, reverse=True)
    logger.debug(
        "Technician ranking for %s on %s: %s",
        service_type.value, date, [(r.technician_id, r.score) for r in recommendations],
    )
    return recommendations


def suggest_optimal_dates(
    appointments: Iterable[Appointment],
    service_type: ServiceType,
    priority: ServicePriority,
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
    days: Optional[int] = None,
) -> list[DateSuggestion]:
    """
    Score each of the next ``days`` calendar days (default 7) starting today.

    Fewer existing appointments score higher; weekdays, same-day slots for
    emergencies, and maintenance on the preferred weekday get bonuses.
    Results are ordered best first.
    """
    rng = rng or random.Random()
    today = today or date.today()
    days = days if days is not None else settings.scheduling.suggestion_days
    service_type = ServiceType(service_type)
    priority = ServicePriority(priority)
    preferred_weekday = WEEKDAY_NAMES.index(settings.scheduling.preferred_maintenance_weekday)

    load: dict[str, int] = {}
    for appt in appointments:
        load[appt.date] = load.get(appt.date, 0) + 1

    suggestions = []
    for offset in range(days):
        day = today + timedelta(days=offset)
        day_str = format_date(day)

        score = MAX_SCORE - LOAD_PENALTY_PER_APPOINTMENT * load.get(day_str, 0)
        if is_weekday(day):
            score += WEEKDAY_BONUS
        if priority == ServicePriority.EMERGENCY and offset == 0:
            score += EMERGENCY_SAME_DAY_BONUS
        if service_type == ServiceType.MAINTENANCE and day.weekday() == preferred_weekday:
            score += PREFERRED_MAINTENANCE_DAY_BONUS
        score += rng.randrange(JITTER_RANGE)

        suggestions.append(DateSuggestion(date=day_str, score=_clamp(score)))

    suggestions.sort(key=lambda s: s.score, reverse=True)
    return suggestions


def smart_suggestions(
    appointments: list[Appointment],
    technicians: list[Technician],
    service_type: ServiceType,
    priority: ServicePriority,
    date: str,
    time_slot: TimeSlot,
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
    limit: Optional[int] = None,
) -> SmartSuggestions:
    """Top dates for the request and top technicians for the chosen date and slot."""
    rng = rng or random.Random()
    limit = limit if limit is not None else settings.scheduling.top_suggestions
    dates = suggest_optimal_dates(appointments, service_type, priority, today=today, rng=rng)
    techs = recommend_technicians(service_type, date, time_slot, technicians, appointments, rng=rng)
    return SmartSuggestions(dates=dates[:limit], technicians=techs[:limit])


def schedule_from_suggestion(
    appointments: list[Appointment],
    customer: Customer,
    technician: Technician,
    service_type: ServiceType,
    priority: ServicePriority,
    date: str,
    time_slot: TimeSlot,
    description: str = "",
) -> list[Appointment]:
    """Book a picked date and technician, returning the new snapshot."""
    appointment = build_appointment(
        customer=customer,
        technician=technician,
        service_type=service_type,
        date=date,
        time_slot=time_slot,
        description=description,
        priority=priority,
    )
    return add_appointment(appointments, appointment)
