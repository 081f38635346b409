"""
Mock technician roster with generated availability.

In production, availability would come from the dispatch board of a field
service platform via HTTP client.
"""

import logging
import random
from datetime import date, timedelta
from typing import Optional

from src.config import settings
from src.schemas.appointment_schema import DayAvailability, Technician, TechnicianLevel
from src.utils import format_date

logger = logging.getLogger(__name__)

# Chance that any single slot on a working day is open
AVAILABILITY_PROBABILITY = 0.7

TECHNICIAN_PROFILES: list[dict] = [
    {
        "id": "tech-1",
        "name": "John Smith",
        "level": TechnicianLevel.MASTER,
        "specialties": ["commercial HVAC", "refrigeration", "heat pumps"],
    },
    {
        "id": "tech-2",
        "name": "Maria Garcia",
        "level": TechnicianLevel.JOURNEYMAN,
        "specialties": ["residential HVAC", "ductwork", "installations"],
    },
    {
        "id": "tech-3",
        "name": "David Johnson",
        "level": TechnicianLevel.APPRENTICE,
        "specialties": ["maintenance", "filter changes", "basic repairs"],
    },
    {
        "id": "tech-4",
        "name": "Priya Patel",
        "level": TechnicianLevel.JOURNEYMAN,
        "specialties": ["diagnostics", "repairs", "maintenance"],
    },
]


def _generate_availability(
    rng: random.Random, start: date, days: int
) -> dict[str, DayAvailability]:
    """Roll slot availability for each day; Sundays stay closed, evenings are rarer."""
    availability: dict[str, DayAvailability] = {}
    for offset in range(days):
        day = start + timedelta(days=offset)
        if day.weekday() == 6:
            availability[format_date(day)] = DayAvailability()
            continue
        availability[format_date(day)] = DayAvailability(
            morning=rng.random() < AVAILABILITY_PROBABILITY,
            afternoon=rng.random() < AVAILABILITY_PROBABILITY,
            evening=rng.random() < AVAILABILITY_PROBABILITY / 2,
        )
    return availability


def generate_roster(
    start: Optional[date] = None,
    days: Optional[int] = None,
    seed: Optional[int] = None,
) -> list[Technician]:
    """Build the mock roster with availability from ``start`` for ``days`` days.

    The same seed and start date always give the same roster.
    """
    start = start or date.today()
    days = days if days is not None else settings.scheduling.roster_days
    rng = random.Random(settings.scheduling.mock_seed if seed is None else seed)
    roster = [
        Technician(**profile, availability=_generate_availability(rng, start, days))
        for profile in TECHNICIAN_PROFILES
    ]
    logger.debug("Generated roster of %d technicians from %s", len(roster), start)
    return roster
