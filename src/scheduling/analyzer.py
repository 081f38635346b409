"""
Schedule efficiency analysis.

Scores a snapshot of appointments on how evenly the load is spread over
days and how well technician specialties match the work assigned, and
collects short suggestions for the dispatcher.
"""

import logging
import math
import random
from collections import Counter
from typing import Optional, Sequence

from src.schemas.appointment_schema import Appointment, ServiceType
from src.schemas.recommendation_schema import EfficiencyReport

logger = logging.getLogger(__name__)

BASELINE_SCORE = 75
MAX_BALANCED_STDDEV = 2.0
UNBALANCED_PENALTY = 10
BALANCED_BONUS = 5
MISMATCH_PENALTY = 5
ALIGNED_BONUS = 10
INSIGHT_PROBABILITY = 0.5

EMPTY_SCHEDULE_SUGGESTION = "No appointments scheduled yet, so there is nothing to analyze"
UNBALANCED_SUGGESTION = "Consider balancing workload more evenly across days"
BALANCED_SUGGESTION = "Appointment distribution is well balanced"
MISMATCH_SUGGESTION = "Some technicians are assigned services outside their specialties"
ALIGNED_SUGGESTION = "Technician specialties are well aligned with assigned services"
GEOGRAPHIC_SUGGESTION = "Group appointments in the same area on the same day to reduce travel time"

GENERIC_INSIGHTS = [
    "Consider batch scheduling maintenance appointments by neighborhood",
    "Emergency slots could be reserved each day for unexpected calls",
    "Morning appointments for commercial clients appear most efficient",
    "Journeyman technicians might benefit from more varied assignments",
]

# Only these service types are checked for specialty fit; repair and
# inspection assignments are never counted as mismatches.
REQUIRED_SPECIALTIES: dict[ServiceType, str] = {
    ServiceType.INSTALLATION: "installations",
    ServiceType.MAINTENANCE: "maintenance",
}


def _population_stddev(values: Sequence[int]) -> float:
    mean = sum(values) / len(values)
    return math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))


def count_specialty_mismatches(appointments: Sequence[Appointment]) -> int:
    """Count installation/maintenance jobs given to a technician without the matching tag."""
    mismatches = 0
    for appt in appointments:
        required = REQUIRED_SPECIALTIES.get(appt.service_type)
        if required and not appt.technician.has_specialty(required):
            mismatches += 1
    return mismatches


def analyze_efficiency(
    appointments: Sequence[Appointment],
    rng: Optional[random.Random] = None,
) -> EfficiencyReport:
    """
    Score the schedule from 0 to 100 and suggest improvements.

    An empty schedule returns the baseline score with a single
    explanatory suggestion.
    """
    if not appointments:
        return EfficiencyReport(score=BASELINE_SCORE, suggestions=[EMPTY_SCHEDULE_SUGGESTION])

    rng = rng or random.Random()
    score = BASELINE_SCORE
    suggestions: list[str] = []

    per_date = Counter(appt.date for appt in appointments)
    stddev = _population_stddev(list(per_date.values()))
    if stddev > MAX_BALANCED_STDDEV:
        score -= UNBALANCED_PENALTY
        suggestions.append(UNBALANCED_SUGGESTION)
    else:
        score += BALANCED_BONUS
        suggestions.append(BALANCED_SUGGESTION)

    mismatches = count_specialty_mismatches(appointments)
    if mismatches:
        score -= MISMATCH_PENALTY * mismatches
        suggestions.append(MISMATCH_SUGGESTION)
    else:
        score += ALIGNED_BONUS
        suggestions.append(ALIGNED_SUGGESTION)

    suggestions.append(GEOGRAPHIC_SUGGESTION)

    if rng.random() > INSIGHT_PROBABILITY:
        suggestions.append(rng.choice(GENERIC_INSIGHTS))

    score = max(0, min(100, score))
    logger.info(
        "Schedule analyzed: %d appointments over %d days, stddev=%.2f, mismatches=%d, score=%d",
        len(appointments), len(per_date), stddev, mismatches, score,
    )
    return EfficiencyReport(score=score, suggestions=suggestions)
