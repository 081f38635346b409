"""HVAC service catalog with durations, specialty tags, and keyword matching."""

import logging
from typing import Optional

from src.schemas.appointment_schema import ServiceType

logger = logging.getLogger(__name__)

SERVICE_CATALOG: dict[ServiceType, dict] = {
    ServiceType.INSTALLATION: {
        "name": "System Installation",
        "description": "New furnace, air conditioner, heat pump, or ductwork installation.",
        "duration_minutes": 180,
        "specialty": "installations",
    },
    ServiceType.REPAIR: {
        "name": "Repair Call",
        "description": "Diagnosis and repair of heating or cooling faults.",
        "duration_minutes": 120,
        "specialty": "repairs",
    },
    ServiceType.MAINTENANCE: {
        "name": "Maintenance Visit",
        "description": "Seasonal tune-up, filter replacement, and system check.",
        "duration_minutes": 60,
        "specialty": "maintenance",
    },
    ServiceType.INSPECTION: {
        "name": "Inspection",
        "description": "Safety and performance inspection with a written report.",
        "duration_minutes": 45,
        "specialty": "diagnostics",
    },
}

# Checked in order; the first keyword found decides the service type.
SERVICE_KEYWORDS: list[tuple[str, ServiceType]] = [
    ("install", ServiceType.INSTALLATION),
    ("repair", ServiceType.REPAIR),
    ("maintenance", ServiceType.MAINTENANCE),
    ("inspect", ServiceType.INSPECTION),
]


def estimated_duration(service_type: ServiceType) -> int:
    """Minutes to block out for a service, fixed at appointment creation."""
    return SERVICE_CATALOG[ServiceType(service_type)]["duration_minutes"]


def specialty_tag(service_type: ServiceType) -> str:
    """Specialty tag a technician needs to be a natural fit for a service."""
    return SERVICE_CATALOG[ServiceType(service_type)]["specialty"]


def get_all_services() -> list[dict]:
    """Return all services with basic info."""
    return [
        {"id": sid.value, "name": info["name"], "duration_minutes": info["duration_minutes"]}
        for sid, info in SERVICE_CATALOG.items()
    ]


def match_service(query: str) -> Optional[ServiceType]:
    """Match free text to a service type by keyword containment."""
    normalized = query.lower()
    for keyword, service_type in SERVICE_KEYWORDS:
        if keyword in normalized:
            return service_type
    return None
