"""
Pattern-based interpretation of free-text scheduling commands.

Each instruction runs through an ordered list of independent matchers that
fill in one SchedulingIntent. The first matcher to recognise an action
decides it; matchers after it still run and may add or overwrite fields.
The order is part of the behavior: an input that fits several patterns is
resolved by whichever matcher comes first, so reordering changes results.

Usage:
    intent = parse_command("cancel John Smith's appointment", appointments)
    intent.action        # CommandAction.CANCEL
    intent.appointment_id
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Optional, Sequence

from src.config import WEEKDAY_NAMES
from src.logging_context import get_command_logger
from src.schemas.appointment_schema import Appointment
from src.schemas.command_schema import CommandAction, SchedulingIntent
from src.tools.services import match_service
from src.utils import format_date, next_weekday, today_str

logger = get_command_logger(__name__)

_WEEKDAYS = "|".join(WEEKDAY_NAMES)
_NOUNS = r"appointment|job|service|visit"

CREATE_VERB_RE = re.compile(r"\b(?:create|add|schedule|new)\b")
APPOINTMENT_NOUN_RE = re.compile(rf"\b(?:{_NOUNS})")
CREATE_NAME_RE = re.compile(r"\b(?:for|with|customer)\s+([a-z]+\s+[a-z]+)")
CREATE_DATE_RE = re.compile(rf"\b(?:on|for|next)\s+({_WEEKDAYS})\b")
DESCRIPTION_RE = re.compile(r"\b(?:for|to)\s+(.+?)\s+(?:on|at|with|tomorrow|next)\b", re.I)
ADDRESS_RE = re.compile(r"\bat\s+([^,]+)", re.I)

RESCHEDULE_NAME_RE = re.compile(
    r"\b(?:move|reschedule|change|shift)\s+([a-z]+\s+[a-z]+)"
    r"(?:\s+to\s+|'s\s+appointment|\s+appointment)"
)
TO_WEEKDAY_RE = re.compile(rf"\bto\s+({_WEEKDAYS})\b")
DAY_SHIFT_RE = re.compile(
    r"\b(?:move|push|shift)\s+(back|forward|ahead|later|earlier)\s+(?:by\s+)?(\d+)?\s*day"
)
BACKWARD_DIRECTIONS = frozenset({"back", "earlier"})
# Longer spoken shifts are capped to one year
MAX_SHIFT_DAYS = 365

CANCEL_NAME_RE = re.compile(rf"\bcancel\s+([a-z]+\s+[a-z]+)(?:'s)?\s+(?:{_NOUNS})")

INFO_VERB_RE = re.compile(r"\b(?:show|tell me|what is)\b")
INFO_NOUN_RE = re.compile(r"\b(?:schedule|appointment|job)")
TECHNICIAN_NAME_RE = re.compile(
    r"\b(?:show|what|tell me about)\s+([a-z]+)(?:'s)?\s+(?:schedule|appointments|jobs)"
)

# Words the two-word and one-word name patterns pick up that are never names
NOT_A_NAME = frozenset(
    {"a", "an", "the", "this", "that", "my", "our", "your", "me", "us", "all",
     "next", "tomorrow", "today", "upcoming", "every", "other"}
) | frozenset(WEEKDAY_NAMES)


@dataclass
class _ParseContext:
    text: str
    lowered: str
    appointments: Sequence[Appointment]
    today: date


Matcher = Callable[[_ParseContext, SchedulingIntent], Optional[CommandAction]]


def _normalize(text: str) -> str:
    return text.replace("’", "'").strip()


def _looks_like_name(candidate: str) -> bool:
    return not any(word in NOT_A_NAME for word in candidate.split())


def find_customer_appointment(
    appointments: Sequence[Appointment], name: str
) -> Optional[Appointment]:
    """First appointment whose customer name contains ``name`` (case-insensitive)."""
    needle = name.lower()
    for appt in appointments:
        if needle in appt.customer.name.lower():
            return appt
    return None


def _match_create(ctx: _ParseContext, intent: SchedulingIntent) -> Optional[CommandAction]:
    if not (CREATE_VERB_RE.search(ctx.lowered) and APPOINTMENT_NOUN_RE.search(ctx.lowered)):
        return None

    intent.service_type = match_service(ctx.lowered)

    for match in CREATE_NAME_RE.finditer(ctx.lowered):
        if _looks_like_name(match.group(1)):
            intent.customer_name = match.group(1).strip()
            break

    date_match = CREATE_DATE_RE.search(ctx.lowered)
    if date_match:
        intent.to_date = next_weekday(date_match.group(1), ctx.today)
    elif "tomorrow" in ctx.lowered:
        intent.to_date = format_date(ctx.today + timedelta(days=1))

    desc_match = DESCRIPTION_RE.search(ctx.text)
    if desc_match:
        intent.description = desc_match.group(1).strip()

    addr_match = ADDRESS_RE.search(ctx.text)
    if addr_match:
        intent.address = addr_match.group(1).strip()

    return CommandAction.CREATE


def _match_reschedule_by_name(
    ctx: _ParseContext, intent: SchedulingIntent
) -> Optional[CommandAction]:
    if intent.action == CommandAction.CREATE:
        return None
    match = RESCHEDULE_NAME_RE.search(ctx.lowered)
    if not match:
        return None

    intent.customer_name = match.group(1).strip()
    appt = find_customer_appointment(ctx.appointments, intent.customer_name)
    if appt:
        intent.appointment_id = appt.id
        intent.customer_id = appt.customer_id
        intent.from_date = appt.date

    day_match = TO_WEEKDAY_RE.search(ctx.lowered)
    if day_match:
        intent.to_date = next_weekday(day_match.group(1), ctx.today)

    return CommandAction.RESCHEDULE


def _match_day_shift(ctx: _ParseContext, intent: SchedulingIntent) -> Optional[CommandAction]:
    match = DAY_SHIFT_RE.search(ctx.lowered)
    if not match:
        return None

    days = min(int(match.group(2)), MAX_SHIFT_DAYS) if match.group(2) else 1
    intent.shift_days = -days if match.group(1) in BACKWARD_DIRECTIONS else days

    if not intent.customer_name:
        today = today_str(ctx.today)
        intent.affected_appointments = [a.id for a in ctx.appointments if a.date >= today]

    return CommandAction.RESCHEDULE


def _match_cancel(ctx: _ParseContext, intent: SchedulingIntent) -> Optional[CommandAction]:
    if "cancel" not in ctx.lowered or not APPOINTMENT_NOUN_RE.search(ctx.lowered):
        return None

    match = CANCEL_NAME_RE.search(ctx.lowered)
    if match:
        intent.customer_name = match.group(1).strip()
        appt = find_customer_appointment(ctx.appointments, intent.customer_name)
        if appt:
            intent.appointment_id = appt.id
            intent.customer_id = appt.customer_id

    return CommandAction.CANCEL


def _match_info(ctx: _ParseContext, intent: SchedulingIntent) -> Optional[CommandAction]:
    if not (INFO_VERB_RE.search(ctx.lowered) and INFO_NOUN_RE.search(ctx.lowered)):
        return None

    match = TECHNICIAN_NAME_RE.search(ctx.lowered)
    if match and _looks_like_name(match.group(1)):
        intent.technician_name = match.group(1)

    return CommandAction.INFO


MATCHERS: list[Matcher] = [
    _match_create,
    _match_reschedule_by_name,
    _match_day_shift,
    _match_cancel,
    _match_info,
]


def parse_command(
    text: str,
    appointments: Sequence[Appointment],
    today: Optional[date] = None,
) -> SchedulingIntent:
    """Interpret one instruction against the current appointment snapshot.

    Never raises for unrecognised text; the intent action stays UNKNOWN.
    """
    normalized = _normalize(text)
    ctx = _ParseContext(
        text=normalized,
        lowered=normalized.lower(),
        appointments=appointments,
        today=today or date.today(),
    )
    intent = SchedulingIntent(original=text)

    for matcher in MATCHERS:
        action = matcher(ctx, intent)
        if action and intent.action == CommandAction.UNKNOWN:
            intent.action = action

    logger.info("Parsed %r as %s", text, intent.action.value)
    logger.debug("Intent fields: %s", intent.model_dump(exclude_none=True))
    return intent

