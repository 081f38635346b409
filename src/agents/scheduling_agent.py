"""
Voice scheduling agent.

Speech-to-text delivers finalized utterances; the LLM routes them to these
tools, which delegate to the ScheduleSession held on the session userdata.
Each tool call is one independent command against the current snapshot.
"""

from livekit.agents import Agent, RunContext, function_tool

from src.logging_context import get_command_logger
from src.prompts.system_prompts import SCHEDULER_SYSTEM_PROMPT
from src.scheduling.session import ScheduleSession
from src.schemas.appointment_schema import ServicePriority, ServiceType, TimeSlot
from src.utils import short_date

logger = get_command_logger(__name__)


class SchedulingAgent(Agent):
    """Dispatcher-facing assistant for the appointment board."""

    def __init__(self) -> None:
        super().__init__(
            instructions=SCHEDULER_SYSTEM_PROMPT,
        )

    @function_tool()
    async def run_schedule_command(
        self, context: RunContext[ScheduleSession], command: str
    ) -> str:
        """Create, move, shift, cancel, or list appointments from a spoken instruction.

        Pass the dispatcher's words unchanged.
        """
        return context.userdata.handle_transcript(command)

    @function_tool()
    async def recommend_technicians(
        self, context: RunContext[ScheduleSession], service_type: str, date: str, time_slot: str
    ) -> str:
        """Rank technicians for a service on a YYYY-MM-DD date and time slot."""
        try:
            service = ServiceType(service_type.lower())
            slot = TimeSlot(time_slot.lower())
        except ValueError:
            return (
                "Service type must be installation, maintenance, repair, or inspection, "
                "and the slot morning, afternoon, or evening."
            )

        ranked = context.userdata.recommend(service, date, slot)
        if not ranked:
            return f"Nobody is free on {date} in the {slot.value}."
        top = ranked[:3]
        logger.info("Recommended %s for %s on %s", [r.technician_id for r in top], service.value, date)
        return " ".join(f"{r.reason} ({r.score}%)." for r in top)

    @function_tool()
    async def suggest_dates(
        self, context: RunContext[ScheduleSession], service_type: str, priority: str = "normal"
    ) -> str:
        """Suggest the best days this week for a service and priority."""
        try:
            service = ServiceType(service_type.lower())
            level = ServicePriority(priority.lower())
        except ValueError:
            return (
                "Service type must be installation, maintenance, repair, or inspection, "
                "and the priority low, normal, high, or emergency."
            )

        best = context.userdata.suggest_dates(service, level)[:3]
        return "Best days: " + ", ".join(
            f"{short_date(s.date)} ({s.score}%)" for s in best
        ) + "."

    @function_tool()
    async def analyze_schedule(self, context: RunContext[ScheduleSession]) -> str:
        """Score how efficient the current schedule is and suggest improvements."""
        report = context.userdata.analyze()
        return f"Efficiency score {report.score}. " + " ".join(
            f"{s}." for s in report.suggestions
        )
