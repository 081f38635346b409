from src.scheduling.analyzer import analyze_efficiency
from src.scheduling.command_executor import FALLBACK_MESSAGE, execute_command
from src.scheduling.command_parser import parse_command
from src.scheduling.recommendations import (
    recommend_technicians,
    schedule_from_suggestion,
    smart_suggestions,
    suggest_optimal_dates,
)
from src.scheduling.session import ScheduleSession

__all__ = [
    "recommend_technicians",
    "suggest_optimal_dates",
    "smart_suggestions",
    "schedule_from_suggestion",
    "analyze_efficiency",
    "parse_command",
    "execute_command",
    "FALLBACK_MESSAGE",
    "ScheduleSession",
]
