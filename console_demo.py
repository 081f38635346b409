"""
Offline console demo: drives the scheduling assistant without any API keys.

Typed lines stand in for finalized speech transcripts and go through the
real command parser and executor against the mock appointment board.
Lines starting with "/" run the recommendation and analysis tools.

Usage:
    python console_demo.py
    python console_demo.py --scenario reschedule
    python console_demo.py --scenario create
"""

import argparse
from typing import Optional

from src.config import settings
from src.scheduling.session import ScheduleSession
from src.schemas.appointment_schema import ServicePriority, ServiceType, TimeSlot
from src.tools.services import get_all_services
from src.utils import short_date

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

HELP_TEXT = """Commands:
  <free text>                          e.g. "cancel Sarah Williams's appointment"
  /list                                upcoming appointments
  /recommend <service> <date> <slot>   rank technicians, e.g. /recommend repair 2026-10-20 morning
  /dates <service> [priority]          best days this week, e.g. /dates maintenance emergency
  /services                            service catalog with durations
  /analyze                             schedule efficiency report
  /move <appointment id> <date>        set a new date, e.g. /move appt-3 2026-10-22
  /delete <appointment id>             remove an appointment outright
  /help                                this text"""


class ConsoleSession:
    """Simulates a dispatcher talking to the scheduling assistant in the terminal."""

    def __init__(self, schedule: Optional[ScheduleSession] = None) -> None:
        self.schedule = schedule or ScheduleSession.with_mock_data()

    def agent_say(self, text: str) -> None:
        print(f"{GREEN}{BOLD}[Assistant]{RESET} {GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    # Pre-scripted scenarios for --scenario flag
    SCENARIOS: dict[str, list[str]] = {
        "reschedule": [
            "/list",
            "move Sarah Williams's appointment to friday",
            "push back by 1 day",
            "show me the schedule",
            "/list",
        ],
        "create": [
            "/dates maintenance",
            "create a maintenance appointment for Jane Doe on Tuesday",
            "/analyze",
        ],
        "cancel": [
            "cancel Michael Johnson's appointment",
            "show John's schedule",
            "what's the weather",
        ],
    }

    MAX_INPUT_LENGTH = 500

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  HVAC SCHEDULE ASSISTANT - {title}{RESET}")
        print(f"{BOLD}  Business: {settings.business.name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"Scenario: {scenario}")
        for step in steps:
            print(f"\n{BLUE}[Dispatcher] {RESET}{step}")
            self.agent_say(self.respond(step))
        print(f"\n{BOLD}  Scenario '{scenario}' complete.{RESET}")

    def run(self) -> None:
        self._banner("Console Demo")
        print(f"{DIM}{HELP_TEXT}{RESET}")
        print(f"{DIM}Type 'quit' to exit{RESET}")

        while True:
            user_input = input(f"\n{BLUE}[Dispatcher] {RESET}").strip()
            if not user_input:
                continue
            if user_input.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            if len(user_input) > self.MAX_INPUT_LENGTH:
                self.agent_say("That was quite long. Could you keep it brief for me?")
                continue
            self.agent_say(self.respond(user_input))

    def respond(self, text: str) -> str:
        """Reply to one line of input."""
        if text.startswith("/"):
            return self._handle_tool(text)
        reply = self.schedule.handle_transcript(text)
        self.system_log(f"{len(self.schedule.upcoming())} upcoming appointments")
        return reply

    # ------------------------------------------------------------------ #
    # Slash commands
    # ------------------------------------------------------------------ #

    def _handle_tool(self, text: str) -> str:
        name, *args = text[1:].split() or ["help"]
        name = name.lower()
        try:
            if name == "list":
                return self._list()
            if name == "recommend" and len(args) == 3:
                return self._recommend(ServiceType(args[0].lower()), args[1], TimeSlot(args[2].lower()))
            if name == "dates" and args:
                priority = ServicePriority(args[1].lower()) if len(args) > 1 else ServicePriority.NORMAL
                return self._dates(ServiceType(args[0].lower()), priority)
            if name == "services":
                return self._services()
            if name == "analyze":
                return self._analyze()
            if name == "move" and len(args) == 2:
                appt = self.schedule.update_appointment(args[0], date=args[1])
                return f"Moved {appt.customer.name}'s appointment to {short_date(appt.date)}."
            if name == "delete" and len(args) == 1:
                self.schedule.delete_appointment(args[0])
                return f"Deleted appointment {args[0]}."
        except ValueError as exc:
            return f"{YELLOW}{exc}{RESET}"
        except KeyError as exc:
            return f"{YELLOW}{exc.args[0]}{RESET}"
        return HELP_TEXT

    def _list(self) -> str:
        upcoming = self.schedule.upcoming()
        if not upcoming:
            return "No upcoming appointments."
        lines = [
            f"{a.id}  {short_date(a.date):<7} {a.time_slot.value:<9} "
            f"{a.customer.name} ({a.service_type.value}, {a.technician.name}) [{a.status.value}]"
            for a in upcoming
        ]
        return "Upcoming appointments:\n" + "\n".join(lines)

    def _recommend(self, service: ServiceType, date: str, slot: TimeSlot) -> str:
        ranked = self.schedule.recommend(service, date, slot)
        if not ranked:
            return f"Nobody is free on {date} in the {slot.value}."
        return "\n".join(f"{r.score:>3}%  {r.reason}" for r in ranked)

    def _dates(self, service: ServiceType, priority: ServicePriority) -> str:
        suggestions = self.schedule.suggest_dates(service, priority)
        return "\n".join(f"{s.score:>3}%  {short_date(s.date)}" for s in suggestions)

    def _services(self) -> str:
        return "\n".join(
            f"{s['id']:<13} {s['name']} ({s['duration_minutes']} min)" for s in get_all_services()
        )

    def _analyze(self) -> str:
        report = self.schedule.analyze()
        return f"Efficiency score: {report.score}\n" + "\n".join(
            f"  - {s}" for s in report.suggestions
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="HVAC schedule assistant console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        help="Auto-play a pre-scripted scenario",
    )
    args = parser.parse_args()

    session = ConsoleSession()
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
