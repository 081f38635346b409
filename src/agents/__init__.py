from src.agents.scheduling_agent import SchedulingAgent

__all__ = ["SchedulingAgent"]
