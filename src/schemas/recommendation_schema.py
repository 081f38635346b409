"""Recommendation and analysis result models."""

from pydantic import BaseModel, Field


class AIRecommendation(BaseModel):
    """A scored technician suggestion for a requested service slot."""
    technician_id: str
    technician_name: str
    score: int = Field(ge=0, le=100)
    reason: str


class DateSuggestion(BaseModel):
    """A candidate date scored against the existing appointment load."""
    date: str
    score: int = Field(ge=0, le=100)


class EfficiencyReport(BaseModel):
    """Aggregate schedule efficiency score with free-text suggestions."""
    score: int = Field(ge=0, le=100)
    suggestions: list[str] = Field(default_factory=list)


class SmartSuggestions(BaseModel):
    """Top date and technician picks for one scheduling request."""
    dates: list[DateSuggestion] = Field(default_factory=list)
    technicians: list[AIRecommendation] = Field(default_factory=list)
