"""
Pydantic models for the request classifier.

CheckInType is the closed set of check-in kinds a report can cover.
CheckInClassification is the classifier agent's structured output; its label
is free text and is validated against CheckInType by the caller.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CheckInType(str, Enum):
    """Kinds of recurring team check-ins."""
    STANDUP = "standup"
    SPRINT = "sprint"
    MENTAL_HEALTH = "mental_health"
    PROJECT_STATUS = "project_status"
    RETRO = "retro"

    @property
    def display_name(self) -> str:
        return CHECK_IN_DISPLAY_NAMES[self]


CHECK_IN_DISPLAY_NAMES = {
    CheckInType.STANDUP: "Daily Standup",
    CheckInType.SPRINT: "Sprint Check-in",
    CheckInType.MENTAL_HEALTH: "Mental Health Check-in",
    CheckInType.PROJECT_STATUS: "Project Status Update",
    CheckInType.RETRO: "Team Retrospective",
}


class CheckInClassification(BaseModel):
    """Output from the classifier agent for a report request."""

    check_in_type: Optional[str] = Field(
        None,
        description="One of STANDUP, SPRINT, MENTAL_HEALTH, PROJECT_STATUS, RETRO, "
                    "or null when the request names no check-in at all"
    )

    reasoning: str = Field(
        "",
        description="One sentence on which words in the request led to this type"
    )
