"""
Pydantic models for assembled team reports and delivered responses.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from team_report.models.classification import CheckInType
from team_report.models.update import TeamMemberUpdate


class MemberReportSection(BaseModel):
    """
    One team member's part of the report.

    analysis is None when the analyst failed; the section is then rendered
    from the raw updates instead.
    """

    team_member_id: str
    team_member_name: str
    updates: List[TeamMemberUpdate] = Field(
        default_factory=list,
        description="All of the member's updates, newest first"
    )
    analysis: Optional[str] = None


class TeamReport(BaseModel):
    """Per-member sections in the order members first appear (newest update first)."""

    check_in_type: CheckInType
    sections: List[MemberReportSection] = Field(default_factory=list)


class ResponseContent(BaseModel):
    """Content handed to the delivery callback."""

    text: str
    source: str = "discord"
