"""
Pydantic models for stored memories and team member updates.

Memories come back from the store as loosely structured rows. The helpers
here turn them into validated TeamMemberUpdate records and decode each
update's string-encoded answers into a tagged result, so callers never
probe optional fields directly.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from team_report.errors import DecodeFailure, ReportParseError

logger = logging.getLogger(__name__)

TEAM_MEMBER_UPDATE_TYPE = "team-member-update"


class StoredMemory(BaseModel):
    """A single row returned by the memory store."""

    id: Optional[str] = None
    entity_id: Optional[str] = None
    agent_id: Optional[str] = None
    room_id: Optional[str] = None
    content: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None


class TeamMemberUpdate(BaseModel):
    """
    One person's check-in, as stored inside a memory's content.

    Stored payloads use camelCase keys (teamMemberId, checkInType, ...);
    snake_case names are accepted as well.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    team_member_id: str = Field(..., alias="teamMemberId", min_length=1)
    team_member_name: Optional[str] = Field(None, alias="teamMemberName")
    server_name: Optional[str] = Field(None, alias="serverName")
    check_in_type: Optional[str] = Field(None, alias="checkInType")
    timestamp: Optional[Union[str, int, float]] = Field(
        None,
        description="ISO-8601 string or epoch milliseconds"
    )
    answers: Any = Field(
        None,
        description="JSON string encoding an object that maps question text to answer text"
    )

    @property
    def display_name(self) -> str:
        return self.team_member_name or "Unknown"

    def parsed_timestamp(self) -> datetime:
        """
        Parse the timestamp into an aware datetime.

        Raises:
            ReportParseError: If the timestamp is not a valid date
        """
        return parse_timestamp(self.timestamp)


class DecodedAnswers(BaseModel):
    status: Literal["ok"] = "ok"
    answers: Dict[str, Any] = Field(default_factory=dict)


class UndecodableAnswers(BaseModel):
    status: Literal["error"] = "error"
    raw: Optional[str] = None
    error: str


AnswerDecodeResult = Union[DecodedAnswers, UndecodableAnswers]


def parse_timestamp(value: Optional[Union[str, int, float]]) -> datetime:
    """
    Parse an update timestamp.

    Strings must be ISO-8601 (a trailing 'Z' is accepted); numbers are epoch
    milliseconds. Naive values are treated as UTC so every parsed timestamp
    compares against every other. A missing timestamp is a parse failure.
    """
    if value is None:
        raise ReportParseError("Update has no timestamp")
    try:
        if isinstance(value, bool):
            raise TypeError("boolean is not a timestamp")
        if isinstance(value, (int, float)):
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        else:
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            parsed = datetime.fromisoformat(text)
    except (TypeError, ValueError, OverflowError, OSError) as e:
        raise ReportParseError(f"Invalid update timestamp {value!r}: {e}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def decode_update(memory: StoredMemory) -> Optional[TeamMemberUpdate]:
    """
    Extract the team member update carried by a memory.

    Returns None for memories that are not team member updates, or whose
    update payload is missing or malformed.
    """
    content = memory.content or {}
    if content.get("type") != TEAM_MEMBER_UPDATE_TYPE:
        return None

    payload = content.get("update")
    if not payload:
        logger.warning(f"Memory {memory.id} is a team member update without an update payload")
        return None

    try:
        return TeamMemberUpdate.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Skipping malformed team member update in memory {memory.id}: {e}")
        return None


def _parse_answers(raw: Any) -> Dict[str, Any]:
    if raw is None or raw == "":
        return {}
    if not isinstance(raw, str):
        raise DecodeFailure(f"Answers must be a JSON string, got {type(raw).__name__}")
    try:
        answers = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise DecodeFailure(f"Answers are not valid JSON: {e}") from e
    if not isinstance(answers, dict):
        raise DecodeFailure(f"Answers must be a JSON object, got {type(answers).__name__}")
    return answers


def decode_answers(raw: Any) -> AnswerDecodeResult:
    """Decode an update's answers, reporting failure instead of raising."""
    try:
        return DecodedAnswers(answers=_parse_answers(raw))
    except DecodeFailure as e:
        logger.error(f"Error parsing answers JSON: {e}")
        return UndecodableAnswers(raw=raw if isinstance(raw, str) else None, error=str(e))


def build_analysis_payload(updates: List[TeamMemberUpdate]) -> List[Dict[str, Any]]:
    """
    Convert updates into the JSON-ready payload handed to the analyst.

    Records whose answers cannot be decoded are passed through in their raw
    stored form.
    """
    payload = []
    for update in updates:
        decoded = decode_answers(update.answers)
        if isinstance(decoded, DecodedAnswers):
            payload.append({
                "teamMemberId": update.team_member_id,
                "teamMemberName": update.team_member_name,
                "serverName": update.server_name,
                "checkInType": update.check_in_type,
                "timestamp": update.timestamp,
                "answers": decoded.answers,
            })
        else:
            payload.append(update.model_dump(by_alias=True))
    return payload
