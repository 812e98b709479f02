"""Tests for team_report.models.update."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from team_report.errors import ReportParseError
from team_report.models.update import (
    DecodedAnswers,
    StoredMemory,
    TeamMemberUpdate,
    UndecodableAnswers,
    build_analysis_payload,
    decode_answers,
    decode_update,
    parse_timestamp,
)


# ---------------------------------------------------------------------------
# decode_update
# ---------------------------------------------------------------------------


def test_decode_update_reads_camel_case_payload(make_memory):
    update = decode_update(make_memory("u1", "Ada", "2025-03-07T09:05:00Z", {"Done?": "yes"}))
    assert update.team_member_id == "u1"
    assert update.team_member_name == "Ada"
    assert update.server_name == "Acme"
    assert update.check_in_type == "standup"


def test_decode_update_ignores_other_content_types():
    memory = StoredMemory(id="m1", content={"type": "message", "text": "hello"})
    assert decode_update(memory) is None


def test_decode_update_skips_marker_without_payload():
    memory = StoredMemory(id="m1", content={"type": "team-member-update"})
    assert decode_update(memory) is None


def test_decode_update_skips_payload_without_member_id():
    memory = StoredMemory(
        id="m1",
        content={"type": "team-member-update", "update": {"timestamp": "2025-01-01T00:00:00Z"}},
    )
    assert decode_update(memory) is None


def test_update_is_immutable(make_memory):
    update = decode_update(make_memory("u1", "Ada", "2025-03-07T09:05:00Z"))
    with pytest.raises(ValidationError):
        update.team_member_name = "Grace"


def test_display_name_defaults_to_unknown():
    update = TeamMemberUpdate(team_member_id="u1", timestamp="2025-01-01T00:00:00Z")
    assert update.display_name == "Unknown"


# ---------------------------------------------------------------------------
# decode_answers
# ---------------------------------------------------------------------------


def test_decode_answers_object():
    result = decode_answers('{"What did you do?": "Shipped login"}')
    assert isinstance(result, DecodedAnswers)
    assert result.answers == {"What did you do?": "Shipped login"}


@pytest.mark.parametrize("raw", [None, ""])
def test_decode_answers_empty_is_empty_map(raw):
    result = decode_answers(raw)
    assert isinstance(result, DecodedAnswers)
    assert result.answers == {}


def test_decode_answers_invalid_json_is_tagged_error():
    result = decode_answers("{not json")
    assert isinstance(result, UndecodableAnswers)
    assert result.status == "error"
    assert result.raw == "{not json"


def test_decode_answers_rejects_non_object():
    result = decode_answers('["a", "b"]')
    assert isinstance(result, UndecodableAnswers)
    assert "JSON object" in result.error


@pytest.mark.parametrize("raw", [{"Done?": "tests"}, ["a"], 42])
def test_decode_answers_rejects_unencoded_values(raw):
    result = decode_answers(raw)
    assert isinstance(result, UndecodableAnswers)
    assert result.raw is None
    assert "JSON string" in result.error


def test_decode_update_keeps_record_with_unencoded_answers(make_memory):
    update = decode_update(make_memory("u1", "Ada", "2025-03-07T09:00:00Z", raw_answers={"Done?": "x"}))
    assert update is not None
    assert update.answers == {"Done?": "x"}


def test_decode_update_keeps_record_without_timestamp():
    memory = StoredMemory(content={
        "type": "team-member-update",
        "update": {"teamMemberId": "u1", "teamMemberName": "Ada"},
    })
    update = decode_update(memory)
    assert update is not None
    assert update.timestamp is None


# ---------------------------------------------------------------------------
# parse_timestamp
# ---------------------------------------------------------------------------


def test_parse_timestamp_iso_with_z():
    assert parse_timestamp("2025-03-07T09:05:00Z") == datetime(2025, 3, 7, 9, 5, tzinfo=timezone.utc)


def test_parse_timestamp_naive_is_utc():
    assert parse_timestamp("2025-03-07T09:05:00").tzinfo == timezone.utc


def test_parse_timestamp_epoch_millis():
    assert parse_timestamp(1741338300000) == datetime(2025, 3, 7, 9, 5, tzinfo=timezone.utc)


def test_parse_timestamp_invalid_raises():
    with pytest.raises(ReportParseError):
        parse_timestamp("last tuesday")


def test_parse_timestamp_missing_raises():
    with pytest.raises(ReportParseError, match="no timestamp"):
        parse_timestamp(None)


# ---------------------------------------------------------------------------
# build_analysis_payload
# ---------------------------------------------------------------------------


def test_payload_decodes_answers_and_keeps_raw_fallback(make_memory):
    good = decode_update(make_memory("u1", "Ada", "2025-03-07T09:05:00Z", {"Blockers?": "none"}))
    bad = decode_update(make_memory("u1", "Ada", "2025-03-06T09:05:00Z", raw_answers="oops"))

    payload = build_analysis_payload([good, bad])

    assert payload[0]["answers"] == {"Blockers?": "none"}
    assert payload[0]["teamMemberName"] == "Ada"
    assert payload[1]["answers"] == "oops"
    assert payload[1]["teamMemberId"] == "u1"
