"""Shared fixtures for the team report tests.

The classifier and analyst agents build their models at import time, so the
per-agent API keys are set here before any test module imports them. Real
model requests are disabled; tests swap models in with Agent.override.
"""

import json
import os

os.environ.setdefault("CLASSIFIER_API_KEY", "test-classifier-key")
os.environ.setdefault("ANALYST_API_KEY", "test-analyst-key")

import pytest
from pydantic_ai import models

from team_report.errors import StoreFailure
from team_report.models.update import StoredMemory

models.ALLOW_MODEL_REQUESTS = False


class FakeMemoryStore:
    """In-memory stand-in for MemoryStore that records every fetch."""

    def __init__(self, memories=None, error=None):
        self.memories = list(memories or [])
        self.error = error
        self.calls = []

    async def get_memories(self, agent_id, table_name="messages", room_id=None, count=None):
        self.calls.append({"agent_id": agent_id, "table_name": table_name, "room_id": room_id})
        if self.error is not None:
            raise StoreFailure("store offline") from self.error
        return list(self.memories)


@pytest.fixture
def make_memory():
    """Build a stored team-member-update memory."""
    counter = {"n": 0}

    def _make(member_id, name, timestamp, answers=None, raw_answers=None, check_in_type="standup"):
        counter["n"] += 1
        encoded = raw_answers if raw_answers is not None else json.dumps(answers or {})
        return StoredMemory(
            id=f"mem-{counter['n']}",
            agent_id="agent-1",
            room_id="room-1",
            content={
                "type": "team-member-update",
                "update": {
                    "teamMemberId": member_id,
                    "teamMemberName": name,
                    "serverName": "Acme",
                    "checkInType": check_in_type,
                    "timestamp": timestamp,
                    "answers": encoded,
                },
            },
        )

    return _make


@pytest.fixture
def fake_store():
    return FakeMemoryStore
