"""Tests for the productivity analyst."""

import pytest
from pydantic_ai.messages import ModelRequest, ModelResponse, TextPart, UserPromptPart
from pydantic_ai.models.function import AgentInfo, FunctionModel
from pydantic_ai.models.test import TestModel

from team_report.analyst import analyst_agent, analyze_member_updates
from team_report.errors import GenerationFailure

PAYLOAD = [{
    "teamMemberId": "u1",
    "teamMemberName": "Ada",
    "serverName": "Acme",
    "checkInType": "standup",
    "timestamp": "2025-03-07T09:05:00Z",
    "answers": {"What did you finish?": "Login flow"},
}]


@pytest.mark.asyncio
async def test_returns_model_text():
    with analyst_agent.override(model=TestModel(custom_output_text="Ada shipped the login flow.")):
        analysis = await analyze_member_updates("Ada", PAYLOAD)
    assert analysis == "Ada shipped the login flow."


@pytest.mark.asyncio
async def test_prompt_carries_template_and_payload():
    prompts = []

    def capture(messages, info: AgentInfo) -> ModelResponse:
        for message in messages:
            if isinstance(message, ModelRequest):
                prompts.extend(p.content for p in message.parts if isinstance(p, UserPromptPart))
        return ModelResponse(parts=[TextPart("ok")])

    with analyst_agent.override(model=FunctionModel(capture)):
        await analyze_member_updates("Ada", PAYLOAD)

    prompt = prompts[0]
    assert "detailed productivity report" in prompt
    assert "Blockers Impact" in prompt
    assert '"What did you finish?": "Login flow"' in prompt


@pytest.mark.asyncio
async def test_model_error_raises_generation_failure():
    def unavailable(messages, info: AgentInfo):
        raise RuntimeError("rate limited")

    with analyst_agent.override(model=FunctionModel(unavailable)):
        with pytest.raises(GenerationFailure):
            await analyze_member_updates("Ada", PAYLOAD)
