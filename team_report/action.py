"""GENERATE_REPORT action

Handles one chat message asking for a team report:
    1) Work out the check-in type (pre-supplied in state, else classifier).
    2) Build the report from the agent's stored memories.
    3) Deliver exactly one response through the callback.

Every path that has a callback ends in exactly one delivery: the report, an
option prompt, a rejection, or an apology. Only a missing state or missing
callback returns without delivering.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import BaseModel

from team_report.classifier import classify_request, resolve_check_in_type
from team_report.errors import ClassificationFailure, InputMissing, InvalidCheckInType
from team_report.models.report import ResponseContent
from team_report.prompts.classifier import CHECK_IN_OPTIONS_PROMPT
from team_report.reporter import generate_team_report

logger = logging.getLogger(__name__)

HandlerCallback = Callable[[ResponseContent, List[Any]], Awaitable[Any]]

MISSING_TEXT_MESSAGE = "I didn't receive any request text. Tell me which team report you'd like to see."
INVALID_TYPE_MESSAGE = (
    "Invalid check-in type. Please select one of: Daily Standup, Sprint Check-in, "
    "Mental Health Check-in, Project Status Update, or Team Retrospective"
)
CLASSIFICATION_FAILED_MESSAGE = "I couldn't understand the check-in type. Please try again with a valid type."
REPORT_FAILED_MESSAGE = "❌ An error occurred while generating the report. Please try again."


class ChatMessage(BaseModel):
    """Incoming chat message."""

    text: Optional[str] = None
    room_id: Optional[str] = None
    entity_id: Optional[str] = None


@dataclass
class ReportRuntime:
    """
    Collaborators for the report action.

    store must expose get_memories(agent_id, table_name, room_id); see
    team_report.tools.memory_store.MemoryStore.
    """
    agent_id: str
    store: Any
    room_id: Optional[str] = None


async def generate_report_handler(
    runtime: ReportRuntime,
    message: ChatMessage,
    state: Optional[Dict[str, Any]],
    options: Optional[Dict[str, Any]] = None,
    callback: Optional[HandlerCallback] = None
) -> bool:
    """Run the GENERATE_REPORT action for one message. Returns True on success."""
    logger.info("=== GENERATE REPORT HANDLER START ===")

    if state is None:
        return False
    if callback is None:
        logger.warning("No callback function provided")
        return False

    delivered = False

    async def deliver(text: str) -> None:
        nonlocal delivered
        delivered = True
        await callback(ResponseContent(text=text), [])

    try:
        try:
            text = message.text
            if not text:
                raise InputMissing("No text content found in message")

            requested = state.get("check_in_type")
            if requested:
                logger.info(f"Using check-in type from state: {requested}")
            else:
                requested = await classify_request(text)

            if not requested:
                logger.info("Asking for standup type")
                await deliver(CHECK_IN_OPTIONS_PROMPT)
                return True

            check_in_type = resolve_check_in_type(requested)
        except InputMissing as e:
            logger.warning(str(e))
            await deliver(MISSING_TEXT_MESSAGE)
            return False
        except InvalidCheckInType as e:
            logger.warning(str(e))
            await deliver(INVALID_TYPE_MESSAGE)
            return False
        except ClassificationFailure:
            await deliver(CLASSIFICATION_FAILED_MESSAGE)
            return False

        logger.info(f"Generating report with parameters: standup_type={check_in_type.value}, room_id={message.room_id}")
        report = await generate_team_report(
            runtime.store,
            runtime.agent_id,
            check_in_type,
            room_id=runtime.room_id
        )

        await deliver(report)
        logger.info("=== GENERATE REPORT HANDLER END ===")
        return True

    except Exception as e:
        logger.error("=== GENERATE REPORT HANDLER ERROR ===")
        logger.error(f"Error details: {type(e).__name__}: {e}", exc_info=True)

        if not delivered:
            await callback(ResponseContent(text=REPORT_FAILED_MESSAGE), [])
        return False


async def validate_report_request(runtime: ReportRuntime, message: ChatMessage) -> bool:
    """Report requests need no pre-validation; routing happens upstream."""
    logger.info("Validating generateReport action")
    return True


@dataclass
class ReportAction:
    """Registration record for an agent action."""
    name: str
    description: str
    handler: Callable[..., Awaitable[bool]]
    validate: Callable[..., Awaitable[bool]]
    similes: List[str] = field(default_factory=list)
    examples: List[List[Dict[str, Any]]] = field(default_factory=list)


GENERATE_REPORT_ACTION = ReportAction(
    name="GENERATE_REPORT",
    description="Generates a comprehensive report of team member updates and productivity analysis",
    handler=generate_report_handler,
    validate=validate_report_request,
    similes=[
        "CREATE_REPORT",
        "TEAM_REPORT",
        "GET_TEAM_REPORT",
        "SHOW_TEAM_REPORT",
        "PRODUCE_TEAM_ANALYSIS",
    ],
    examples=[
        [
            {"name": "{{name1}}", "content": {"text": "Generate a daily standup report"}},
            {"name": "{{botName}}", "content": {
                "text": "I'll generate a daily standup report for you",
                "actions": ["GENERATE_REPORT"],
            }},
        ],
        [
            {"name": "{{name1}}", "content": {"text": "Can I see the sprint progress report?"}},
            {"name": "{{botName}}", "content": {
                "text": "I'll create a sprint check-in report for you",
                "actions": ["GENERATE_REPORT"],
            }},
        ],
        [
            {"name": "{{name1}}", "content": {"text": "How is the team doing with the project?"}},
            {"name": "{{botName}}", "content": {
                "text": "I'll generate a project status report to show you how the team is progressing",
                "actions": ["GENERATE_REPORT"],
            }},
        ],
    ],
)
