"""
Report Assembler - builds the team progress report from stored memories.

FLOW:
1. Fetch: read the agent's 'messages' memories from the store
2. Filter: keep team member updates only
3. Sort: newest first by update timestamp
4. Group: one bucket per teamMemberId, in first-seen order
5. Analyze: one analyst call per member; on failure show the raw updates
6. Render: heading + one block per member with analysis and recent updates

A store failure or a missing or unparseable timestamp aborts the report.
Everything else degrades locally: an undecodable answers field affects one
update, a failed analysis affects one member.
"""

import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional

from team_report.analyst import analyze_member_updates
from team_report.errors import GenerationFailure
from team_report.models.classification import CheckInType
from team_report.models.report import MemberReportSection, TeamReport
from team_report.models.update import (
    DecodedAnswers,
    StoredMemory,
    TeamMemberUpdate,
    build_analysis_payload,
    decode_answers,
    decode_update,
)

logger = logging.getLogger(__name__)

MESSAGES_TABLE = "messages"
RECENT_UPDATES_LIMIT = 3
SECTION_DIVIDER = "-------------------"

Analyzer = Callable[[str, List[Dict[str, Any]]], Awaitable[str]]


def filter_team_updates(
    memories: List[StoredMemory],
    check_in_type: Optional[CheckInType] = None
) -> List[TeamMemberUpdate]:
    """
    Keep the team member updates carried by a list of memories.

    Only the content type tag is checked. The requested check-in type is
    not compared with each update's checkInType, so updates of every
    check-in type are reported; mismatches are logged.
    """
    updates = []
    mismatched = 0
    for memory in memories:
        update = decode_update(memory)
        if update is None:
            continue
        if check_in_type is not None and update.check_in_type != check_in_type.value:
            mismatched += 1
        updates.append(update)

    if mismatched:
        logger.info(
            f"{mismatched} of {len(updates)} updates have a checkInType other than "
            f"'{check_in_type.value}' and are included"
        )
    return updates


def sort_updates(updates: List[TeamMemberUpdate]) -> List[TeamMemberUpdate]:
    """
    Sort updates newest first. Ties keep their input order.

    Raises:
        ReportParseError: If any update has a missing or unparseable timestamp
    """
    return sorted(updates, key=lambda update: update.parsed_timestamp(), reverse=True)


def group_updates_by_member(
    updates: List[TeamMemberUpdate]
) -> Dict[str, List[TeamMemberUpdate]]:
    """Group updates by teamMemberId, keeping first-seen member order."""
    groups: Dict[str, List[TeamMemberUpdate]] = {}
    for update in updates:
        logger.info(
            f"Processing update for team member: {update.display_name} ({update.team_member_id})"
        )
        groups.setdefault(update.team_member_id, []).append(update)
    return groups


async def build_team_report(
    store,
    agent_id: str,
    check_in_type: CheckInType,
    room_id: Optional[str] = None,
    analyze: Analyzer = analyze_member_updates
) -> TeamReport:
    """
    Assemble a TeamReport for one check-in type.

    Args:
        store: Memory store exposing get_memories (see MemoryStore)
        agent_id: Agent whose memories are read
        check_in_type: Requested check-in type (used in the heading)
        room_id: Optional - restrict to one room
        analyze: Analysis coroutine, raising GenerationFailure on failure

    Returns:
        TeamReport with one section per member, newest activity first

    Raises:
        StoreFailure: If memories cannot be fetched
        ReportParseError: If an update timestamp cannot be parsed
    """
    memories = await store.get_memories(agent_id=agent_id, table_name=MESSAGES_TABLE, room_id=room_id)
    logger.info(f"Retrieved {len(memories)} total messages")

    updates = sort_updates(filter_team_updates(memories, check_in_type))
    logger.info(f"Found {len(updates)} updates for standup type: {check_in_type.value}")

    report = TeamReport(check_in_type=check_in_type)

    for team_member_id, member_updates in group_updates_by_member(updates).items():
        team_member_name = member_updates[0].display_name
        logger.info(f"Generating report section for: {team_member_name} ({team_member_id})")

        try:
            analysis = await analyze(team_member_name, build_analysis_payload(member_updates))
        except GenerationFailure as e:
            logger.error(f"Showing raw updates for {team_member_name}: {e}")
            analysis = None

        report.sections.append(MemberReportSection(
            team_member_id=team_member_id,
            team_member_name=team_member_name,
            updates=member_updates,
            analysis=analysis
        ))

    return report


def format_timestamp(update: TeamMemberUpdate) -> str:
    """Format like an en-US locale string, e.g. '3/7/2025, 9:05:00 AM'."""
    moment: datetime = update.parsed_timestamp()
    hour = moment.hour % 12 or 12
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {'AM' if moment.hour < 12 else 'PM'}"
    )


def _render_answers(update: TeamMemberUpdate) -> List[str]:
    decoded = decode_answers(update.answers)
    if not isinstance(decoded, DecodedAnswers):
        return ["▫️ Error parsing update details\n"]
    return [f"▫️ **{question}**: {answer}\n" for question, answer in decoded.answers.items()]


def render_member_section(section: MemberReportSection) -> str:
    parts = [f"👤 **{section.team_member_name}** (ID: {section.team_member_id})\n\n"]

    if section.analysis is not None:
        parts.append(f"📋 **Productivity Analysis**:\n{section.analysis}\n\n")
        parts.append("📅 **Recent Updates**:\n")
        for update in section.updates[:RECENT_UPDATES_LIMIT]:
            parts.append(f"\n🕒 {format_timestamp(update)}\n")
            parts.extend(_render_answers(update))
    else:
        parts.append("❌ Error generating analysis. Showing raw updates:\n\n")
        for update in section.updates:
            parts.append(f"Update from {format_timestamp(update)}:\n")
            parts.extend(_render_answers(update))

    parts.append(f"\n{SECTION_DIVIDER}\n\n")
    return "".join(parts)


def render_team_report(report: TeamReport) -> str:
    """Render a TeamReport as chat-ready markdown text."""
    label = report.check_in_type.value
    heading = f"📊 **Team Progress Report - {label} Standups**\n\n"

    if not report.sections:
        return heading + f'No updates found for "{label}" standups in this room.\n'

    return heading + "".join(render_member_section(section) for section in report.sections)


async def generate_team_report(
    store,
    agent_id: str,
    check_in_type: CheckInType,
    room_id: Optional[str] = None,
    analyze: Analyzer = analyze_member_updates
) -> str:
    """Build and render the team report for one check-in type."""
    logger.info("=== GENERATE TEAM REPORT START ===")
    logger.info(f"Generating report for standup type: {check_in_type.value}")

    try:
        report = await build_team_report(store, agent_id, check_in_type, room_id=room_id, analyze=analyze)
    except Exception as e:
        logger.error(f"Error generating team report: {e}")
        raise

    text = render_team_report(report)
    logger.info(f"Successfully generated team report ({len(report.sections)} members)")
    logger.info("=== GENERATE TEAM REPORT END ===")
    return text
