"""
Analyst Agent - writes a productivity analysis for one team member.

Receives the member's updates (answers already decoded where possible) and
returns free-text analysis covering progress, focus, productivity, blockers
and recommendations.

Failure policy: any model error is raised as GenerationFailure so the report
can fall back to showing that member's raw updates.
"""

import json
import logging
from typing import Any, Dict, List

from pydantic_ai import Agent

from team_report.config.providers import provider_manager
from team_report.errors import GenerationFailure
from team_report.prompts.analyst import ANALYST_PROMPT_TEMPLATE, ANALYST_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

model_info = provider_manager.get_model_info("analyst")
logger.info(
    f"Analyst Agent: {model_info['provider'].upper()} - {model_info['model']} "
    f"(temperature={model_info['temperature']})"
)


analyst_agent = Agent(
    model=provider_manager.get_model("analyst"),
    output_type=str,
    system_prompt=ANALYST_SYSTEM_PROMPT
)


async def analyze_member_updates(
    team_member_name: str,
    updates_payload: List[Dict[str, Any]]
) -> str:
    """
    Generate a productivity analysis for one team member.

    Args:
        team_member_name: Display name, used for logging
        updates_payload: Output of build_analysis_payload, newest first

    Returns:
        Analysis text

    Raises:
        GenerationFailure: If the model call fails
    """
    prompt = ANALYST_PROMPT_TEMPLATE.format(
        updates_json=json.dumps(updates_payload, indent=2, default=str)
    )
    config = provider_manager.get_agent_config("analyst")

    logger.info(f"Generating productivity analysis for team member: {team_member_name}")
    try:
        result = await analyst_agent.run(
            prompt,
            model_settings={"temperature": config.temperature}
        )
    except Exception as e:
        logger.error(f"Error generating analysis for {team_member_name}: {e}", exc_info=True)
        raise GenerationFailure(f"Analysis failed for {team_member_name}: {e}") from e

    return result.output
