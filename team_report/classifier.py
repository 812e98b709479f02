"""
Classifier Agent - extracts the check-in type a report request is about.

Flow:
1. Run the classifier model over the request text with a fixed extraction
   prompt (STANDUP / SPRINT / MENTAL_HEALTH / PROJECT_STATUS / RETRO).
2. Normalize the returned label (strip, lower-case).
3. Validate it against CheckInType; anything outside the enumeration is
   rejected.

Failure policy: a model error or an unsupported label rejects the request.
There is no fallback type and no retry.
"""

import logging
from typing import Any, Optional

from pydantic_ai import Agent

from team_report.config.providers import provider_manager
from team_report.errors import ClassificationFailure, InvalidCheckInType
from team_report.models.classification import CheckInClassification, CheckInType
from team_report.prompts.classifier import CLASSIFIER_PROMPT_TEMPLATE, CLASSIFIER_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

model_info = provider_manager.get_model_info("classifier")
logger.info(
    f"Classifier Agent: {model_info['provider'].upper()} - {model_info['model']} "
    f"(temperature={model_info['temperature']})"
)


classifier_agent = Agent(
    model=provider_manager.get_model("classifier"),
    output_type=CheckInClassification,
    system_prompt=CLASSIFIER_SYSTEM_PROMPT
)


def normalize_check_in_type(value: Optional[str]) -> Optional[str]:
    """Lower-case and trim a label; blank labels become None."""
    if value is None:
        return None
    normalized = value.strip().lower()
    return normalized or None


def resolve_check_in_type(value: Any) -> CheckInType:
    """
    Validate a label against the supported check-in types.

    Raises:
        InvalidCheckInType: If the label is not one of CheckInType
    """
    if not isinstance(value, str):
        raise InvalidCheckInType(value)
    normalized = normalize_check_in_type(value)
    try:
        return CheckInType(normalized)
    except ValueError:
        raise InvalidCheckInType(value)


async def classify_request(text: str) -> Optional[str]:
    """
    Ask the classifier which check-in type a request is about.

    Args:
        text: The user's request

    Returns:
        Normalized label, or None when the model gave no classification.
        The label is not validated here - see resolve_check_in_type.

    Raises:
        ClassificationFailure: If the model call fails
    """
    prompt = CLASSIFIER_PROMPT_TEMPLATE.format(text=text)
    config = provider_manager.get_agent_config("classifier")

    try:
        result = await classifier_agent.run(
            prompt,
            model_settings={"temperature": config.temperature}
        )
    except Exception as e:
        logger.error(f"Error using AI to parse input: {e}", exc_info=True)
        raise ClassificationFailure(f"Check-in type extraction failed: {e}") from e

    parsed = normalize_check_in_type(result.output.check_in_type)
    logger.info(f"AI parsed standup type: {parsed} ({result.output.reasoning or 'no reasoning'})")
    return parsed
