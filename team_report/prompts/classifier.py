"""
Prompts for the request classifier.

The classifier reads a chat request for a team report and names the kind of
check-in the report should cover.
"""

CLASSIFIER_SYSTEM_PROMPT = """You route requests for team reports in a chat workspace.

Teams run five kinds of recurring check-ins:
- STANDUP: Daily Standup
- SPRINT: Sprint Check-in
- MENTAL_HEALTH: Mental Health Check-in
- PROJECT_STATUS: Project Status Update
- RETRO: Team Retrospective

Given a request, decide which kind of check-in the user wants a report for.
Return the value exactly as listed above in check_in_type."""


CLASSIFIER_PROMPT_TEMPLATE = """Extract the standup type from this text. Try to understand the sentence and its context.
Return one of these values: STANDUP, SPRINT, MENTAL_HEALTH, PROJECT_STATUS, RETRO.
If you can't determine a specific type, use STANDUP as default.

Text: "{text}\""""


CHECK_IN_OPTIONS_PROMPT = """Please select a check-in type:
- Daily Standup (STANDUP)
- Sprint Check-in (SPRINT)
- Mental Health Check-in (MENTAL_HEALTH)
- Project Status Update (PROJECT_STATUS)
- Team Retrospective (RETRO)"""
