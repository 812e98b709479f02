"""
Prompts for the productivity analyst.

The analyst summarizes one team member's recent check-ins into a short
productivity report that is pasted into the team report as-is.
"""

ANALYST_SYSTEM_PROMPT = """You are an engineering manager's assistant reviewing a team member's recent check-ins.

Write plain prose with short headed paragraphs. Base every statement on the
updates you are given; do not invent tasks, dates or people. If the updates are
too thin to judge something, say so briefly."""


ANALYST_PROMPT_TEMPLATE = """Analyze these team member updates and provide a detailed productivity report.

The "answers" field contains all the update information in a question-answer format.

Highlight the following in your analysis:
1. Overall Progress: What major tasks/milestones were completed?
2. Current Focus: What are they actively working on?
3. Productivity Analysis: Are they meeting deadlines? Any patterns in their work?
4. Blockers Impact: How are blockers affecting their progress?
5. Recommendations: What could improve their productivity?

Updates data: {updates_json}"""
