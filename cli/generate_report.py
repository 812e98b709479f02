"""
Generate a team progress report from the command line.

This CLI:
1. Connects to the memory database (DATABASE_URL)
2. Runs the GENERATE_REPORT action for a request text or an explicit type
3. Renders the delivered response with Rich

Usage:
    python cli/generate_report.py --agent-id <uuid> --text "Can I see the sprint progress report?"
    python cli/generate_report.py --agent-id <uuid> --type retro --room-id <uuid>
    python cli/generate_report.py --check-config
"""

import asyncio
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, List, Optional

# Add project root to Python path
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import asyncpg
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from team_report.config.providers import provider_manager
from team_report.models.report import ResponseContent

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler('generate_report.log'),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

console = Console()


def show_provider_config() -> bool:
    """Print per-agent provider configuration. Returns True if every agent is valid."""
    results = provider_manager.validate_all_agents()

    table = Table(title="Agent Providers")
    table.add_column("Agent", style="cyan")
    table.add_column("Status")
    table.add_column("Provider")
    table.add_column("Model")
    table.add_column("Error", style="red")

    for agent, result in results.items():
        status = "[green]valid[/green]" if result["status"] == "valid" else "[red]invalid[/red]"
        table.add_row(agent, status, result["provider"] or "-", result["model"] or "-", result["error"] or "")

    console.print(table)
    return all(r["status"] == "valid" for r in results.values())


async def console_callback(content: ResponseContent, attachments: List[Any]) -> None:
    console.print(Panel(Markdown(content.text), title=f"Response ({content.source})", border_style="cyan"))


async def run_report(agent_id: str, text: str, check_in_type: Optional[str], room_id: Optional[str]) -> bool:
    # Agents build their models on import
    from team_report.action import ChatMessage, ReportRuntime, generate_report_handler
    from team_report.tools.memory_store import MemoryStore

    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        console.print("[red]DATABASE_URL not set in environment or .env[/red]")
        return False

    pool = await asyncpg.create_pool(dsn=db_url, min_size=1, max_size=2)
    try:
        runtime = ReportRuntime(agent_id=agent_id, store=MemoryStore(pool), room_id=room_id)
        state = {"check_in_type": check_in_type} if check_in_type else {}
        with console.status("[bold cyan]Generating report..."):
            return await generate_report_handler(
                runtime,
                ChatMessage(text=text, room_id=room_id),
                state,
                callback=console_callback
            )
    finally:
        await pool.close()


async def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a team progress report")
    parser.add_argument("--agent-id", help="Agent whose memories hold the team updates")
    parser.add_argument("--text", default="Generate a team report", help="Request text to classify")
    parser.add_argument("--type", dest="check_in_type", default=None,
                        help="Check-in type (standup, sprint, mental_health, project_status, retro); skips classification")
    parser.add_argument("--room-id", default=None, help="Restrict the report to one room")
    parser.add_argument("--check-config", action="store_true", help="Show provider configuration and exit")
    args = parser.parse_args()

    if args.check_config:
        return 0 if show_provider_config() else 1

    if not args.agent_id:
        parser.error("--agent-id is required unless --check-config is given")

    if not show_provider_config():
        console.print("[red]Fix the provider configuration in .env before generating reports[/red]")
        return 1

    ok = await run_report(args.agent_id, args.text, args.check_in_type, args.room_id)
    console.print("[green]✓ Report delivered[/green]" if ok else "[yellow]Report not generated[/yellow]")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
