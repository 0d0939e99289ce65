"""Main entry point: a scripted dashboard session for one organisation"""
import asyncio
import json
import sys

from .config.settings import settings
from .dashboard import TeamDashboard
from .tools.api_clients.gateway import build_gateway
from .utils.logging import setup_logging
from .utils.metrics import metrics
from .utils.notifier import ConsoleNotifier


async def show_teams(dashboard: TeamDashboard, notifier: ConsoleNotifier):
    rows = await dashboard.team_rows()
    notifier.table(
        (f"{row.team.name} (#{row.team.team_id})",
         f"{row.project_name}, {row.member_count} members")
        for row in rows
    )


async def run_session(organisation_id: int):
    """Walk through add, edit and delete against the configured backend"""
    logger = setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    logger.debug(f"Running in {settings.RUN_MODE} mode")
    settings.validate()

    notifier = ConsoleNotifier()
    gateway = build_gateway(settings.api_service(), latency=settings.STUB_LATENCY)
    dashboard = TeamDashboard(gateway, organisation_id, notifier)

    try:
        organisation = await dashboard.get_organisation()
        notifier.heading(f"Teams of {organisation.name}", "Manage your teams, projects, and members")
        await show_teams(dashboard, notifier)

        # Add a team with a project
        modal = dashboard.add_modal
        modal.open_create()
        projects = await modal.load_project_options()
        modal.edit_buffer(name="Backend", description="Services and APIs",
                          project_id=projects[0].project_id if projects else None)
        created = await modal.submit()
        await show_teams(dashboard, notifier)

        # Move it off its project again
        if created.team is not None:
            edit = dashboard.edit_team(created.team)
            edit.edit_buffer(project_id=None)
            await edit.submit()
            await show_teams(dashboard, notifier)

            await dashboard.delete_team(created.team.team_id)
            await show_teams(dashboard, notifier)

        logger.debug(f"Metrics: {json.dumps(metrics.get_summary(), indent=2)}")
    finally:
        await gateway.close()


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1 or not argv[0].isdigit():
        print("Usage: python -m teamsync.main <organisation_id>")
        print("Example: RUN_MODE=local python -m teamsync.main 1")
        sys.exit(1)

    try:
        asyncio.run(run_session(int(argv[0])))
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
