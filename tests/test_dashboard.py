"""Tests for the organisation dashboard facade."""
import asyncio

import pytest

from conftest import ORG_ID, RecordingNotifier, run_async
from teamsync.dashboard import TeamDashboard
from teamsync.models.events import ActionType, FormMode, OutcomeStatus
from teamsync.models.team import TeamFormData
from teamsync.utils.metrics import MetricsCollector


@pytest.fixture
def dashboard(gateway):
    return TeamDashboard(gateway, ORG_ID, RecordingNotifier(), metrics=MetricsCollector())


def test_team_rows_include_project_names_and_member_counts(dashboard):
    rows = run_async(dashboard.team_rows())

    assert [(r.team.name, r.project_name, r.member_count) for r in rows] == [
        ("Payments", "Billing Revamp", 2),
        ("Infrastructure", "Platform API", 2),
        ("Design", "No Project", 1),
    ]


def test_submit_then_read_back(store, dashboard):
    async def scenario():
        with_project = await dashboard.submit_team(TeamFormData(name="Backend", project_id=7), FormMode.CREATE)
        without = await dashboard.submit_team(TeamFormData(name="Frontend"), FormMode.CREATE)
        return with_project, without, await dashboard.get_teams()

    with_project, without, teams = run_async(scenario())

    by_id = {t.team_id: t for t in teams}
    assert by_id[with_project.team.team_id].project_id == 7
    assert by_id[without.team.team_id].project_id is None
    assert dashboard.get_project_name(7) == "Platform API"


def test_add_and_edit_use_separate_modals(store, gateway, dashboard):
    dashboard.add_modal.open_create()
    edit = dashboard.edit_team(store.teams[6])

    assert edit is dashboard.edit_modal
    assert dashboard.add_modal.is_open and edit.is_open
    assert dashboard.add_modal.instance_id != edit.instance_id


def test_delete_through_dashboard(dashboard):
    async def scenario():
        await dashboard.get_teams()
        outcome = await dashboard.delete_team(8)
        return outcome, await dashboard.get_teams()

    outcome, teams = run_async(scenario())

    assert outcome.is_success
    assert [t.team_id for t in teams] == [5, 6]


def test_members_and_organisation(dashboard):
    async def scenario():
        return await dashboard.get_members(), await dashboard.get_organisation()

    members, org = run_async(scenario())

    assert all(not m.is_admin for m in members)
    assert org.name == "Acme Corp"


def test_resolver_exposed():
    assert TeamDashboard.resolve_assignment_action(None, 3).type == ActionType.ASSIGN


def test_concurrent_creates_through_dashboard_are_deduplicated(gateway, dashboard):
    async def scenario():
        buffer = TeamFormData(name="Backend")
        return await asyncio.gather(
            dashboard.submit_team(buffer, FormMode.CREATE),
            dashboard.submit_team(buffer, FormMode.CREATE),
        )

    first, second = run_async(scenario())

    assert first.is_success
    assert second.status == OutcomeStatus.IGNORED
    assert gateway.teams.call_count("create") == 1


def test_concurrent_edits_of_different_teams_both_run(store, gateway, dashboard):
    async def scenario():
        return await asyncio.gather(
            dashboard.submit_team(TeamFormData(name="A"), FormMode.EDIT, existing=store.teams[5]),
            dashboard.submit_team(TeamFormData(name="B"), FormMode.EDIT, existing=store.teams[6]),
        )

    outcomes = run_async(scenario())

    assert all(o.is_success for o in outcomes)
    assert gateway.teams.call_count("update") == 2
