"""Organisation dashboard facade wiring the gateway, cache, orchestrator and modals"""
from dataclasses import dataclass
from typing import Hashable, List, Optional

from .cache.view_cache import TeamViewCache
from .models.events import Outcome, FormMode
from .models.team import Team, TeamFormData, Member, Organisation
from .utils.notifier import Notifier
from .workflow.modal import TeamModalController
from .workflow.orchestrator import TeamMutationOrchestrator
from .workflow.resolver import resolve_assignment_action


@dataclass(frozen=True)
class TeamRow:
    """One line of the team table"""
    team: Team
    project_name: str
    member_count: int


class TeamDashboard:
    """Team management for one organisation, passed in explicitly"""

    resolve_assignment_action = staticmethod(resolve_assignment_action)

    def __init__(self, gateway, organisation_id: int, notifier: Notifier, metrics=None):
        self.gateway = gateway
        self.organisation_id = organisation_id
        self.cache = TeamViewCache(gateway)
        self.orchestrator = TeamMutationOrchestrator(gateway, self.cache, notifier, metrics=metrics)
        # Separate modal instances for "add" and "edit", as on the dashboard page
        self.add_modal = self.new_modal()
        self.edit_modal = self.new_modal()

    def new_modal(self) -> TeamModalController:
        return TeamModalController(self.orchestrator, self.organisation_id)

    async def submit_team(self, buffer: TeamFormData, mode: FormMode,
                          existing: Optional[Team] = None,
                          submission_key: Optional[Hashable] = None) -> Outcome:
        """Save a team outside the modals.

        Without an explicit key, one create per organisation and one edit
        per team may be in flight at a time.
        """
        if submission_key is None:
            target = existing.team_id if mode == FormMode.EDIT and existing is not None else None
            submission_key = ('dashboard', self.organisation_id, mode.value, target)
        return await self.orchestrator.submit_team(buffer, mode, self.organisation_id,
                                                   existing=existing, submission_key=submission_key)

    async def delete_team(self, team_id: int) -> Outcome:
        return await self.orchestrator.delete_team(team_id, self.organisation_id)

    async def get_teams(self) -> List[Team]:
        return await self.cache.get_teams(self.organisation_id)

    def get_project_name(self, project_id: Optional[int]) -> str:
        return self.cache.get_project_name(project_id)

    async def team_rows(self) -> List[TeamRow]:
        """Teams with their project names and member counts"""
        teams = await self.get_teams()
        return [
            TeamRow(team, self.get_project_name(team.project_id), team.member_count)
            for team in teams
        ]

    async def get_members(self) -> List[Member]:
        return await self.cache.get_members(self.organisation_id)

    async def get_organisation(self) -> Organisation:
        return await self.cache.get_organisation(self.organisation_id)

    def edit_team(self, team: Team) -> TeamModalController:
        """Open the edit modal for a team"""
        self.edit_modal.open_edit(team)
        return self.edit_modal
