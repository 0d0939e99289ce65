"""Stub services for local runs and tests.

In-memory stand-ins for the entity API clients. They share one ``StubStore``
so that, for example, assigning a team to a project is visible to later team
lookups. Failures can be injected per operation with ``fail_on``.
"""
import asyncio
import dataclasses
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple, Any

from ..models.team import Team, Project, Organisation, Member
from ..utils.exceptions import RemoteFailure, RemoteValidationFailure, NotFoundFailure
from .api_clients.gateway import EntityGateway

# Sample data for local runs
SAMPLE_ORGANISATIONS = [
    {"organisationId": 1, "name": "Acme Corp"},
    {"organisationId": 2, "name": "Tech Innovations Inc"},
]

SAMPLE_PROJECTS = [
    {"projectId": 3, "name": "Billing Revamp", "organisationId": 1},
    {"projectId": 7, "name": "Platform API", "organisationId": 1},
    {"id": 9, "name": "Mobile App", "organisationId": 1},
    {"projectId": 11, "name": "Data Warehouse", "organisationId": 2},
]

SAMPLE_MEMBERS = [
    {"userId": 100, "username": "admin", "email": "admin@acmecorp.com", "role": "Admin", "organisationId": 1},
    {"userId": 101, "username": "jdoe", "email": "john.doe@acmecorp.com", "role": "Manager", "organisationId": 1},
    {"userId": 102, "username": "jsmith", "email": "jane.smith@acmecorp.com", "role": "Employee", "organisationId": 1},
    {"userId": 103, "username": "bjohnson", "email": "bob.johnson@acmecorp.com", "role": "Employee", "organisationId": 1},
    {"userId": 200, "username": "awilliams", "email": "alice@techinnovations.com", "role": "Manager", "organisationId": 2},
]

SAMPLE_TEAMS = [
    {"teamId": 5, "name": "Payments", "organisationId": 1, "projectId": 3,
     "description": "Card and invoice flows", "teamManagerId": 101, "members": [101, 102],
     "createdAt": "2024-01-15T09:30:00+00:00"},
    {"teamId": 6, "name": "Infrastructure", "organisationId": 1, "projectId": 7,
     "teamManagerId": 101, "members": [101, 103], "createdAt": "2024-02-01T14:00:00+00:00"},
    {"teamId": 8, "name": "Design", "organisationId": 1, "members": [102],
     "createdAt": "2024-03-10T11:15:00+00:00"},
]


class StubStore:
    """Shared in-memory state behind the stub services"""

    def __init__(self, seed: bool = True):
        self.organisations: Dict[int, Organisation] = {}
        self.projects: Dict[int, Project] = {}
        self.members: Dict[int, Tuple[int, Member]] = {}  # id -> (organisation_id, member)
        self.teams: Dict[int, Team] = {}
        self.next_team_id = 1
        self.next_project_id = 1
        if seed:
            self.load(SAMPLE_ORGANISATIONS, SAMPLE_PROJECTS, SAMPLE_MEMBERS, SAMPLE_TEAMS)

    def load(self, organisations=(), projects=(), members=(), teams=()):
        """Load API-shaped records into the store"""
        for data in organisations:
            org = Organisation.from_dict(data)
            self.organisations[org.organisation_id] = org
        for data in projects:
            project = Project.from_dict(data)
            self.projects[project.project_id] = project
            self.next_project_id = max(self.next_project_id, project.project_id + 1)
        for data in members:
            member = Member.from_dict(data)
            self.members[member.member_id] = (int(data['organisationId']), member)
        for data in teams:
            team = Team.from_dict(data)
            self.teams[team.team_id] = team
            self.next_team_id = max(self.next_team_id, team.team_id + 1)


class StubService:
    """Common call recording, latency and failure injection"""

    service = "stub"

    def __init__(self, store: StubStore, latency: float = 0.0):
        self.store = store
        self.latency = latency
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self._failures: Dict[str, List[RemoteFailure]] = defaultdict(list)
        self._gates: Dict[str, asyncio.Event] = {}

    def fail_on(self, operation: str, failure: Optional[RemoteFailure] = None, times: int = 1):
        """Make the next ``times`` calls of ``operation`` raise ``failure``"""
        failure = failure or RemoteFailure(self.service, "Temporary service unavailable", 503)
        self._failures[operation].extend([failure] * times)

    def hold(self, operation: str) -> asyncio.Event:
        """Block ``operation`` calls until the returned event is set"""
        gate = asyncio.Event()
        self._gates[operation] = gate
        return gate

    def call_count(self, operation: str) -> int:
        return sum(1 for name, _ in self.calls if name == operation)

    async def _call(self, operation: str, *args):
        self.calls.append((operation, args))
        await asyncio.sleep(self.latency)  # Simulate network delay
        gate = self._gates.get(operation)
        if gate is not None:
            await gate.wait()
        if self._failures[operation]:
            raise self._failures[operation].pop(0)


class StubTeamService(StubService):
    """Stub implementation of the Team Service API"""

    service = "team-service"

    def _get(self, team_id: int) -> Team:
        team = self.store.teams.get(team_id)
        if team is None:
            raise NotFoundFailure(self.service, f"Team {team_id} not found", 404)
        return team

    async def list(self, organisation_id: int) -> List[Team]:
        await self._call('list', organisation_id)
        return [t for _, t in sorted(self.store.teams.items())
                if t.organisation_id == organisation_id]

    async def get_by_id(self, team_id: int) -> Team:
        await self._call('get_by_id', team_id)
        return self._get(team_id)

    async def create(self, team: Team) -> Team:
        await self._call('create', team)
        if not team.name.strip():
            raise RemoteValidationFailure(self.service, "Team name is required", 422)
        if team.organisation_id not in self.store.organisations:
            raise NotFoundFailure(self.service, f"Organisation {team.organisation_id} not found", 404)

        created = dataclasses.replace(
            team,
            team_id=self.store.next_team_id,
            project_id=None,
            created_at=team.created_at or datetime.now(timezone.utc).isoformat()
        )
        self.store.teams[created.team_id] = created
        self.store.next_team_id += 1
        return created

    async def update(self, team_id: int, team: Team) -> Team:
        await self._call('update', team_id, team)
        current = self._get(team_id)
        if not team.name.strip():
            raise RemoteValidationFailure(self.service, "Team name is required", 422)

        # Identity, creation time and assignment are not updatable here
        updated = dataclasses.replace(
            team,
            team_id=current.team_id,
            organisation_id=current.organisation_id,
            created_at=current.created_at,
            project_id=current.project_id
        )
        self.store.teams[team_id] = updated
        return updated

    async def delete(self, team_id: int) -> None:
        await self._call('delete', team_id)
        self._get(team_id)
        del self.store.teams[team_id]

    async def assign_to_project(self, team_id: int, project_id: int) -> None:
        await self._call('assign_to_project', team_id, project_id)
        team = self._get(team_id)
        if project_id not in self.store.projects:
            raise NotFoundFailure(self.service, f"Project {project_id} not found", 404)
        self.store.teams[team_id] = dataclasses.replace(team, project_id=project_id)

    async def remove_from_project(self, team_id: int) -> None:
        await self._call('remove_from_project', team_id)
        team = self._get(team_id)
        self.store.teams[team_id] = dataclasses.replace(team, project_id=None)


class StubProjectService(StubService):
    """Stub implementation of the Project Service API"""

    service = "project-service"

    def _get(self, project_id: int) -> Project:
        project = self.store.projects.get(project_id)
        if project is None:
            raise NotFoundFailure(self.service, f"Project {project_id} not found", 404)
        return project

    async def list(self, organisation_id: Optional[int] = None) -> List[Project]:
        await self._call('list', organisation_id)
        return [p for _, p in sorted(self.store.projects.items())
                if organisation_id is None or p.organisation_id == organisation_id]

    async def get_by_id(self, project_id: int) -> Project:
        await self._call('get_by_id', project_id)
        return self._get(project_id)

    async def create(self, project: Project) -> Project:
        await self._call('create', project)
        created = dataclasses.replace(project, project_id=self.store.next_project_id)
        self.store.projects[created.project_id] = created
        self.store.next_project_id += 1
        return created

    async def update(self, project_id: int, project: Project) -> Project:
        await self._call('update', project_id, project)
        self._get(project_id)
        updated = dataclasses.replace(project, project_id=project_id)
        self.store.projects[project_id] = updated
        return updated

    async def delete(self, project_id: int) -> None:
        await self._call('delete', project_id)
        self._get(project_id)
        del self.store.projects[project_id]


class StubOrganisationService(StubService):
    """Stub implementation of the Organisation Service API"""

    service = "organisation-service"

    async def list(self) -> List[Organisation]:
        await self._call('list')
        return [o for _, o in sorted(self.store.organisations.items())]

    async def get_by_id(self, organisation_id: int) -> Organisation:
        await self._call('get_by_id', organisation_id)
        org = self.store.organisations.get(organisation_id)
        if org is None:
            raise NotFoundFailure(self.service, f"Organisation {organisation_id} not found", 404)
        return org


class StubMemberService(StubService):
    """Stub implementation of the Member Service API"""

    service = "member-service"

    async def list(self, organisation_id: int) -> List[Member]:
        await self._call('list', organisation_id)
        return [m for _, (org_id, m) in sorted(self.store.members.items())
                if org_id == organisation_id]

    async def get_by_id(self, member_id: int) -> Member:
        await self._call('get_by_id', member_id)
        if member_id not in self.store.members:
            raise NotFoundFailure(self.service, f"Member {member_id} not found", 404)
        return self.store.members[member_id][1]


def get_stub_gateway(store: Optional[StubStore] = None, latency: float = 0.0) -> EntityGateway:
    """Factory for a gateway backed entirely by stub services"""
    store = store if store is not None else StubStore()
    return EntityGateway(
        teams=StubTeamService(store, latency),
        projects=StubProjectService(store, latency),
        organisations=StubOrganisationService(store, latency),
        members=StubMemberService(store, latency),
    )
