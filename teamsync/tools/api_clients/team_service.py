"""Team Service API client"""
from typing import List

from .base import BaseAPIClient, many
from ...models.team import Team


class TeamServiceClient(BaseAPIClient):
    """Client for the team endpoints"""

    service = "team-service"

    async def list(self, organisation_id: int) -> List[Team]:
        """Get all teams of an organisation"""
        teams = await self._request('GET', f'/teams/organisation/{organisation_id}',
                                    decode=many(Team.from_dict))
        return teams or []

    async def get_by_id(self, team_id: int) -> Team:
        team = await self._request('GET', f'/teams/{team_id}', decode=Team.from_dict)
        if team is None:
            raise self._empty_body(f'GET /teams/{team_id}')
        return team

    async def create(self, team: Team) -> Team:
        """Create a team; the returned team carries its new id"""
        created = await self._request('POST', '/teams', decode=Team.from_dict,
                                      json=team.to_dict(include_project=False))
        if created is None:
            raise self._empty_body('POST /teams')
        return created

    async def update(self, team_id: int, team: Team) -> Team:
        """Update a team's core fields; its project assignment is left alone"""
        updated = await self._request('PUT', f'/teams/{team_id}', decode=Team.from_dict,
                                      json=team.to_dict(include_project=False))
        return updated if updated is not None else team

    async def delete(self, team_id: int) -> None:
        await self._request('DELETE', f'/teams/{team_id}')

    async def assign_to_project(self, team_id: int, project_id: int) -> None:
        """Put a team in a project; replaces any previous assignment"""
        await self._request('POST', f'/teams/{team_id}/project/{project_id}')

    async def remove_from_project(self, team_id: int) -> None:
        await self._request('DELETE', f'/teams/{team_id}/project')
