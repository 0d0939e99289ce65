"""Project Service API client"""
from typing import List, Optional

from .base import BaseAPIClient, many
from ...models.team import Project


class ProjectServiceClient(BaseAPIClient):
    """Client for the project endpoints"""

    service = "project-service"

    async def list(self, organisation_id: Optional[int] = None) -> List[Project]:
        """Get all projects, optionally scoped to an organisation"""
        params = {'organisationId': organisation_id} if organisation_id is not None else None
        projects = await self._request('GET', '/projects', decode=many(Project.from_dict),
                                       params=params)
        return projects or []

    async def get_by_id(self, project_id: int) -> Project:
        project = await self._request('GET', f'/projects/{project_id}', decode=Project.from_dict)
        if project is None:
            raise self._empty_body(f'GET /projects/{project_id}')
        return project

    async def create(self, project: Project) -> Project:
        payload = {k: v for k, v in project.to_dict().items() if k != 'projectId' and v is not None}
        created = await self._request('POST', '/projects', decode=Project.from_dict, json=payload)
        if created is None:
            raise self._empty_body('POST /projects')
        return created

    async def update(self, project_id: int, project: Project) -> Project:
        updated = await self._request('PUT', f'/projects/{project_id}', decode=Project.from_dict,
                                      json=project.to_dict())
        return updated if updated is not None else project

    async def delete(self, project_id: int) -> None:
        await self._request('DELETE', f'/projects/{project_id}')
