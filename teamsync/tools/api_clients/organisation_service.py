"""Organisation Service API client"""
from typing import List

from .base import BaseAPIClient, many
from ...models.team import Organisation


class OrganisationServiceClient(BaseAPIClient):
    """Client for the organisation endpoints (read-only)"""

    service = "organisation-service"

    async def list(self) -> List[Organisation]:
        organisations = await self._request('GET', '/organisations',
                                            decode=many(Organisation.from_dict))
        return organisations or []

    async def get_by_id(self, organisation_id: int) -> Organisation:
        organisation = await self._request('GET', f'/organisations/{organisation_id}',
                                           decode=Organisation.from_dict)
        if organisation is None:
            raise self._empty_body(f'GET /organisations/{organisation_id}')
        return organisation
