"""Member Service API client"""
from typing import List

from .base import BaseAPIClient, many
from ...models.team import Member


class MemberServiceClient(BaseAPIClient):
    """Client for organisation member (user) endpoints"""

    service = "member-service"

    async def list(self, organisation_id: int) -> List[Member]:
        """Fetch all members of an organisation, admins included"""
        members = await self._request('GET', f'/organisations/{organisation_id}/members',
                                      decode=many(Member.from_dict))
        return members or []

    async def get_by_id(self, member_id: int) -> Member:
        member = await self._request('GET', f'/users/{member_id}', decode=Member.from_dict)
        if member is None:
            raise self._empty_body(f'GET /users/{member_id}')
        return member
