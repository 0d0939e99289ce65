"""Derived read models for the organisation dashboard"""
import asyncio
import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from ..models.team import Team, Member, Organisation
from ..utils.exceptions import NotFoundFailure

logger = logging.getLogger(__name__)

NO_PROJECT = 'No Project'


class TeamViewCache:
    """Team lists and project-name lookups keyed by organisation.

    The team list of an organisation is refetched on the first read after
    ``invalidate``. The project-name lookup is rebuilt whenever the set of
    project ids referenced by that list changes, and only then.
    """

    def __init__(self, gateway):
        self.gateway = gateway
        self._teams: Dict[int, List[Team]] = {}
        self._stale: Set[int] = set()
        self._project_keys: Dict[int, FrozenSet[int]] = {}
        self._project_names: Dict[int, Dict[int, str]] = {}
        self._members: Dict[int, List[Member]] = {}
        self._organisations: Dict[int, Organisation] = {}
        self._locks: Dict[int, Tuple[asyncio.AbstractEventLoop, asyncio.Lock]] = {}

    def invalidate(self, organisation_id: int) -> None:
        """Mark the team list stale; safe to call any number of times"""
        logger.debug(f"Invalidating team list for organisation {organisation_id}")
        self._stale.add(organisation_id)

    def is_stale(self, organisation_id: int) -> bool:
        return organisation_id not in self._teams or organisation_id in self._stale

    async def get_teams(self, organisation_id: int) -> List[Team]:
        """Teams of an organisation in remote order, never stale"""
        async with self._lock(organisation_id):
            while self.is_stale(organisation_id):
                # An invalidation that lands during the fetch re-marks the
                # list stale and forces another round
                self._stale.discard(organisation_id)
                teams = await self.gateway.teams.list(organisation_id)
                self._teams[organisation_id] = list(teams)
                logger.debug(f"Loaded {len(teams)} teams for organisation {organisation_id}")

            await self._sync_project_names(organisation_id, self._teams[organisation_id])
            return list(self._teams[organisation_id])

    def _lock(self, organisation_id: int) -> asyncio.Lock:
        # Locks are bound to the loop that first waits on them
        loop = asyncio.get_running_loop()
        bound = self._locks.get(organisation_id)
        if bound is None or bound[0] is not loop:
            bound = (loop, asyncio.Lock())
            self._locks[organisation_id] = bound
        return bound[1]

    def get_project_name(self, project_id: Optional[int]) -> str:
        """Name of a project referenced by a cached team list"""
        if project_id is None:
            return NO_PROJECT
        for names in self._project_names.values():
            if project_id in names:
                return names[project_id]
        return NO_PROJECT

    def get_member_count(self, team_id: int) -> int:
        for teams in self._teams.values():
            for team in teams:
                if team.team_id == team_id:
                    return team.member_count
        return 0

    async def get_members(self, organisation_id: int) -> List[Member]:
        """Organisation members that can be managers or team members (no admins)"""
        if organisation_id not in self._members:
            members = await self.gateway.members.list(organisation_id)
            self._members[organisation_id] = [m for m in members if not m.is_admin]
        return list(self._members[organisation_id])

    async def get_organisation(self, organisation_id: int) -> Organisation:
        if organisation_id not in self._organisations:
            self._organisations[organisation_id] = await self.gateway.organisations.get_by_id(organisation_id)
        return self._organisations[organisation_id]

    async def _sync_project_names(self, organisation_id: int, teams: Iterable[Team]) -> None:
        keys = frozenset(t.project_id for t in teams if t.project_id is not None)
        if self._project_keys.get(organisation_id) == keys:
            return

        logger.debug(f"Recomputing project names for organisation {organisation_id}: {sorted(keys)}")
        names = await self._fetch_project_names(keys)
        self._project_names[organisation_id] = names
        self._project_keys[organisation_id] = keys

    async def _fetch_project_names(self, project_ids: FrozenSet[int]) -> Dict[int, str]:
        ordered = sorted(project_ids)
        results = await asyncio.gather(
            *(self.gateway.projects.get_by_id(pid) for pid in ordered),
            return_exceptions=True
        )

        names = {}
        for project_id, result in zip(ordered, results):
            if isinstance(result, NotFoundFailure):
                logger.warning(f"Project {project_id} referenced by a team no longer exists")
                continue
            if isinstance(result, BaseException):
                raise result
            names[result.project_id] = result.name
        return names
