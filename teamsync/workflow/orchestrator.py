"""Team mutation orchestrator: save core fields, then sync the project assignment"""
import dataclasses
import logging
import time
from datetime import datetime, timezone
from typing import Hashable, Optional, Set

from ..cache.view_cache import TeamViewCache
from ..models.events import Outcome, OutcomeStatus, SaveStep, FormMode, ActionType, AssignmentAction
from ..models.team import Team, TeamFormData
from ..utils.exceptions import (
    RemoteFailure, NotFoundFailure, MalformedResponseFailure, ValidationException
)
from ..utils.metrics import metrics as default_metrics
from ..utils.notifier import Notifier
from .resolver import resolve_assignment_action

logger = logging.getLogger(__name__)


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TeamMutationOrchestrator:
    """Runs team saves and deletes as single logical operations.

    A save is two sequential remote calls: the core fields first, then the
    project assignment chosen by ``resolve_assignment_action``. The two are
    not atomic. When the first succeeds and the second fails the team is
    saved without its new project and the outcome says so
    (``step=SaveStep.ASSIGNMENT``); nothing is rolled back or retried.

    Every attempt ends in exactly one ``Outcome`` and at most one
    notification. Remote failures never escape as exceptions.
    """

    def __init__(self, gateway, cache: TeamViewCache, notifier: Notifier,
                 metrics=None, clock=utc_now):
        self.gateway = gateway
        self.cache = cache
        self.notifier = notifier
        self.metrics = metrics or default_metrics
        self.clock = clock
        self._in_flight: Set[Hashable] = set()

    def is_submitting(self, submission_key: Hashable) -> bool:
        return submission_key in self._in_flight

    async def submit_team(self, buffer: TeamFormData, mode: FormMode, organisation_id: int,
                          existing: Optional[Team] = None,
                          submission_key: Optional[Hashable] = None) -> Outcome:
        """Create or update a team from a form buffer.

        Args:
            buffer: The form values at submit time
            mode: ``FormMode.CREATE`` or ``FormMode.EDIT``
            organisation_id: Organisation the team belongs to
            existing: The persisted team being edited (edit mode only)
            submission_key: Identifies the modal instance; a second submit
                with the same key while one is in flight is ignored

        Returns:
            The outcome of the attempt
        """
        if mode == FormMode.EDIT and (existing is None or existing.team_id is None):
            raise ValueError("Edit mode requires an existing persisted team")

        if submission_key is not None and submission_key in self._in_flight:
            logger.info(f"Ignoring duplicate submission for {submission_key}")
            return Outcome.ignored()

        try:
            self._validate(buffer)
        except ValidationException as e:
            return self._finish('submit_team', organisation_id, Outcome.validation_failure(str(e)))

        if submission_key is not None:
            self._in_flight.add(submission_key)
        started = time.monotonic()
        try:
            if mode == FormMode.CREATE:
                outcome = await self._create(buffer, organisation_id)
            else:
                outcome = await self._update(buffer, existing)
        finally:
            self._in_flight.discard(submission_key)
            self.metrics.record('submit_team_duration', time.monotonic() - started)

        return self._finish('submit_team', organisation_id, outcome)

    async def delete_team(self, team_id: int, organisation_id: int) -> Outcome:
        """Delete a team and drop it from the cached views"""
        try:
            await self.gateway.teams.delete(team_id)
        except RemoteFailure as e:
            logger.error(f"Deleting team {team_id} failed: {e}")
            outcome = self._core_save_failure(e, "Failed to delete team")
        else:
            logger.info(f"Team {team_id} deleted")
            outcome = Outcome.success("Team deleted successfully")

        return self._finish('delete_team', organisation_id, outcome)

    @staticmethod
    def _validate(buffer: TeamFormData) -> None:
        if buffer.is_blank_name:
            raise ValidationException("Team name is required")

    @staticmethod
    def _core_save_failure(error: RemoteFailure, message: str) -> Outcome:
        if isinstance(error, MalformedResponseFailure):
            # The store accepted the request, so its state is unknown
            return Outcome.remote_failure(SaveStep.CORE_SAVE, f"{message}: invalid response from server",
                                          unconfirmed=True)
        return Outcome.remote_failure(SaveStep.CORE_SAVE, message,
                                      not_found=isinstance(error, NotFoundFailure))

    async def _create(self, buffer: TeamFormData, organisation_id: int) -> Outcome:
        draft = Team(
            name=buffer.name.strip(),
            organisation_id=organisation_id,
            description=buffer.description or None,
            team_manager_id=buffer.team_manager_id,
            created_at=self.clock()
        )
        try:
            team = await self.gateway.teams.create(draft)
        except RemoteFailure as e:
            logger.error(f"Creating team '{draft.name}' failed: {e}")
            return self._core_save_failure(e, "Failed to save team")

        logger.info(f"Team {team.team_id} created in organisation {organisation_id}")
        action = resolve_assignment_action(None, buffer.project_id)
        return await self._apply_assignment(team, action, "Team added successfully",
                                            "Team created, but project assignment failed")

    async def _update(self, buffer: TeamFormData, existing: Team) -> Outcome:
        # Identity, membership and creation time always come from the persisted team
        draft = dataclasses.replace(
            existing,
            name=buffer.name.strip(),
            description=buffer.description or None,
            team_manager_id=buffer.team_manager_id
        )
        try:
            team = await self.gateway.teams.update(existing.team_id, draft)
        except RemoteFailure as e:
            logger.error(f"Updating team {existing.team_id} failed: {e}")
            return self._core_save_failure(e, "Failed to save team")

        logger.info(f"Team {existing.team_id} updated")
        action = resolve_assignment_action(existing.project_id, buffer.project_id)
        return await self._apply_assignment(team, action, "Team updated successfully",
                                            "Team updated, but project assignment failed")

    async def _apply_assignment(self, team: Team, action: AssignmentAction,
                                success_message: str, partial_message: str) -> Outcome:
        if not action.requires_call:
            return Outcome.success(success_message, team)

        if team.team_id is None:
            logger.error("Remote store returned a team without an id; cannot assign project")
            return Outcome.remote_failure(SaveStep.ASSIGNMENT, partial_message, team=team)

        try:
            if action.type == ActionType.UNASSIGN:
                await self.gateway.teams.remove_from_project(team.team_id)
            else:
                await self.gateway.teams.assign_to_project(team.team_id, action.project_id)
        except RemoteFailure as e:
            logger.error(f"{action.type.value} for team {team.team_id} failed: {e}")
            return Outcome.remote_failure(SaveStep.ASSIGNMENT, partial_message, team=team,
                                          not_found=isinstance(e, NotFoundFailure))

        logger.info(f"Team {team.team_id} {action.type.value} -> project {action.project_id}")
        return Outcome.success(success_message, dataclasses.replace(team, project_id=action.project_id))

    def _finish(self, operation: str, organisation_id: int, outcome: Outcome) -> Outcome:
        """Invalidate views, count and notify once per outcome"""
        if outcome.remote_changed:
            self.cache.invalidate(organisation_id)

        self.metrics.record_outcome(operation, outcome)

        if outcome.status == OutcomeStatus.SUCCESS:
            self.notifier.success(outcome.message)
        elif outcome.status != OutcomeStatus.IGNORED:
            self.notifier.error(outcome.message)
        return outcome
