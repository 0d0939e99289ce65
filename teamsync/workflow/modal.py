"""Team form modal: one lifecycle for create and edit"""
import dataclasses
import logging
import uuid
from dataclasses import dataclass
from typing import List, Optional, Union

from ..models.events import Outcome, FormMode
from ..models.team import Team, Project, TeamFormData
from .orchestrator import TeamMutationOrchestrator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Closed:
    pass


@dataclass(frozen=True)
class Open:
    """An open modal always has a buffer; edit sessions also know their team"""
    mode: FormMode
    buffer: TeamFormData
    existing: Optional[Team] = None


ModalState = Union[Closed, Open]

CLOSED = Closed()


class TeamModalController:
    """Holds the edit buffer between opening the modal and resolving it"""

    def __init__(self, orchestrator: TeamMutationOrchestrator, organisation_id: int):
        self.orchestrator = orchestrator
        self.organisation_id = organisation_id
        self.instance_id = uuid.uuid4().hex
        self.state: ModalState = CLOSED

    @property
    def is_open(self) -> bool:
        return isinstance(self.state, Open)

    @property
    def is_submitting(self) -> bool:
        return self.orchestrator.is_submitting(self.instance_id)

    @property
    def buffer(self) -> Optional[TeamFormData]:
        return self.state.buffer if isinstance(self.state, Open) else None

    def open_create(self) -> None:
        self.state = Open(FormMode.CREATE, TeamFormData())

    def open_edit(self, team: Team) -> None:
        """Open the modal seeded with a team's persisted fields"""
        if team.team_id is None:
            raise ValueError("Only persisted teams can be edited")
        self.state = Open(FormMode.EDIT, TeamFormData.from_team(team), team)

    def edit_buffer(self, **changes) -> TeamFormData:
        """Replace buffer fields (name, description, project_id, team_manager_id)"""
        if not isinstance(self.state, Open):
            raise RuntimeError("Cannot edit a closed modal")
        self.state = dataclasses.replace(
            self.state, buffer=dataclasses.replace(self.state.buffer, **changes)
        )
        return self.state.buffer

    def close(self) -> None:
        """Close and discard the buffer; an in-flight save keeps running"""
        self.state = CLOSED

    cancel = close

    async def load_project_options(self) -> List[Project]:
        """Projects for the selector; only fetched while the modal is open"""
        if not self.is_open:
            return []
        return await self.orchestrator.gateway.projects.list(self.organisation_id)

    async def submit(self) -> Outcome:
        """Hand the current buffer to the orchestrator"""
        session = self.state
        if not isinstance(session, Open):
            return Outcome.ignored()

        outcome = await self.orchestrator.submit_team(
            session.buffer,
            session.mode,
            self.organisation_id,
            existing=session.existing,
            submission_key=self.instance_id
        )

        if self.state is not session:
            # Closed or reopened while the save was in flight
            logger.debug(f"Modal {self.instance_id} moved on; dropping UI update for {outcome.status.value}")
            return outcome

        if outcome.is_success:
            self.state = CLOSED
        elif outcome.is_partial and session.mode == FormMode.CREATE and outcome.team is not None:
            # The team exists now; a retry must update it rather than create another
            self.state = Open(FormMode.EDIT, session.buffer, outcome.team)
        return outcome
