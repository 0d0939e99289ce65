"""Outcome and action models for team mutations"""
from dataclasses import dataclass
from typing import Optional
from enum import Enum

from .team import Team


class OutcomeStatus(str, Enum):
    """Outcome status enum"""
    SUCCESS = "success"
    VALIDATION_FAILURE = "validation_failure"
    REMOTE_FAILURE = "remote_failure"
    IGNORED = "ignored"


class SaveStep(str, Enum):
    """Step of the save workflow a remote failure happened in"""
    CORE_SAVE = "core_save"
    ASSIGNMENT = "assignment"


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class ActionType(str, Enum):
    NO_OP = "no_op"
    ASSIGN = "assign"
    REASSIGN = "reassign"
    UNASSIGN = "unassign"


@dataclass(frozen=True)
class AssignmentAction:
    """Remote action needed to move a team to its desired project"""
    type: ActionType
    project_id: Optional[int] = None

    @property
    def requires_call(self) -> bool:
        return self.type != ActionType.NO_OP


NO_OP = AssignmentAction(ActionType.NO_OP)
UNASSIGN = AssignmentAction(ActionType.UNASSIGN)


@dataclass(frozen=True)
class Outcome:
    """Result of a single submit or delete attempt"""
    status: OutcomeStatus
    message: str = ""
    step: Optional[SaveStep] = None
    team: Optional[Team] = None
    not_found: bool = False
    # The request reached the store but its reply could not be read
    unconfirmed: bool = False

    @classmethod
    def success(cls, message: str, team: Optional[Team] = None) -> 'Outcome':
        return cls(OutcomeStatus.SUCCESS, message, team=team)

    @classmethod
    def validation_failure(cls, message: str) -> 'Outcome':
        return cls(OutcomeStatus.VALIDATION_FAILURE, message)

    @classmethod
    def remote_failure(cls, step: SaveStep, message: str,
                       team: Optional[Team] = None, not_found: bool = False,
                       unconfirmed: bool = False) -> 'Outcome':
        return cls(OutcomeStatus.REMOTE_FAILURE, message, step=step,
                   team=team, not_found=not_found, unconfirmed=unconfirmed)

    @classmethod
    def ignored(cls) -> 'Outcome':
        return cls(OutcomeStatus.IGNORED, "Submission already in progress")

    @property
    def is_success(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS

    @property
    def is_partial(self) -> bool:
        """Core fields were saved but the project assignment was not"""
        return self.status == OutcomeStatus.REMOTE_FAILURE and self.step == SaveStep.ASSIGNMENT

    @property
    def remote_changed(self) -> bool:
        """Whether the remote store was, or may have been, modified by this attempt"""
        return self.is_success or self.is_partial or self.unconfirmed
