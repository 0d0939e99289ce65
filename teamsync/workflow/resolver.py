"""Decide which remote call moves a team to its desired project"""
from typing import Optional

from ..models.events import AssignmentAction, ActionType, NO_OP, UNASSIGN


def resolve_assignment_action(previous: Optional[int], desired: Optional[int]) -> AssignmentAction:
    """Map the persisted and desired project of a team to a remote action.

    ==========  ==========  ============
    previous    desired     action
    ==========  ==========  ============
    None        None        NoOp
    None        P           Assign(P)
    P           None        Unassign
    P           P           NoOp
    P           Q           Reassign(Q)
    ==========  ==========  ============

    A team has a single project slot, so Reassign is carried out with the
    same remote call as Assign.
    """
    if previous == desired:
        return NO_OP
    if desired is None:
        return UNASSIGN
    if previous is None:
        return AssignmentAction(ActionType.ASSIGN, desired)
    return AssignmentAction(ActionType.REASSIGN, desired)
