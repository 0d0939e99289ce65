"""Tests for the assignment resolver decision table."""
import itertools

import pytest

from teamsync.models.events import ActionType, AssignmentAction
from teamsync.workflow.resolver import resolve_assignment_action


@pytest.mark.parametrize("previous, desired, expected", [
    (None, None, AssignmentAction(ActionType.NO_OP)),
    (None, 7, AssignmentAction(ActionType.ASSIGN, 7)),
    (3, None, AssignmentAction(ActionType.UNASSIGN)),
    (3, 3, AssignmentAction(ActionType.NO_OP)),
    (3, 7, AssignmentAction(ActionType.REASSIGN, 7)),
])
def test_decision_table(previous, desired, expected):
    assert resolve_assignment_action(previous, desired) == expected


def test_no_op_iff_previous_equals_desired():
    values = [None, 1, 2, 3]
    for previous, desired in itertools.product(values, values):
        action = resolve_assignment_action(previous, desired)
        assert (action.type == ActionType.NO_OP) == (previous == desired)
        assert action.requires_call == (previous != desired)


def test_assign_and_reassign_target_the_desired_project():
    assert resolve_assignment_action(None, 9).project_id == 9
    assert resolve_assignment_action(4, 9).project_id == 9


def test_unassign_carries_no_project():
    assert resolve_assignment_action(4, None).project_id is None
