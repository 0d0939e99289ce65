"""Tests for team data models and outcomes."""
from teamsync.models.events import Outcome, OutcomeStatus, SaveStep
from teamsync.models.team import Team, Project, TeamFormData


class TestTeam:
    def test_from_dict_treats_empty_ids_as_unset(self):
        team = Team.from_dict({"teamId": 5, "name": "Payments", "organisationId": "1",
                               "projectId": 0, "teamManagerId": "", "description": ""})

        assert team.organisation_id == 1
        assert team.project_id is None
        assert team.team_manager_id is None
        assert team.description is None

    def test_from_dict_accepts_member_objects(self):
        team = Team.from_dict({"id": 5, "name": "P", "organisationId": 1,
                               "members": [{"userId": 101, "username": "jdoe"}, 102]})

        assert team.team_id == 5
        assert team.members == (101, 102)
        assert team.member_count == 2

    def test_to_dict_omits_unset_fields(self):
        team = Team(name="Backend", organisation_id=1, project_id=7)

        assert team.to_dict() == {"name": "Backend", "organisationId": 1, "members": [], "projectId": 7}
        assert "projectId" not in team.to_dict(include_project=False)


def test_project_prefers_typed_id():
    assert Project.from_dict({"projectId": 3, "id": 99, "name": "Billing"}).project_id == 3
    assert Project.from_dict({"id": 9, "name": "Mobile"}).project_id == 9


class TestFormData:
    def test_from_team_copies_editable_fields(self):
        team = Team(name="Payments", organisation_id=1, team_id=5, project_id=3,
                    description=None, team_manager_id=101, members=(1, 2))

        assert TeamFormData.from_team(team) == TeamFormData(
            name="Payments", description="", project_id=3, team_manager_id=101)

    def test_blank_name(self):
        assert TeamFormData(name=" \t").is_blank_name
        assert not TeamFormData(name=" a ").is_blank_name


class TestOutcome:
    def test_partial_failure(self):
        outcome = Outcome.remote_failure(SaveStep.ASSIGNMENT, "Team created, but project assignment failed")
        assert outcome.is_partial
        assert outcome.remote_changed
        assert not outcome.is_success

    def test_core_save_failure_changed_nothing(self):
        outcome = Outcome.remote_failure(SaveStep.CORE_SAVE, "Failed to save team")
        assert not outcome.is_partial
        assert not outcome.remote_changed

    def test_ignored_and_validation_change_nothing(self):
        assert Outcome.ignored().status == OutcomeStatus.IGNORED
        assert not Outcome.ignored().remote_changed
        assert not Outcome.validation_failure("Team name is required").remote_changed
