"""Team, project and organisation data models"""
from dataclasses import dataclass
from typing import Optional, Dict, Any, Tuple


def _optional_id(value: Any) -> Optional[int]:
    """Decode an optional remote id; empty and zero ids mean "unset"."""
    if value in (None, '', 0):
        return None
    return int(value)


@dataclass(frozen=True)
class Team:
    """Represents a persisted (or not yet persisted) team"""
    name: str
    organisation_id: int
    team_id: Optional[int] = None
    project_id: Optional[int] = None
    description: Optional[str] = None
    team_manager_id: Optional[int] = None
    members: Tuple[int, ...] = ()
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Team':
        """Build a team from its API representation"""
        members = data.get('members') or ()
        return cls(
            name=data.get('name', ''),
            organisation_id=int(data['organisationId']),
            team_id=_optional_id(data.get('teamId', data.get('id'))),
            project_id=_optional_id(data.get('projectId')),
            description=data.get('description') or None,
            team_manager_id=_optional_id(data.get('teamManagerId')),
            members=tuple(
                int(m['userId'] if isinstance(m, dict) else m) for m in members
            ),
            created_at=data.get('createdAt'),
        )

    def to_dict(self, include_project: bool = True) -> Dict[str, Any]:
        """Convert to the API representation, omitting unset fields"""
        payload = {
            'teamId': self.team_id,
            'name': self.name,
            'organisationId': self.organisation_id,
            'description': self.description,
            'teamManagerId': self.team_manager_id,
            'members': list(self.members),
            'createdAt': self.created_at,
        }
        if include_project:
            payload['projectId'] = self.project_id
        return {key: value for key, value in payload.items() if value is not None}

    @property
    def member_count(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class Project:
    """A project teams can be assigned to"""
    project_id: int
    name: str
    organisation_id: Optional[int] = None
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Project':
        # Some endpoints only return the generic id key
        project_id = data.get('projectId') or data.get('id')
        return cls(
            project_id=int(project_id),
            name=data.get('name', ''),
            organisation_id=_optional_id(data.get('organisationId')),
            description=data.get('description') or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'projectId': self.project_id,
            'name': self.name,
            'organisationId': self.organisation_id,
            'description': self.description,
        }


@dataclass(frozen=True)
class Organisation:
    """Organisation scoping teams, projects and members"""
    organisation_id: int
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Organisation':
        return cls(
            organisation_id=int(data.get('organisationId') or data.get('id')),
            name=data.get('name', ''),
        )


@dataclass(frozen=True)
class Member:
    """An organisation member (user)"""
    member_id: int
    username: str
    role: str
    email: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Member':
        return cls(
            member_id=int(data.get('userId') or data.get('id')),
            username=data.get('username', ''),
            role=data.get('role', ''),
            email=data.get('email'),
        )

    @property
    def is_admin(self) -> bool:
        return self.role == 'Admin'


@dataclass(frozen=True)
class TeamFormData:
    """Editable team fields held by an open modal.

    Identity fields (team id, creation time, members) are not part of the
    buffer, so an edit form can never change them.
    """
    name: str = ''
    description: str = ''
    project_id: Optional[int] = None
    team_manager_id: Optional[int] = None

    @classmethod
    def from_team(cls, team: Team) -> 'TeamFormData':
        """Seed a buffer from a team's persisted fields"""
        return cls(
            name=team.name,
            description=team.description or '',
            project_id=team.project_id,
            team_manager_id=team.team_manager_id,
        )

    @property
    def is_blank_name(self) -> bool:
        return not self.name.strip()
