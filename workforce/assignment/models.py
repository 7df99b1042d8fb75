"""Data models for work item team assignment."""

from enum import Enum
from typing import Optional, List
from pydantic import BaseModel


class ValidationErrorType(str, Enum):
    """Tags for team assignment validation errors."""
    PRIMARY_TEAM_MISSING = "primary_team_missing"
    NO_ROLES_SELECTED = "no_roles_selected"
    MISSING_CHAIR_REQUIREMENT = "missing_chair_requirement"  # team cannot supply the requested chairs
    DUPLICATE_TEAM = "duplicate_team"
    MANAGER_NOT_SELECTED = "manager_not_selected"


class RoleChairConfig(BaseModel):
    """A role selected on a work item and how many chairs it needs."""
    role_id: str
    role_name: str = ""
    chair_requirement: int = 1


class WorkItemTeamConfig(BaseModel):
    """One team entry on a work item."""
    team_id: str
    team_name: str = ""
    is_primary: bool = False
    roles: List[RoleChairConfig] = []


class TeamAssignmentFormState(BaseModel):
    """Team assignment as entered on the work item form."""
    assigned_to_manager_id: str = ""
    primary_team: Optional[WorkItemTeamConfig] = None
    additional_teams: List[WorkItemTeamConfig] = []

    def all_teams(self) -> List[WorkItemTeamConfig]:
        teams = [self.primary_team] if self.primary_team is not None else []
        return teams + list(self.additional_teams)


class TeamAssignmentValidationError(BaseModel):
    """A single validation failure."""
    type: ValidationErrorType
    team_id: Optional[str] = None
    role_id: Optional[str] = None
    message: str


class TeamAssignmentValidation(BaseModel):
    """Outcome of validating a team assignment."""
    is_valid: bool
    errors: List[TeamAssignmentValidationError] = []
