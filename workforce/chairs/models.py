"""Data models for team, role and chair structure."""

from enum import Enum
from typing import Optional, List
from pydantic import BaseModel


class ChairType(str, Enum):
    """Kind of seat within a role."""
    PRIMARY = "Primary"
    SECONDARY = "Secondary"


class TeamBase(str, Enum):
    """How a team's membership is sourced."""
    WORKDAY = "Workday"
    MANUAL_SELECT = "Manual Select"


class ChairConfig(BaseModel):
    """A chair slot offered by the role editor."""
    id: int  # 1-based position
    label: str
    required: bool


class Chair(BaseModel):
    """A named seat within a role."""
    chair_type: ChairType
    order: int
    name: str = ""


class TeamRoleDefinition(BaseModel):
    """Role definition from team setup."""
    id: str
    role_name: str
    chairs: List[Chair] = []
    max_chairs: Optional[int] = None  # overrides len(chairs) when set


class TeamWithRoles(BaseModel):
    """A team and the roles it can staff."""
    id: str
    name: str
    team_base: TeamBase = TeamBase.WORKDAY
    qualifiers: List[str] = []
    roles: List[TeamRoleDefinition] = []
    primary_manager: str = ""
    delegate_manager: Optional[str] = None
    oversite_manager: str = ""

    def get_role(self, role_id: str) -> Optional[TeamRoleDefinition]:
        for role in self.roles:
            if role.id == role_id:
                return role
        return None


class ChairStructureIssue(BaseModel):
    """A problem with a role's chair structure."""
    team_id: Optional[str] = None
    role_id: str
    message: str
