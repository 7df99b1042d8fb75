"""Data models for leaver reassignment."""

from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field

from workforce.capacity.models import TeamMember, Assignment, CapacityCalculation
from workforce.directory.models import WorkItem
from workforce.errors import EngineError


class ReassignmentStatus(str, Enum):
    """Lifecycle of a reassignment record."""
    DRAFT = "Draft"  # projection only, ledger untouched
    COMPLETED = "Completed"  # committed, immutable


class LeaverEmployee(BaseModel):
    """An employee leaving a team."""
    id: str
    name: str
    email: str = ""
    location: str = ""
    team_id: str = ""
    team_name: str = ""


class LeaverClient(BaseModel):
    """A client whose capacity requirement has to move off a leaver."""
    id: str
    name: str = ""
    industry: str = ""
    role: str = ""
    current_owner: str
    capacity_requirement: float = Field(gt=0)
    reassigned_to: Optional[str] = None
    reassigned_date: Optional[str] = None


class LeaverReassignment(BaseModel):
    """Proposal (Draft) or audit record (Completed) of a client move."""
    model_config = ConfigDict(frozen=True)

    id: str
    work_item_id: Optional[str] = None
    client_id: str
    client_name: str = ""
    industry: str = ""
    client_role: str = ""
    capacity_requirement: float
    from_employee_id: str
    from_employee_name: str = ""
    to_team_member_id: str
    to_team_member_name: str = ""
    to_team_member_role: str = ""
    to_team_member_location: str = ""
    new_capacity_percent: float
    projection: CapacityCalculation
    reassigned_date: str
    status: ReassignmentStatus = ReassignmentStatus.DRAFT


class ReassignmentOutcome(BaseModel):
    """Result of proposing or completing a reassignment."""
    success: bool
    reassignment: Optional[LeaverReassignment] = None
    client: Optional[LeaverClient] = None
    source: Optional[TeamMember] = None
    target: Optional[TeamMember] = None
    assignment: Optional[Assignment] = None  # new assignment on the target, once completed
    removed_assignment: Optional[Assignment] = None  # source assignment the completion replaced
    error: Optional[EngineError] = None


class MembershipCheck(BaseModel):
    """Whether a person is already active on a team."""
    in_team: bool
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    matched_on: Optional[str] = None  # "employee_id" or "name"


class MembershipResult(BaseModel):
    """Result of adding a member to a team."""
    success: bool
    team_id: Optional[str] = None
    member_id: Optional[str] = None
    error: Optional[EngineError] = None


class CancellationCheck(BaseModel):
    """Result of checking a work item cancellation reason."""
    is_valid: bool
    reason: str
    message: Optional[str] = None


class CancellationOutcome(BaseModel):
    """Result of cancelling a work item."""
    success: bool
    work_item: Optional[WorkItem] = None
    error: Optional[EngineError] = None


class LeaverProgress(BaseModel):
    """How far a leaver's clients have been reassigned."""
    total_clients: int
    total_capacity: float
    assigned_clients: int
    assigned_capacity: float
    draft_client_ids: List[str] = []
    unassigned_client_ids: List[str] = []
    is_complete: bool
