"""Data models for capacity accounting."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, computed_field


MAX_CAPACITY = 100
MIN_WORKLOAD_PERCENTAGE = 1
MAX_WORKLOAD_PERCENTAGE = 40
DEFAULT_WORKLOAD_PERCENTAGE = 20


class CapacityStatus(str, Enum):
    """Classification of a projected utilization."""
    OK = "ok"  # below 85%
    WARNING = "warning"  # 85-100%
    OVER = "over"  # above 100%


class AvailabilityBand(str, Enum):
    """Display band for a member's available capacity."""
    FULLY_AVAILABLE = "fully_available"
    AVAILABLE = "available"
    LIMITED = "limited"
    LOW = "low"
    AT_CAPACITY = "at_capacity"
    OVER_ASSIGNED = "over_assigned"


class TeamMember(BaseModel):
    """A team member and the capacity their assignments consume."""
    id: str
    name: str
    role: str = ""
    location: str = ""
    team_id: str = ""
    current_capacity: float = 0.0  # sum of active assignment workloads
    max_capacity: float = Field(default=MAX_CAPACITY, gt=0)

    @computed_field
    @property
    def available_capacity(self) -> float:
        return max(0.0, self.max_capacity - self.current_capacity)

    @computed_field
    @property
    def utilization_percent(self) -> float:
        return self.current_capacity * 100 / self.max_capacity


class Assignment(BaseModel):
    """Links a team member to a client/work item with a share of their capacity."""
    assignment_id: str
    team_member_id: str
    work_item_id: Optional[str] = None
    client_id: Optional[str] = None
    workload_percentage: float = Field(gt=0)
    assigned_date: str


class CapacityCalculation(BaseModel):
    """Projection of a member's capacity after adding (or freeing) workload."""
    current: float
    additional: float
    projected: float
    max: float
    utilization: float
    status: CapacityStatus


class MemberCapacitySummary(BaseModel):
    """What a member can still take on, as shown in team assignment lists."""
    member_id: str
    member_name: str
    available_capacity: float  # negative when over-assigned
    band: AvailabilityBand
    formatted_capacity: str


class WorkloadValidation(BaseModel):
    """Result of checking a single assignment workload against availability."""
    is_valid: bool
    error_message: Optional[str] = None
    warning_message: Optional[str] = None
    requires_confirmation: bool = False
    projected_available: float
    is_over_capacity: bool
    is_nearing_capacity: bool
