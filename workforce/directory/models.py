"""Data models for the directory collaborator."""

from datetime import date
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel


class Employee(BaseModel):
    """An employee as returned by directory search."""
    id: str
    first_name: str
    last_name: str
    role: str = ""
    location: str = ""
    team_id: Optional[str] = None
    employee_id: Optional[str] = None  # stable HR identifier, when the directory has one

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Client(BaseModel):
    """A client as returned by directory search."""
    id: str
    name: str
    cn_number: str
    industry: str = ""


class DirectoryTeamMember(BaseModel):
    """A member of a team in the team directory."""
    id: str
    first_name: str
    last_name: str
    title: str = ""
    location: str = ""
    employee_id: Optional[str] = None
    expertise: List[str] = []
    is_manual_add: bool = False


class DirectoryTeam(BaseModel):
    """A team and its members."""
    id: str
    team_name: str
    members: List[DirectoryTeamMember] = []


class WorkItemStatus(str, Enum):
    """Status of a work item as stored."""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class DerivedStatus(str, Enum):
    """Schedule status shown on a work item."""
    ON_TRACK = "On Track"
    AT_RISK = "At Risk"
    OVERDUE = "Overdue"
    COMPLETED = "Completed"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Attachment(BaseModel):
    name: str
    size: int = 0
    content_type: Optional[str] = None


class WorkItem(BaseModel):
    """A work item in the queue."""
    id: str
    work_type: str  # "Onboarding", "Leaver", "New Joiner", "Offboarding"
    client_name: str = ""
    cn_number: Optional[str] = None
    due_date: date
    assignee: str = ""
    priority: Priority = Priority.MEDIUM
    status: WorkItemStatus = WorkItemStatus.PENDING
    description: Optional[str] = None
    attachments: List[Attachment] = []
    cancellation_reason: Optional[str] = None
