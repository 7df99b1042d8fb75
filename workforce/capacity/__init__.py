"""Capacity ledger - capacity arithmetic and the single commit path for capacity changes."""

from workforce.capacity.ledger import (
    available_capacity,
    project_capacity,
    validate_assignment_workload,
    availability_band,
    format_available_capacity,
    can_accept_assignment,
    member_capacity_summary,
)
from workforce.capacity.models import TeamMember, Assignment, CapacityCalculation, CapacityStatus
from workforce.capacity.service import CapacityLedger

__all__ = [
    "available_capacity",
    "project_capacity",
    "validate_assignment_workload",
    "availability_band",
    "format_available_capacity",
    "can_accept_assignment",
    "member_capacity_summary",
    "TeamMember",
    "Assignment",
    "CapacityCalculation",
    "CapacityStatus",
    "CapacityLedger",
]
