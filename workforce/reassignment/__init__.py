"""Leaver reassignment workflow, team membership guard and work item cancellation."""

from workforce.reassignment.workflow import propose_reassignment, complete_reassignment
from workforce.reassignment.membership import is_member_in_any_team, add_member_to_team
from workforce.reassignment.cancellation import validate_cancellation_reason, cancel_work_item
from workforce.reassignment.progress import summarize_leaver_progress
from workforce.reassignment.models import (
    LeaverClient,
    LeaverEmployee,
    LeaverReassignment,
    ReassignmentOutcome,
    ReassignmentStatus,
)

__all__ = [
    "propose_reassignment",
    "complete_reassignment",
    "is_member_in_any_team",
    "add_member_to_team",
    "validate_cancellation_reason",
    "cancel_work_item",
    "summarize_leaver_progress",
    "LeaverClient",
    "LeaverEmployee",
    "LeaverReassignment",
    "ReassignmentOutcome",
    "ReassignmentStatus",
]
