"""Team assignment validation for work item submission."""

from workforce.assignment.validator import validate_team_assignment
from workforce.assignment.models import (
    TeamAssignmentFormState,
    TeamAssignmentValidation,
    TeamAssignmentValidationError,
    ValidationErrorType,
    WorkItemTeamConfig,
    RoleChairConfig,
)

__all__ = [
    "validate_team_assignment",
    "TeamAssignmentFormState",
    "TeamAssignmentValidation",
    "TeamAssignmentValidationError",
    "ValidationErrorType",
    "WorkItemTeamConfig",
    "RoleChairConfig",
]
