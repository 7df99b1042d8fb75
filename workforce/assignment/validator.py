"""
Team assignment validation.

Decides whether a work item's team assignment can be submitted. All checks
run and every failure is collected so the form can show them together.
"""

from collections import Counter
from typing import Iterable, Dict, List
from workforce.assignment.models import (
    TeamAssignmentFormState,
    TeamAssignmentValidation,
    TeamAssignmentValidationError,
    ValidationErrorType,
    WorkItemTeamConfig,
)
from workforce.chairs.labels import configured_chair_count
from workforce.chairs.models import TeamWithRoles


def _team_label(team: WorkItemTeamConfig) -> str:
    return team.team_name or team.team_id


def validate_team_assignment(
    form_state: TeamAssignmentFormState,
    teams: Iterable[TeamWithRoles]
) -> TeamAssignmentValidation:
    """
    Validate a team assignment against the team directory.

    Checks, in order:
    1. Exactly one team is marked primary
    2. No team appears twice
    3. Every team has at least one role needing a chair
    4. No role asks for more chairs than the team has configured
    5. A manager is selected

    Args:
        form_state: Team assignment entered on the form
        teams: Team definitions from the team directory

    Returns:
        TeamAssignmentValidation with is_valid and the ordered error list
    """
    directory: Dict[str, TeamWithRoles] = {team.id: team for team in teams}
    entries = form_state.all_teams()
    errors: List[TeamAssignmentValidationError] = []

    # Check 1: exactly one primary team
    primary_count = sum(1 for entry in entries if entry.is_primary)
    if primary_count != 1:
        message = (
            "A primary team must be selected"
            if primary_count == 0
            else f"Only one team can be primary ({primary_count} are marked primary)"
        )
        errors.append(TeamAssignmentValidationError(
            type=ValidationErrorType.PRIMARY_TEAM_MISSING,
            message=message
        ))

    # Check 2: duplicate teams, one error per repeat
    seen = Counter()
    for entry in entries:
        seen[entry.team_id] += 1
        if seen[entry.team_id] > 1:
            errors.append(TeamAssignmentValidationError(
                type=ValidationErrorType.DUPLICATE_TEAM,
                team_id=entry.team_id,
                message=f"{_team_label(entry)} has been added more than once"
            ))

    # Check 3: at least one role with a chair requirement
    for entry in entries:
        if not any(role.chair_requirement >= 1 for role in entry.roles):
            errors.append(TeamAssignmentValidationError(
                type=ValidationErrorType.NO_ROLES_SELECTED,
                team_id=entry.team_id,
                message=f"Select at least one role for {_team_label(entry)}"
            ))

    # Check 4: requirement must fit the team's configured chairs
    for entry in entries:
        definition = directory.get(entry.team_id)
        for role in entry.roles:
            if role.chair_requirement < 1:
                continue
            role_definition = definition.get_role(role.role_id) if definition else None
            available = configured_chair_count(role_definition) if role_definition else 0
            if role.chair_requirement > available:
                errors.append(TeamAssignmentValidationError(
                    type=ValidationErrorType.MISSING_CHAIR_REQUIREMENT,
                    team_id=entry.team_id,
                    role_id=role.role_id,
                    message=(
                        f"{_team_label(entry)} cannot supply {role.chair_requirement} "
                        f"chair(s) for {role.role_name or role.role_id} (configured: {available})"
                    )
                ))

    # Check 5: manager selected
    if not form_state.assigned_to_manager_id.strip():
        errors.append(TeamAssignmentValidationError(
            type=ValidationErrorType.MANAGER_NOT_SELECTED,
            message="Select the manager this work item is assigned to"
        ))

    return TeamAssignmentValidation(is_valid=not errors, errors=errors)
