"""
Chair configuration for role assignments.

A role always carries a Primary Chair; up to nine further chairs are optional.
"""

from typing import List, Optional
from workforce.chairs.models import (
    ChairConfig,
    ChairType,
    ChairStructureIssue,
    TeamRoleDefinition,
    TeamWithRoles,
)


CHAIR_LABELS = (
    "Primary Chair",
    "Secondary Chair",
    "Tertiary Chair",
    "Chair 4",
    "Chair 5",
    "Chair 6",
    "Chair 7",
    "Chair 8",
    "Chair 9",
    "Chair 10",
)

MAX_CHAIRS = 10


def generate_chair_configs() -> List[ChairConfig]:
    """All chair slots a role can have; only the Primary Chair is required."""
    return [
        ChairConfig(id=index + 1, label=label, required=is_chair_required(index))
        for index, label in enumerate(CHAIR_LABELS)
    ]


def is_chair_required(chair_index: int) -> bool:
    return chair_index == 0


def get_chair_label(chair_index: int) -> str:
    if 0 <= chair_index < len(CHAIR_LABELS):
        return CHAIR_LABELS[chair_index]
    return f"Chair {chair_index + 1}"


def configured_chair_count(role: TeamRoleDefinition) -> int:
    """Number of chairs a role can supply to a work item."""
    if role.max_chairs is not None:
        return min(role.max_chairs, MAX_CHAIRS)
    return len(role.chairs)


def validate_role_chairs(role: TeamRoleDefinition, team_id: Optional[str] = None) -> List[ChairStructureIssue]:
    """
    Check a role's chair structure.

    Checks:
    - A Primary chair is present
    - No more than MAX_CHAIRS chairs (or max_chairs)
    - Chair order values are unique
    """
    issues = []

    def _issue(message: str) -> None:
        issues.append(ChairStructureIssue(team_id=team_id, role_id=role.id, message=message))

    if not any(chair.chair_type == ChairType.PRIMARY for chair in role.chairs):
        _issue(f"{role.role_name} is missing its {get_chair_label(0)}")

    primary_count = sum(1 for chair in role.chairs if chair.chair_type == ChairType.PRIMARY)
    if primary_count > 1:
        _issue(f"{role.role_name} has {primary_count} primary chairs; only one is allowed")

    if len(role.chairs) > MAX_CHAIRS:
        _issue(f"{role.role_name} has {len(role.chairs)} chairs; the maximum is {MAX_CHAIRS}")

    if role.max_chairs is not None and not 1 <= role.max_chairs <= MAX_CHAIRS:
        _issue(f"{role.role_name} max chairs must be between 1 and {MAX_CHAIRS}")

    orders = [chair.order for chair in role.chairs]
    if len(orders) != len(set(orders)):
        _issue(f"{role.role_name} has chairs sharing the same order")

    return issues


def validate_team_structure(team: TeamWithRoles) -> List[ChairStructureIssue]:
    """Chair structure issues across every role of a team."""
    issues = []
    for role in team.roles:
        issues.extend(validate_role_chairs(role, team_id=team.id))
    return issues
