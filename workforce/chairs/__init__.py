"""Chair and role configuration for team setup."""

from workforce.chairs.labels import (
    generate_chair_configs,
    is_chair_required,
    get_chair_label,
    configured_chair_count,
    validate_role_chairs,
    validate_team_structure,
    MAX_CHAIRS,
)
from workforce.chairs.models import ChairConfig, ChairType, Chair, TeamRoleDefinition, TeamWithRoles

__all__ = [
    "generate_chair_configs",
    "is_chair_required",
    "get_chair_label",
    "configured_chair_count",
    "validate_role_chairs",
    "validate_team_structure",
    "MAX_CHAIRS",
    "ChairConfig",
    "ChairType",
    "Chair",
    "TeamRoleDefinition",
    "TeamWithRoles",
]
