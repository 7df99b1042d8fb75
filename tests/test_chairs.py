"""Tests for chair configuration."""

from workforce.chairs import (
    generate_chair_configs,
    is_chair_required,
    get_chair_label,
    configured_chair_count,
    validate_role_chairs,
    validate_team_structure,
    MAX_CHAIRS,
)
from workforce.chairs.models import Chair, ChairType, TeamRoleDefinition


def _role(chair_types, max_chairs=None):
    return TeamRoleDefinition(
        id="role_x",
        role_name="Broker",
        chairs=[Chair(chair_type=t, order=i) for i, t in enumerate(chair_types, start=1)],
        max_chairs=max_chairs,
    )


class TestChairConfigs:

    def test_ten_configs_only_first_required(self):
        configs = generate_chair_configs()
        assert len(configs) == MAX_CHAIRS == 10
        assert configs[0].required is True
        assert all(c.required is False for c in configs[1:])
        assert [c.id for c in configs] == list(range(1, 11))

    def test_labels(self):
        configs = generate_chair_configs()
        assert configs[0].label == "Primary Chair"
        assert configs[2].label == "Tertiary Chair"
        assert configs[9].label == "Chair 10"

    def test_is_chair_required(self):
        assert is_chair_required(0) is True
        assert is_chair_required(1) is False
        assert is_chair_required(9) is False

    def test_get_chair_label(self):
        assert get_chair_label(0) == "Primary Chair"
        assert get_chair_label(1) == "Secondary Chair"
        assert get_chair_label(3) == "Chair 4"

    def test_get_chair_label_beyond_list(self):
        assert get_chair_label(10) == "Chair 11"
        assert get_chair_label(14) == "Chair 15"


class TestRoleStructure:

    def test_configured_count_uses_chairs(self):
        assert configured_chair_count(_role([ChairType.PRIMARY, ChairType.SECONDARY])) == 2

    def test_configured_count_prefers_max_chairs(self):
        assert configured_chair_count(_role([ChairType.PRIMARY], max_chairs=4)) == 4

    def test_valid_role(self):
        assert validate_role_chairs(_role([ChairType.PRIMARY, ChairType.SECONDARY])) == []

    def test_missing_primary(self):
        issues = validate_role_chairs(_role([ChairType.SECONDARY]))
        assert len(issues) == 1
        assert "Primary Chair" in issues[0].message

    def test_too_many_chairs(self):
        issues = validate_role_chairs(_role([ChairType.PRIMARY] + [ChairType.SECONDARY] * 10))
        assert any("maximum" in issue.message for issue in issues)

    def test_duplicate_order(self):
        role = TeamRoleDefinition(
            id="role_x",
            role_name="Broker",
            chairs=[Chair(chair_type=ChairType.PRIMARY, order=1), Chair(chair_type=ChairType.SECONDARY, order=1)],
        )
        issues = validate_role_chairs(role)
        assert [i.message for i in issues] == ["Broker has chairs sharing the same order"]

    def test_team_structure(self, teams_with_roles):
        assert validate_team_structure(teams_with_roles[0]) == []
