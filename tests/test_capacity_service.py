"""Tests for the CapacityLedger service."""

import pytest

from workforce.capacity.models import TeamMember, Assignment
from workforce.capacity.service import CapacityLedger
from workforce.errors import ErrorKind


def _assert_sums_match(ledger):
    for member in ledger.members():
        total = sum(a.workload_percentage for a in ledger.assignments_for(member.id))
        assert member.current_capacity == total


class TestLedgerConstruction:

    def test_capacity_derived_from_assignments(self, ledger):
        assert ledger.get_member("emp_a").current_capacity == 60
        assert ledger.get_member("emp_b").current_capacity == 80
        _assert_sums_match(ledger)

    def test_stored_capacity_is_ignored(self):
        member = TeamMember(id="m1", name="M", current_capacity=75)
        ledger = CapacityLedger(members=[member])
        assert ledger.get_member("m1").current_capacity == 0

    def test_unknown_member_in_assignment_raises(self):
        orphan = Assignment(assignment_id="x", team_member_id="ghost", workload_percentage=10, assigned_date="2026-01-01")
        with pytest.raises(ValueError):
            CapacityLedger(members=[], assignments=[orphan])

    def test_members_filtered_by_team(self, ledger):
        ledger.add_member(TeamMember(id="emp_z", name="Zed", team_id="team_9"))
        assert [m.id for m in ledger.members("team_9")] == ["emp_z"]

    def test_add_existing_member_raises(self, ledger):
        with pytest.raises(ValueError):
            ledger.add_member(TeamMember(id="emp_a", name="Alex"))


class TestAssign:

    def test_assign_updates_capacity(self, ledger):
        outcome = ledger.assign("emp_c", 20, client_id="cl_new", work_item_id="wi_1")
        assert outcome.success is True
        assert outcome.member.current_capacity == 30
        assert outcome.assignment.client_id == "cl_new"
        _assert_sums_match(ledger)

    def test_assign_rejects_policy_violation(self, ledger):
        outcome = ledger.assign("emp_c", 45)
        assert outcome.success is False
        assert outcome.error.kind == ErrorKind.VALIDATION
        assert ledger.get_member("emp_c").current_capacity == 10

    def test_over_capacity_needs_confirmation(self, ledger):
        outcome = ledger.assign("emp_b", 30)
        assert outcome.success is False
        assert outcome.error is None
        assert outcome.validation.requires_confirmation is True
        assert ledger.get_member("emp_b").current_capacity == 80

        confirmed = ledger.assign("emp_b", 30, confirm_over_capacity=True)
        assert confirmed.success is True
        assert confirmed.member.current_capacity == 110

    def test_assign_unknown_member(self, ledger):
        outcome = ledger.assign("nobody", 10)
        assert outcome.error.kind == ErrorKind.IDENTITY_CONFLICT

    def test_unassign(self, ledger):
        outcome = ledger.unassign("asg-b1")
        assert outcome.success is True
        assert ledger.get_member("emp_b").current_capacity == 40
        assert ledger.unassign("asg-b1").success is False


class TestCommitTransfer:

    def test_moves_workload(self, ledger):
        result = ledger.commit_transfer("emp_a", "emp_b", "cl_30")
        assert result.success is True
        assert result.source.current_capacity == 30
        assert result.target.current_capacity == 110
        assert ledger.client_assignment("emp_a", "cl_30") is None
        assert ledger.client_assignment("emp_b", "cl_30").workload_percentage == 30
        _assert_sums_match(ledger)

    def test_self_transfer_rejected(self, ledger):
        result = ledger.commit_transfer("emp_a", "emp_a", "cl_30")
        assert result.error.kind == ErrorKind.IDENTITY_CONFLICT

    def test_unknown_target_leaves_ledger_unchanged(self, ledger):
        before = [m.model_dump() for m in ledger.members()]
        result = ledger.commit_transfer("emp_a", "ghost", "cl_30")
        assert result.error.kind == ErrorKind.IDENTITY_CONFLICT
        assert [m.model_dump() for m in ledger.members()] == before

    def test_client_not_on_source(self, ledger):
        result = ledger.commit_transfer("emp_b", "emp_c", "cl_30")
        assert result.error.kind == ErrorKind.OWNERSHIP_MISMATCH
        assert ledger.get_member("emp_b").current_capacity == 80

    def test_workload_mismatch_is_stale(self, ledger):
        result = ledger.commit_transfer("emp_a", "emp_b", "cl_30", workload_percentage=25)
        assert result.error.kind == ErrorKind.OWNERSHIP_MISMATCH
        assert ledger.get_member("emp_a").current_capacity == 60

    def test_rebuild_from_records(self, ledger):
        ledger.commit_transfer("emp_a", "emp_c", "cl_30")
        rebuilt = CapacityLedger.from_records(ledger.members(), ledger.all_assignments())
        for member in ledger.members():
            assert rebuilt.get_member(member.id).current_capacity == member.current_capacity


class TestTransferCandidate:

    @pytest.fixture
    def split_ledger(self):
        members = [TeamMember(id="a", name="Ann Ames"), TeamMember(id="b", name="Ben Bell")]
        assignments = [
            Assignment(assignment_id="a-10", team_member_id="a", client_id="cl", workload_percentage=10,
                       assigned_date="2026-10-01"),
            Assignment(assignment_id="a-20", team_member_id="a", client_id="cl", workload_percentage=20,
                       assigned_date="2026-10-01"),
        ]
        return CapacityLedger(members=members, assignments=assignments)

    def test_reports_removed_assignment(self, ledger):
        result = ledger.commit_transfer("emp_a", "emp_c", "cl_30")
        assert result.removed_assignment.assignment_id == "asg-a1"

    def test_moves_row_matching_workload(self, split_ledger):
        result = split_ledger.commit_transfer("a", "b", "cl", workload_percentage=20)
        assert result.success is True
        assert result.removed_assignment.assignment_id == "a-20"
        assert [x.assignment_id for x in split_ledger.assignments_for("a")] == ["a-10"]
        assert split_ledger.get_member("a").current_capacity == 10

    def test_without_workload_moves_first_row(self, split_ledger):
        result = split_ledger.commit_transfer("a", "b", "cl")
        assert result.removed_assignment.assignment_id == "a-10"


def test_copy_is_independent(ledger):
    staged = ledger.copy()
    staged.commit_transfer("emp_a", "emp_b", "cl_30")
    assert staged.get_member("emp_b").current_capacity == 110
    assert ledger.get_member("emp_b").current_capacity == 80
    assert ledger.client_assignment("emp_a", "cl_30") is not None
