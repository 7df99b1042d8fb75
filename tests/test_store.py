"""Tests for the SQLAlchemy assignment store."""

import pytest
from sqlalchemy.exc import IntegrityError

from workforce.capacity.models import TeamMember, Assignment
from workforce.capacity.service import CapacityLedger
from workforce.db import AssignmentStore
from workforce.db.init_db import seed_store
from workforce.reassignment import propose_reassignment, complete_reassignment
from workforce.reassignment.models import LeaverClient, LeaverEmployee, ReassignmentStatus


def _fill(store, ledger):
    for member in ledger.members():
        store.save_member(member)
    for assignment in ledger.all_assignments():
        store.save_assignment(assignment)
    return store


@pytest.fixture
def store(db, ledger):
    return _fill(AssignmentStore(db), ledger)


def test_load_ledger_recomputes_capacity(store):
    rebuilt = store.load_ledger()
    assert rebuilt.get_member("emp_a").current_capacity == 60
    assert rebuilt.get_member("emp_b").current_capacity == 80
    assert rebuilt.get_member("emp_b").location == "Leeds"


def test_save_member_updates_existing(store, ledger):
    store.save_member(ledger.get_member("emp_c").model_copy(update={"location": "York"}))
    assert store.load_ledger().get_member("emp_c").location == "York"


def test_deactivate_assignment(store):
    assert store.deactivate_assignment("asg-c1") is True
    assert store.deactivate_assignment("asg-c1") is False
    assert store.load_ledger().get_member("emp_c").current_capacity == 0


def test_deactivate_several_assignments(store):
    assert store.deactivate_assignments(["asg-b1", "asg-b2", "asg-missing"]) == 2
    assert store.deactivate_assignments([]) == 0
    assert store.load_ledger().get_member("emp_b").current_capacity == 0


def test_record_completion(store, leaver, client_30, ledger):
    draft = propose_reassignment(client_30, leaver, ledger.get_member("emp_b"), work_item_id="wi_1").reassignment
    outcome = complete_reassignment(draft, client_30, ledger)

    record = store.record_completion(outcome)
    assert record.reassignment_id == draft.id
    assert record.status == "Completed"
    assert record.record["to_team_member_id"] == "emp_b"

    rebuilt = store.load_ledger()
    assert rebuilt.get_member("emp_a").current_capacity == 30
    assert rebuilt.get_member("emp_b").current_capacity == 110
    assert [r.reassignment_id for r in store.get_reassignments("wi_1")] == [draft.id]


def test_load_reassignments(store, leaver, client_30, ledger):
    draft = propose_reassignment(client_30, leaver, ledger.get_member("emp_c")).reassignment
    store.record_completion(complete_reassignment(draft, client_30, ledger))

    [restored] = store.load_reassignments()
    assert restored.id == draft.id
    assert restored.status == ReassignmentStatus.COMPLETED
    assert restored.to_team_member_id == "emp_c"


def test_completion_deactivates_only_the_moved_row(db):
    """A source holding the same client on two work items keeps the other row."""
    ledger = CapacityLedger(
        members=[TeamMember(id="a", name="Ann Ames"), TeamMember(id="b", name="Ben Bell")],
        assignments=[
            Assignment(assignment_id="a-1", team_member_id="a", client_id="cl", work_item_id="wi_1",
                       workload_percentage=20, assigned_date="2026-10-01"),
            Assignment(assignment_id="a-2", team_member_id="a", client_id="cl", work_item_id="wi_2",
                       workload_percentage=20, assigned_date="2026-10-01"),
        ],
    )
    store = _fill(AssignmentStore(db), ledger)
    client = LeaverClient(id="cl", current_owner="a", capacity_requirement=20)
    draft = propose_reassignment(client, LeaverEmployee(id="a", name="Ann Ames"), ledger.get_member("b")).reassignment

    outcome = complete_reassignment(draft, client, ledger)
    store.record_completion(outcome)

    rebuilt = store.load_ledger()
    assert ledger.get_member("a").current_capacity == 20
    assert rebuilt.get_member("a").current_capacity == 20
    assert rebuilt.get_member("b").current_capacity == 20
    assert [a.assignment_id for a in store.active_assignments("a")] == ["a-2"]


def test_draft_cannot_be_recorded(store, leaver, client_30, ledger):
    outcome = propose_reassignment(client_30, leaver, ledger.get_member("emp_b"))
    with pytest.raises(ValueError):
        store.record_completion(outcome)
    assert store.get_reassignments() == []


def test_completion_already_recorded_is_rejected(store, leaver, client_30, ledger):
    draft = propose_reassignment(client_30, leaver, ledger.get_member("emp_b")).reassignment
    outcome = complete_reassignment(draft, client_30, ledger)
    store.record_completion(outcome)

    with pytest.raises(ValueError):
        store.record_completion(outcome)
    assert len(store.get_reassignments()) == 1


def test_failed_completion_rolls_back(store, leaver, client_30, ledger):
    first = complete_reassignment(
        propose_reassignment(client_30, leaver, ledger.get_member("emp_b")).reassignment, client_30, ledger
    )
    store.record_completion(first)

    other = LeaverClient(id="cl_other", current_owner="emp_a", capacity_requirement=30)
    draft = propose_reassignment(other, leaver, ledger.get_member("emp_c")).reassignment
    second = complete_reassignment(draft, other, ledger)
    clashing = second.model_copy(update={
        "reassignment": second.reassignment.model_copy(update={"id": first.reassignment.id})
    })

    with pytest.raises(IntegrityError):
        store.record_completion(clashing)

    rebuilt = store.load_ledger()
    assert len(store.get_reassignments()) == 1
    assert rebuilt.get_member("emp_a").current_capacity == 30
    assert rebuilt.get_member("emp_c").current_capacity == 10


def test_seed_store_only_once(db):
    store = AssignmentStore(db)
    assert seed_store(store) is True
    assert seed_store(store) is False
    assert store.load_ledger().get_member("tm_005").current_capacity == 85
