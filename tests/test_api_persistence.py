"""API tests with the assignment store enabled."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from workforce import main
from workforce.db import AssignmentStore, ReassignmentRecord, get_db
from workforce.main import app, get_state, EngineState


class _Host:
    """Engine state backed by a store; restart() rebuilds it the way startup does."""

    def __init__(self, store):
        self.store = store
        self.engine = EngineState.from_store(store)

    def restart(self):
        self.engine = EngineState.from_store(self.store)


@pytest.fixture
def host(db, monkeypatch):
    monkeypatch.setattr(main, "PERSISTENCE_ENABLED", True)
    current = _Host(AssignmentStore(db))
    app.dependency_overrides[get_state] = lambda: current.engine
    app.dependency_overrides[get_db] = lambda: db
    try:
        yield current
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(host):
    return TestClient(app)


def _move_cl_001(client, to_member="tm_003"):
    draft = client.post("/reassignments/propose", json={
        "client_id": "cl_001",
        "from_employee_id": "tm_001",
        "to_team_member_id": to_member,
    }).json()["reassignment"]
    return client.post("/reassignments/complete", json={"reassignment_id": draft["id"]})


def _capacity(client, member_id):
    return client.get(f"/ledger/members/{member_id}").json()["member"]["current_capacity"]


class TestRestart:

    def test_completed_reassignment_survives_restart(self, host, client):
        assert _move_cl_001(client).status_code == 200
        host.restart()

        assert _capacity(client, "tm_003") == 60
        assert _capacity(client, "tm_001") == 35
        assert host.store.load_ledger().get_member("tm_003").current_capacity == 60

        leaver = client.get("/leaver").json()
        moved = next(c for c in leaver["clients"] if c["id"] == "cl_001")
        assert moved["current_owner"] == "tm_003"
        assert leaver["progress"]["assigned_clients"] == 1
        assert [r["status"] for r in leaver["reassignments"]] == ["Completed"]

    def test_moved_client_cannot_be_proposed_again(self, host, client):
        _move_cl_001(client)
        host.restart()

        response = client.post("/reassignments/propose", json={
            "client_id": "cl_001",
            "from_employee_id": "tm_001",
            "to_team_member_id": "tm_004",
        })
        assert response.status_code == 409
        assert response.json()["detail"]["kind"] == "ownership_mismatch"
        assert host.store.load_ledger().get_member("tm_004").current_capacity == 20

    def test_added_member_survives_restart(self, host, client):
        member_id = client.post("/teams/team_gl/members", json={"employee_id": "wd_102"}).json()["member_id"]
        host.restart()

        assert _capacity(client, member_id) == 0
        again = client.post("/teams/team_pra/members", json={"employee_id": "wd_102"})
        assert again.status_code == 409

    def test_get_state_loads_from_store(self, db_engine, db, monkeypatch):
        store = AssignmentStore(db)
        EngineState.from_store(store)
        store.deactivate_assignment("asg-seed-004")

        monkeypatch.setattr(main, "PERSISTENCE_ENABLED", True)
        monkeypatch.setattr(main, "state", None)
        monkeypatch.setattr(main, "init_db", lambda: None)
        monkeypatch.setattr(main, "get_session", sessionmaker(bind=db_engine))

        engine = main.get_state()
        assert engine.ledger.get_member("tm_002").current_capacity == 30


class TestStagedCommits:

    def test_store_failure_leaves_state_unchanged(self, host, client, db):
        draft = client.post("/reassignments/propose", json={
            "client_id": "cl_001",
            "from_employee_id": "tm_001",
            "to_team_member_id": "tm_003",
        }).json()["reassignment"]
        db.add(ReassignmentRecord(
            reassignment_id=draft["id"],
            client_id="cl_001",
            from_employee_id="tm_001",
            to_team_member_id="tm_003",
            capacity_requirement=25,
            new_capacity_percent=60,
            status="Completed",
            record={},
        ))
        db.commit()

        response = client.post("/reassignments/complete", json={"reassignment_id": draft["id"]})
        assert response.status_code == 503

        assert _capacity(client, "tm_001") == 60
        assert _capacity(client, "tm_003") == 35
        assert host.engine.reassignments[draft["id"]].status == "Draft"
        assert host.store.load_ledger().get_member("tm_001").current_capacity == 60

    def test_cancel_releases_stored_assignments(self, host, client):
        outcome = host.engine.ledger.assign("tm_003", 10, work_item_id="1001234567")
        host.store.save_assignment(outcome.assignment)
        assert host.store.load_ledger().get_member("tm_003").current_capacity == 45

        response = client.post("/work-items/1001234567/cancel", json={"notes": "Client has withdrawn the request"})
        assert response.status_code == 200
        assert _capacity(client, "tm_003") == 35
        assert host.store.load_ledger().get_member("tm_003").current_capacity == 35

        host.restart()
        assert _capacity(client, "tm_003") == 35
